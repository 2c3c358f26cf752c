from __future__ import annotations

import logging
import os
from typing import List, Optional

from pybuild.map import (
    DEFAULT_LIMITS,
    HEADER_FORMAT,
    SECTOR_FORMAT,
    SPRITE_FORMAT,
    WALL_FORMAT,
    NO_INDEX,
    MapLimits,
    version_name,
)
from pybuild.map.errors import AllocationTooLarge, IOUnavailable
from pybuild.util import ByteCursor

log = logging.getLogger(__name__)


class MapFile:

    # Constructor
    def __init__(self):
        self.is_parsed = False
        self.filename = None
        self.header = None
        self.player = None
        self.sector_start = NO_INDEX
        self.sectors: List[MapSector] = []
        self.walls: List[MapWall] = []
        self.sprites: List[MapSprite] = []

    # Main methods.

    @classmethod
    def parse(cls, source, limits: MapLimits = DEFAULT_LIMITS):
        """Decode ``source`` into a :class:`MapFile` instance.

        ``source`` may be a path-like object, an opened binary file handle or
        a ``bytes`` buffer.  The whole file is read into memory first; record
        boundaries are only known from the three array counts so decoding is
        strictly sequential.  Either a fully populated map is returned or an
        exception from :mod:`pybuild.map.errors` is raised.
        """

        self = cls()

        if isinstance(source, (bytes, bytearray, memoryview)):
            data = bytes(source)
        elif isinstance(source, (str, os.PathLike)):
            path = os.fspath(source)
            self.filename = os.path.basename(path)
            try:
                with open(path, "rb") as stream:
                    data = stream.read()
            except OSError as exc:
                raise IOUnavailable(path, exc.strerror or str(exc)) from exc
        else:
            try:
                self.filename = os.path.basename(source.name)
            except (AttributeError, TypeError):
                self.filename = None
            try:
                data = source.read()
            except OSError as exc:
                raise IOUnavailable(self.filename or "<stream>", exc.strerror or str(exc)) from exc

        cursor = ByteCursor(data)

        # Header and player start
        self.header = MapHeader(self)
        self.header.parse(cursor)
        self.player = self.header.player
        self.sector_start = self.header.sector_start

        # Sectors
        count = self._read_count(cursor, "sector", limits.sectors)
        self.sectors = self._parse_records(cursor, MapSector, count)

        # Walls
        count = self._read_count(cursor, "wall", limits.walls)
        self.walls = self._parse_records(cursor, MapWall, count)

        # Sprites
        count = self._read_count(cursor, "sprite", limits.sprites)
        self.sprites = self._parse_records(cursor, MapSprite, count)

        if cursor.remaining():
            log.debug("%s: ignoring %d trailing bytes", self.filename or "<buffer>", cursor.remaining())

        log.debug(
            "%s: version %d, %d sectors, %d walls, %d sprites",
            self.filename or "<buffer>",
            self.header.version,
            len(self.sectors),
            len(self.walls),
            len(self.sprites),
        )

        self.is_parsed = True
        return self

    def _read_count(self, cursor, kind, limit):
        count = cursor.read_u16(f"{kind} count")
        if count > limit:
            raise AllocationTooLarge(kind, count, limit)
        return count

    def _parse_records(self, cursor, record_class, count):
        records = []
        for i in range(count):
            record = record_class(self)
            record.index = i
            record.parse(cursor)
            records.append(record)
        return records

    # Accessors.

    @property
    def version(self) -> int:
        return self.header.version

    @property
    def sector_count(self) -> int:
        return len(self.sectors)

    @property
    def wall_count(self) -> int:
        return len(self.walls)

    @property
    def sprite_count(self) -> int:
        return len(self.sprites)

    def version_name(self) -> Optional[str]:
        return version_name(self.header.version)

    def sector_walls(self, index: int) -> List["MapWall"]:
        """Return the walls owned by sector ``index``.

        Out of range sectors, and sectors whose wall range does not fit the
        wall array, own no walls.
        """

        if not 0 <= index < len(self.sectors):
            return []
        sector = self.sectors[index]
        start, end = sector.wall_start, sector.wall_end
        if start < 0 or end > len(self.walls) or end < start:
            return []
        return self.walls[start:end]


class MapPlayer:

    def __init__(self, mapfile):
        self.mapfile = mapfile
        self.x = 0
        self.y = 0
        self.z = 0
        self.angle = 0

    @property
    def position(self):
        return (self.x, self.y, self.z)


class MapHeader:

    def __init__(self, mapfile):
        self.mapfile = mapfile
        self.player = MapPlayer(mapfile)

    def parse(self, cursor):
        (self.version,
         self.player.x,
         self.player.y,
         self.player.z,
         self.player.angle,
         self.sector_start) = cursor.unpack(HEADER_FORMAT, "header")


class SectorPlane:
    """Ceiling or floor of a sector."""

    def __init__(self):
        self.height = 0
        self.stat = 0
        self.picture = 0
        self.slope = 0
        self.shade = 0
        self.palette = 0
        self.panning = (0, 0)


class MapSector:

    def __init__(self, mapfile):
        self.mapfile = mapfile
        self.index = None
        self.ceiling = SectorPlane()
        self.floor = SectorPlane()

    def parse(self, cursor):
        c, f = self.ceiling, self.floor
        (self.wall_start,
         self.wall_count,
         c.height,
         f.height,
         c.stat,
         f.stat,
         c.picture,
         c.slope,
         c.shade,
         c.palette,
         c_xpan,
         c_ypan,
         f.picture,
         f.slope,
         f.shade,
         f.palette,
         f_xpan,
         f_ypan,
         self.visibility,
         self.filler,
         self.lotag,
         self.hitag,
         self.extra) = cursor.unpack(SECTOR_FORMAT, f"sector {self.index}")
        c.panning = (c_xpan, c_ypan)
        f.panning = (f_xpan, f_ypan)

    @property
    def wall_end(self) -> int:
        return self.wall_start + self.wall_count


class MapWall:

    def __init__(self, mapfile):
        self.mapfile = mapfile
        self.index = None

    def parse(self, cursor):
        (self.x,
         self.y,
         self.next_wall_right,
         self.next_wall_left,
         self.next_sector,
         self.stat,
         self.picture,
         self.over_picture,
         self.shade,
         self.pal,
         x_repeat,
         y_repeat,
         x_pan,
         y_pan,
         self.lotag,
         self.hitag,
         self.extra) = cursor.unpack(WALL_FORMAT, f"wall {self.index}")
        self.repeat = (x_repeat, y_repeat)
        self.panning = (x_pan, y_pan)

    @property
    def position(self):
        return (self.x, self.y)

    def is_portal(self) -> bool:
        return self.next_sector != NO_INDEX


class MapSprite:

    def __init__(self, mapfile):
        self.mapfile = mapfile
        self.index = None

    def parse(self, cursor):
        # lotag and hitag are unsigned so the 65534/65535 sentinels survive.
        (self.x,
         self.y,
         self.z,
         self.stat,
         self.picture,
         self.shade,
         self.pal,
         self.clipping_distance,
         self.filler,
         x_repeat,
         y_repeat,
         x_offset,
         y_offset,
         self.sector,
         self.status,
         self.angle,
         self.owner,
         x_vel,
         y_vel,
         z_vel,
         self.lotag,
         self.hitag,
         self.extra) = cursor.unpack(SPRITE_FORMAT, f"sprite {self.index}")
        self.repeat = (x_repeat, y_repeat)
        self.offset = (x_offset, y_offset)
        self.velocity = (x_vel, y_vel, z_vel)

    @property
    def position(self):
        return (self.x, self.y, self.z)
