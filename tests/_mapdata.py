"""Helpers that assemble map file bytes for the tests."""

import struct

from pybuild.map import HEADER_FORMAT, SECTOR_FORMAT, SPRITE_FORMAT, WALL_FORMAT


def sector(wall_start=0, wall_count=0, lotag=0, hitag=0, extra=-1, ceiling_z=-8192, floor_z=8192):
    return struct.pack(
        SECTOR_FORMAT,
        wall_start, wall_count,
        ceiling_z, floor_z,
        0, 0,
        1, 0, 0, 0, 0, 0,
        2, 0, 0, 0, 0, 0,
        0, 0,
        lotag, hitag, extra,
    )


def wall(x=0, y=0, right=-1, left=-1, next_sector=-1, picture=0, lotag=0):
    return struct.pack(
        WALL_FORMAT,
        x, y,
        right, left, next_sector,
        0, picture, 0,
        0, 0, 8, 8, 0, 0,
        lotag, 0, -1,
    )


def sprite(picture=0, lotag=0, hitag=0, pal=0, sector=0, owner=-1, x=0, y=0, z=0):
    return struct.pack(
        SPRITE_FORMAT,
        x, y, z,
        0, picture,
        0, pal, 32, 0,
        64, 64,
        0, 0,
        sector, 0, 512, owner,
        0, 0, 0,
        lotag, hitag, -1,
    )


def square_room(start=0):
    """Four walls forming a closed loop beginning at index ``start``."""
    corners = [(0, 0), (1024, 0), (1024, 1024), (0, 1024)]
    return [
        wall(x, y, right=start + (i + 1) % 4)
        for i, (x, y) in enumerate(corners)
    ]


def build_map(sectors=(), walls=(), sprites=(), version=7, sector_start=0,
              player=(512, 512, 0), angle=1536, counts=None):
    """Return map bytes.  ``counts`` overrides the three declared counts."""
    sectors, walls, sprites = list(sectors), list(walls), list(sprites)
    if counts is None:
        counts = (len(sectors), len(walls), len(sprites))
    data = struct.pack(HEADER_FORMAT, version, *player, angle, sector_start)
    data += struct.pack("<H", counts[0]) + b"".join(sectors)
    data += struct.pack("<H", counts[1]) + b"".join(walls)
    data += struct.pack("<H", counts[2]) + b"".join(sprites)
    return data


def simple_map(sprites=(), **kwargs):
    """One square sector with the given sprites."""
    return build_map([sector(0, 4)], square_room(), sprites, **kwargs)
