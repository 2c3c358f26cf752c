from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

from pybuild.map import NO_INDEX
from pybuild.map.mapfile import MapFile


@dataclass(frozen=True)
class StructuralViolation:
    """One index field that does not point where the format allows."""

    check: str
    kind: str
    index: Optional[int]
    field: str
    value: int
    message: str

    def __str__(self) -> str:
        return f"[{self.check}] {self.message}"


def _valid(value: int, count: int) -> bool:
    return 0 <= value < count


def validate_structure(mapfile: MapFile, allow_unsectored_sprites: bool = True) -> List[StructuralViolation]:
    """Return every structural problem in ``mapfile``, in check order."""

    errors: List[StructuralViolation] = []

    sector_count = len(mapfile.sectors)
    wall_count = len(mapfile.walls)
    sprite_count = len(mapfile.sprites)

    # ----------------------- Sectors -----------------------
    for i, sector in enumerate(mapfile.sectors):
        end = sector.wall_end
        if sector.wall_start < 0 or end > wall_count:
            errors.append(StructuralViolation(
                "sector.walls", "sector", i, "wall_start", sector.wall_start,
                f"Sector[{i}] walls [{sector.wall_start}, {end}) outside 0..{wall_count}",
            ))

    # ------------------------ Walls ------------------------
    for i, wall in enumerate(mapfile.walls):
        for field in ("next_wall_right", "next_wall_left"):
            value = getattr(wall, field)
            if value != NO_INDEX and not _valid(value, wall_count):
                errors.append(StructuralViolation(
                    f"wall.{field}", "wall", i, field, value,
                    f"Wall[{i}].{field} {value} out of range ({wall_count} walls)",
                ))
        if wall.next_sector != NO_INDEX and not _valid(wall.next_sector, sector_count):
            errors.append(StructuralViolation(
                "wall.next_sector", "wall", i, "next_sector", wall.next_sector,
                f"Wall[{i}].next_sector {wall.next_sector} out of range ({sector_count} sectors)",
            ))

    # ----------------------- Sprites -----------------------
    for i, sprite in enumerate(mapfile.sprites):
        if sprite.sector == NO_INDEX:
            if not allow_unsectored_sprites:
                errors.append(StructuralViolation(
                    "sprite.sector", "sprite", i, "sector", sprite.sector,
                    f"Sprite[{i}] is not in any sector",
                ))
        elif not _valid(sprite.sector, sector_count):
            errors.append(StructuralViolation(
                "sprite.sector", "sprite", i, "sector", sprite.sector,
                f"Sprite[{i}].sector {sprite.sector} out of range ({sector_count} sectors)",
            ))
        if sprite.owner != NO_INDEX and not _valid(sprite.owner, sprite_count):
            errors.append(StructuralViolation(
                "sprite.owner", "sprite", i, "owner", sprite.owner,
                f"Sprite[{i}].owner {sprite.owner} out of range ({sprite_count} sprites)",
            ))

    # ------------------------- Map -------------------------
    if mapfile.sector_start != NO_INDEX and not _valid(mapfile.sector_start, sector_count):
        errors.append(StructuralViolation(
            "map.sector_start", "map", None, "sector_start", mapfile.sector_start,
            f"Player start sector {mapfile.sector_start} out of range ({sector_count} sectors)",
        ))

    return errors


def validate_structure_file(path, allow_unsectored_sprites: bool = True) -> List[StructuralViolation]:
    mapfile = MapFile.parse(os.fsdecode(os.fspath(path)))
    return validate_structure(mapfile, allow_unsectored_sprites)
