"""Constants and helpers for Build engine map (``.map``) files.

A map file has no magic signature.  It starts directly with a 32-bit format
version followed by the player start, then three counted arrays of fixed-size
sector, wall and sprite records.  Version 7 is the layout shipped with Duke
Nukem 3D, Shadow Warrior and Redneck Rampage; version 8 keeps the same
records and only raises the array limits.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

KNOWN_VERSIONS = {
    7: "Build v7 (Duke Nukem 3D, Shadow Warrior, Redneck Rampage)",
    8: "Build v8 (EDuke32 extended limits)",
}

# Record layouts, little-endian and densely packed.
HEADER_FORMAT = "<i3ihh"
SECTOR_FORMAT = "<2h2i2H2hb3B2hb3B2B3h"
WALL_FORMAT = "<2i3hH2hb5B3h"
SPRITE_FORMAT = "<3iHhb3B2B2b4h3h2Hh"

HEADER_SIZE = 20
SECTOR_SIZE = 40
WALL_SIZE = 32
SPRITE_SIZE = 44

NO_INDEX = -1

# Sprite picture ids with gameplay meaning.
PICTURE_NUKE_BUTTON = 142
PICTURE_PLAYER_START = 1405

# Nuke button lotag values that end the level.
LOTAG_EXIT_NORMAL = 65535
LOTAG_EXIT_ALTERNATE = 65534
LOTAG_EXIT_EPISODE = 32767

# A nuke button drawn with this palette is the secret exit.
PAL_SECRET_EXIT = 14

# Player start lotags.
LOTAG_COOPERATIVE_START = 1
LOTAG_DEATHMATCH_START = 0

# Array limits of the original unmodified engine binary (inclusive).
ENGINE_MAX_SECTORS = 1024
ENGINE_MAX_WALLS = 8192
ENGINE_MAX_SPRITES = 4096


class MapLimits(NamedTuple):
    """Largest array sizes the decoder will accept before allocating."""

    sectors: int = 4096
    walls: int = 16384
    sprites: int = 16384


DEFAULT_LIMITS = MapLimits()


def version_name(version: int) -> Optional[str]:
    """Return the human name of ``version`` or ``None`` if it is unrecognised."""

    return KNOWN_VERSIONS.get(version)
