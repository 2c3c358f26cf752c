"""Gameplay facts derived from the sprites and array sizes of a map.

The rules follow how Duke Nukem 3D interprets a handful of sprites:

* a nuke button (picture 142) with one of the exit lotags, or drawn with the
  secret palette, makes the map finishable in single player;
* player start markers (picture 1405) with lotag 1 are extra cooperative
  spawns, with lotag 0 extra deathmatch spawns.  The local player always
  spawns at the map's own start so the capacity is one more than the count.

Nothing here dereferences an index stored in the file, so the functions are
safe to call on maps that failed structural validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from . import (
    ENGINE_MAX_SECTORS,
    ENGINE_MAX_SPRITES,
    ENGINE_MAX_WALLS,
    LOTAG_COOPERATIVE_START,
    LOTAG_DEATHMATCH_START,
    LOTAG_EXIT_ALTERNATE,
    LOTAG_EXIT_EPISODE,
    LOTAG_EXIT_NORMAL,
    PAL_SECRET_EXIT,
    PICTURE_NUKE_BUTTON,
    PICTURE_PLAYER_START,
)

EXIT_REASONS = {
    LOTAG_EXIT_NORMAL: "nuke button ends the level (lotag 65535)",
    LOTAG_EXIT_ALTERNATE: "nuke button ends the level through the alternate exit (lotag 65534)",
    LOTAG_EXIT_EPISODE: "nuke button ends the episode (lotag 32767)",
}
SECRET_EXIT_REASON = "secret exit nuke button (pal 14)"


@dataclass(frozen=True)
class LevelExit:
    """The sprite that makes a map playable in single player."""

    sprite_index: int
    lotag: Optional[int]
    pal: Optional[int]

    @property
    def is_secret(self) -> bool:
        return self.lotag is None

    @property
    def reason(self) -> str:
        if self.lotag is None:
            return SECRET_EXIT_REASON
        return EXIT_REASONS[self.lotag]


@dataclass(frozen=True)
class PlayerMode:
    """Extra player starts found for one multiplayer mode."""

    starts: int

    @property
    def supported(self) -> bool:
        return self.starts > 0

    @property
    def capacity(self) -> Optional[int]:
        if not self.starts:
            return None
        return self.starts + 1


@dataclass(frozen=True)
class GameplayFacts:
    level_exit: Optional[LevelExit]
    cooperative: PlayerMode
    deathmatch: PlayerMode
    engine_compatible: bool

    @property
    def single_player(self) -> bool:
        return self.level_exit is not None


def find_level_exit(sprites: Iterable) -> Optional[LevelExit]:
    """Return the first nuke button that ends the level, or ``None``."""

    for i, sprite in enumerate(sprites):
        if sprite.picture != PICTURE_NUKE_BUTTON:
            continue
        if sprite.lotag in EXIT_REASONS:
            return LevelExit(i, sprite.lotag, None)
        if sprite.pal == PAL_SECRET_EXIT:
            return LevelExit(i, None, sprite.pal)
    return None


def count_player_starts(sprites: Iterable, lotag: int) -> int:
    return sum(
        1 for s in sprites if s.picture == PICTURE_PLAYER_START and s.lotag == lotag
    )


def cooperative_mode(sprites: Iterable) -> PlayerMode:
    return PlayerMode(count_player_starts(sprites, LOTAG_COOPERATIVE_START))


def deathmatch_mode(sprites: Iterable) -> PlayerMode:
    return PlayerMode(count_player_starts(sprites, LOTAG_DEATHMATCH_START))


def is_engine_compatible(mapfile) -> bool:
    """Return ``True`` if the map fits the unmodified engine's arrays."""

    return (
        len(mapfile.sectors) <= ENGINE_MAX_SECTORS
        and len(mapfile.walls) <= ENGINE_MAX_WALLS
        and len(mapfile.sprites) <= ENGINE_MAX_SPRITES
    )


def classify(mapfile) -> GameplayFacts:
    sprites = mapfile.sprites
    return GameplayFacts(
        level_exit=find_level_exit(sprites),
        cooperative=cooperative_mode(sprites),
        deathmatch=deathmatch_mode(sprites),
        engine_compatible=is_engine_compatible(mapfile),
    )
