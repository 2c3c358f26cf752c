import pytest

from _mapdata import build_map, sector, simple_map, sprite, square_room
from pybuild.map import ENGINE_MAX_SECTORS, ENGINE_MAX_SPRITES, ENGINE_MAX_WALLS
from pybuild.map.gameplay import (
    SECRET_EXIT_REASON,
    classify,
    cooperative_mode,
    deathmatch_mode,
    find_level_exit,
    is_engine_compatible,
)
from pybuild.map.mapfile import MapFile


def parse(sprites, **kwargs):
    return MapFile.parse(simple_map(sprites, **kwargs))


@pytest.mark.parametrize("lotag", [65535, 65534, 32767])
def test_level_exit_lotags(lotag):
    m = parse([sprite(picture=1), sprite(picture=142, lotag=lotag)])
    found = find_level_exit(m.sprites)
    assert found.sprite_index == 1
    assert found.lotag == lotag
    assert not found.is_secret
    assert str(lotag) in found.reason


def test_secret_exit_palette():
    found = find_level_exit(parse([sprite(picture=142, pal=14)]).sprites)
    assert found.is_secret
    assert found.pal == 14
    assert found.reason == SECRET_EXIT_REASON


def test_exit_reasons_are_distinct():
    reasons = {
        find_level_exit(parse([sprite(picture=142, lotag=t)]).sprites).reason
        for t in (65535, 65534, 32767)
    }
    reasons.add(find_level_exit(parse([sprite(picture=142, pal=14)]).sprites).reason)
    assert len(reasons) == 4


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(picture=142, lotag=0),
        dict(picture=142, lotag=65533, pal=13),
        dict(picture=142, lotag=1),
        dict(picture=141, lotag=65535),
        dict(picture=143, pal=14),
    ],
)
def test_no_level_exit(kwargs):
    assert find_level_exit(parse([sprite(**kwargs)]).sprites) is None


def test_first_match_wins():
    m = parse([
        sprite(picture=142, lotag=5),
        sprite(picture=142, pal=14),
        sprite(picture=142, lotag=65535),
    ])
    found = find_level_exit(m.sprites)
    assert found.sprite_index == 1
    assert found.is_secret


def test_lotag_checked_before_palette():
    found = find_level_exit(parse([sprite(picture=142, lotag=32767, pal=14)]).sprites)
    assert found.lotag == 32767
    assert not found.is_secret


def test_player_modes():
    m = parse(
        [sprite(picture=1405, lotag=1)] * 3
        + [sprite(picture=1405, lotag=0)] * 7
        + [sprite(picture=1405, lotag=2), sprite(picture=1, lotag=1)]
    )
    coop = cooperative_mode(m.sprites)
    dm = deathmatch_mode(m.sprites)
    assert coop.starts == 3 and coop.supported and coop.capacity == 4
    assert dm.starts == 7 and dm.supported and dm.capacity == 8


def test_player_modes_not_supported():
    m = parse([sprite(picture=1405, lotag=5)])
    coop = cooperative_mode(m.sprites)
    assert coop.starts == 0
    assert not coop.supported
    assert coop.capacity is None
    assert not deathmatch_mode(m.sprites).supported


class _Counts:
    def __init__(self, sectors, walls, sprites):
        self.sectors = [None] * sectors
        self.walls = [None] * walls
        self.sprites = [None] * sprites


@pytest.mark.parametrize(
    "counts, compatible",
    [
        ((ENGINE_MAX_SECTORS, ENGINE_MAX_WALLS, ENGINE_MAX_SPRITES), True),
        ((ENGINE_MAX_SECTORS + 1, 0, 0), False),
        ((0, ENGINE_MAX_WALLS + 1, 0), False),
        ((0, 0, ENGINE_MAX_SPRITES + 1), False),
        ((ENGINE_MAX_SECTORS, 0, 0), True),
        ((0, ENGINE_MAX_WALLS, 0), True),
        ((0, 0, ENGINE_MAX_SPRITES), True),
        ((0, 0, 0), True),
    ],
)
def test_engine_limits(counts, compatible):
    assert is_engine_compatible(_Counts(*counts)) is compatible


def test_engine_limits_from_decoded_map():
    sprites = [sprite()] * (ENGINE_MAX_SPRITES + 1)
    m = MapFile.parse(build_map([sector(0, 4)], square_room(), sprites))
    assert not is_engine_compatible(m)
    m = MapFile.parse(build_map([sector(0, 4)], square_room(), sprites[:-1]))
    assert is_engine_compatible(m)


def test_classify_ignores_bad_indices():
    m = parse([
        sprite(picture=142, lotag=65535, sector=300, owner=900),
        sprite(picture=1405, lotag=1, sector=-9),
    ], sector_start=77)
    facts = classify(m)
    assert facts.single_player
    assert facts.cooperative.capacity == 2
    assert not facts.deathmatch.supported
    assert facts.engine_compatible


def test_classify_is_deterministic():
    data = simple_map([sprite(picture=142, pal=14), sprite(picture=1405, lotag=0)])
    assert classify(MapFile.parse(data)) == classify(MapFile.parse(data))
