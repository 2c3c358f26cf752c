import subprocess
import sys
from pathlib import Path

from _mapdata import simple_map, sprite

SCRIPT = Path(__file__).resolve().parents[1] / "mapinfo.py"


def run(*args):
    return subprocess.run(
        [sys.executable, str(SCRIPT), *map(str, args)],
        capture_output=True,
        text=True,
        cwd=SCRIPT.parent,
    )


def test_mapinfo_success(tmp_path):
    a = tmp_path / "a.map"
    a.write_bytes(simple_map([sprite(picture=1405, lotag=0)]))
    b = tmp_path / "b.map"
    b.write_bytes(simple_map([sprite(picture=142, pal=14)]))

    result = run(a, b)
    assert result.returncode == 0, result.stdout + result.stderr
    assert result.stdout.index("a.map is a MAP") < result.stdout.index("b.map is a MAP")
    assert "Deathmatch: supported, up to 2 players" in result.stdout
    assert "secret exit" in result.stdout


def test_mapinfo_continues_after_failure(tmp_path):
    good = tmp_path / "good.map"
    good.write_bytes(simple_map())
    bad = tmp_path / "bad.map"
    bad.write_bytes(b"\x07\x00")

    result = run("-j", "2", "--detailed", bad, tmp_path / "nope.map", good)
    assert result.returncode == 1
    assert "bad.map: FAILED" in result.stdout
    assert "nope.map: FAILED" in result.stdout
    assert "good.map is a MAP" in result.stdout
    assert "Sector[0]" in result.stdout
    assert "2 of 3 file(s) could not be read" in result.stdout
    assert "bad.map" not in result.stderr


def test_mapinfo_strict_sprites(tmp_path):
    path = tmp_path / "loose.map"
    path.write_bytes(simple_map([sprite(sector=-1)]))
    assert "Structure: ok" in run(path).stdout
    assert "[sprite.sector]" in run("--strict-sprites", path).stdout
