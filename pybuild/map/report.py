"""Decode, validate and classify map files and format the results.

Each input file goes through its own decode → validate → classify pipeline.
A file that cannot be decoded produces a report carrying the error instead
of facts; it never stops the rest of a batch.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from py_map_validator.structure import StructuralViolation, validate_structure

from . import DEFAULT_LIMITS, ENGINE_MAX_SECTORS, ENGINE_MAX_SPRITES, ENGINE_MAX_WALLS, MapLimits
from .errors import MapError
from .gameplay import GameplayFacts, classify
from .mapfile import MapFile

log = logging.getLogger(__name__)

MODE_SUMMARY = "summary"
MODE_DETAILED = "detailed"
MODES = (MODE_SUMMARY, MODE_DETAILED)


@dataclass
class MapReport:
    path: str
    mapfile: Optional[MapFile] = None
    facts: Optional[GameplayFacts] = None
    violations: List[StructuralViolation] = field(default_factory=list)
    error: Optional[MapError] = None

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def ok(self) -> bool:
        return self.error is None


def analyze_map(mapfile: MapFile, path: str, allow_unsectored_sprites: bool = True) -> MapReport:
    violations = validate_structure(mapfile, allow_unsectored_sprites)
    for violation in violations:
        log.info("%s: %s", path, violation)
    return MapReport(path, mapfile, classify(mapfile), violations)


def analyze_file(path, limits: MapLimits = DEFAULT_LIMITS, allow_unsectored_sprites: bool = True) -> MapReport:
    """Build the report for a single map file."""

    path = os.fsdecode(os.fspath(path))
    try:
        mapfile = MapFile.parse(path, limits)
    except MapError as exc:
        log.info("%s: %s", path, exc)
        return MapReport(path, error=exc)
    return analyze_map(mapfile, path, allow_unsectored_sprites)


def analyze_files(
    paths: Sequence,
    jobs: int = 1,
    limits: MapLimits = DEFAULT_LIMITS,
    allow_unsectored_sprites: bool = True,
) -> List[MapReport]:
    """Analyze ``paths`` with up to ``jobs`` workers.

    Reports come back in the order of ``paths`` whatever the number of
    workers.
    """

    def run(path):
        return analyze_file(path, limits, allow_unsectored_sprites)

    if jobs <= 1 or len(paths) <= 1:
        return [run(p) for p in paths]

    with ThreadPoolExecutor(max_workers=jobs) as pool:
        return list(pool.map(run, paths))


# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------


def _describe_version(mapfile: MapFile) -> str:
    name = mapfile.version_name()
    if name is None:
        return f"{mapfile.version} (unrecognised)"
    return f"{mapfile.version} ({name})"


def _describe_mode(mode) -> str:
    if not mode.supported:
        return "not supported"
    return f"supported, up to {mode.capacity} players"


def _summary_lines(report: MapReport) -> List[str]:
    m = report.mapfile
    p = m.player
    facts = report.facts
    lines = [
        f"{report.name} is a MAP format {_describe_version(m)}, with player start position "
        f"({p.x}, {p.y}, {p.z}) and angle {p.angle} in sector {m.sector_start}. "
        f"The map has {m.sector_count} sectors, {m.wall_count} walls, and {m.sprite_count} sprites.",
    ]

    if facts.level_exit is not None:
        lines.append(
            f"  Single player: yes, {facts.level_exit.reason} (sprite {facts.level_exit.sprite_index})"
        )
    else:
        lines.append("  Single player: no level exit found")
    lines.append(f"  Cooperative: {_describe_mode(facts.cooperative)}")
    lines.append(f"  Deathmatch: {_describe_mode(facts.deathmatch)}")
    verdict = "compatible" if facts.engine_compatible else "NOT compatible"
    lines.append(
        f"  Original engine: {verdict} "
        f"(limits {ENGINE_MAX_SECTORS} sectors, {ENGINE_MAX_WALLS} walls, {ENGINE_MAX_SPRITES} sprites)"
    )

    if report.violations:
        lines.append(f"  Structure: {len(report.violations)} problem(s)")
        for v in report.violations:
            lines.append(f"    - {v}")
    else:
        lines.append("  Structure: ok")
    return lines


def _detail_lines(mapfile: MapFile) -> List[str]:
    lines = []
    for s in mapfile.sectors:
        c, f = s.ceiling, s.floor
        lines.append(
            f"  Sector[{s.index}] walls {s.wall_start}+{s.wall_count} "
            f"ceiling(z={c.height} pic={c.picture} stat={c.stat:#06x} slope={c.slope} shade={c.shade} pal={c.palette} pan={c.panning}) "
            f"floor(z={f.height} pic={f.picture} stat={f.stat:#06x} slope={f.slope} shade={f.shade} pal={f.palette} pan={f.panning}) "
            f"vis={s.visibility} tags={s.lotag}/{s.hitag}/{s.extra}"
        )
    for w in mapfile.walls:
        lines.append(
            f"  Wall[{w.index}] ({w.x}, {w.y}) right={w.next_wall_right} left={w.next_wall_left} "
            f"next_sector={w.next_sector} stat={w.stat:#06x} pic={w.picture}/{w.over_picture} "
            f"shade={w.shade} pal={w.pal} repeat={w.repeat} pan={w.panning} "
            f"tags={w.lotag}/{w.hitag}/{w.extra}"
        )
    for sp in mapfile.sprites:
        lines.append(
            f"  Sprite[{sp.index}] ({sp.x}, {sp.y}, {sp.z}) pic={sp.picture} stat={sp.stat:#06x} "
            f"shade={sp.shade} pal={sp.pal} clip={sp.clipping_distance} repeat={sp.repeat} offset={sp.offset} "
            f"sector={sp.sector} status={sp.status} angle={sp.angle} owner={sp.owner} vel={sp.velocity} "
            f"tags={sp.lotag}/{sp.hitag}/{sp.extra}"
        )
    return lines


def format_report(report: MapReport, mode: str = MODE_SUMMARY) -> str:
    if mode not in MODES:
        raise ValueError(f"Unknown report mode: {mode}")

    if not report.ok:
        return f"{report.name}: FAILED - {report.error}"

    lines = _summary_lines(report)
    if mode == MODE_DETAILED:
        lines.extend(_detail_lines(report.mapfile))
    return "\n".join(lines)
