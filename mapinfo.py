#!/usr/bin/env python3
"""Display information about a list of Build map files."""

from __future__ import annotations

import argparse

from pybuild.logger import setup_logging
from pybuild.map.report import MODE_DETAILED, MODE_SUMMARY, analyze_files, format_report


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Display information about Build engine maps (.map)",
        epilog="Example: mapinfo.py e1l1.map myhouse.map",
    )
    parser.add_argument("maps", nargs="+", help="Paths to the map files")
    parser.add_argument(
        "-d",
        "--detailed",
        action="store_true",
        help="Also list every sector, wall and sprite",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=1,
        help="Number of files to process in parallel",
    )
    parser.add_argument(
        "--strict-sprites",
        action="store_true",
        help="Report sprites that are not placed in any sector",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-dir", help="Also write a rotating log file to this directory")
    args = parser.parse_args(argv)

    setup_logging(args.debug, args.log_dir)

    mode = MODE_DETAILED if args.detailed else MODE_SUMMARY
    reports = analyze_files(
        args.maps,
        jobs=max(1, args.jobs),
        allow_unsectored_sprites=not args.strict_sprites,
    )

    failed = 0
    for report in reports:
        print(format_report(report, mode))
        if not report.ok:
            failed += 1

    if failed:
        print(f"{failed} of {len(reports)} file(s) could not be read")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
