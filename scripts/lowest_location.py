#!/usr/bin/env python3
"""Find the lowest location reachable from an almanac's seeds.

Prints the point-mode answer (each seed is a single value) and the
range-mode answer (seeds read as start/length pairs), one per line.

Usage:
    python3 scripts/lowest_location.py --filename input.txt
    python3 scripts/lowest_location.py -f input.txt --mode ranges --workers 4 -vv
    python3 scripts/lowest_location.py -f input.txt --json --json-out out/report.json

Answers (or the JSON report) go to stdout; log messages go to stderr.
"""
from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any

from almanac.document import Almanac, load_almanac
from almanac.errors import AlmanacError
from almanac.io_utils import dump_json, save_json
from almanac.pipeline import DEFAULT_STAGE_ORDER, MappingPipeline

log = logging.getLogger("lowest_location")

MODES = ("points", "ranges", "both")
DEFAULT_MODE = "both"
DEFAULT_WORKERS = 1
VERBOSITY_LEVELS = (logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG)


def verbosity_to_level(count: int) -> int:
    """Map a repeated -v count to a logging level (0 -> ERROR ... 3+ -> DEBUG)."""
    return VERBOSITY_LEVELS[min(max(count, 0), len(VERBOSITY_LEVELS) - 1)]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Lowest location number reachable from almanac seeds."
    )
    parser.add_argument(
        "--filename", "-f", required=True, type=Path, help="Path to the almanac text file"
    )
    parser.add_argument(
        "--mode",
        choices=MODES,
        default=DEFAULT_MODE,
        help="Seeds as single values, as start/length ranges, or both (default: both)",
    )
    parser.add_argument(
        "--stage",
        dest="stages",
        action="append",
        default=None,
        metavar="NAME",
        help=(
            "Stage name, repeat in pipeline order to override the default "
            "seed-to-soil ... humidity-to-location chain"
        ),
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_WORKERS,
        help="Worker threads for range translation (default: 1)",
    )
    parser.add_argument(
        "--json", action="store_true", help="Emit a JSON report instead of bare answers"
    )
    parser.add_argument(
        "--json-out", type=Path, default=None, help="Also save the JSON report to this path"
    )
    parser.add_argument(
        "--verbose", "-v", action="count", default=0,
        help="Increase log verbosity (-v warning, -vv info, -vvv debug)",
    )
    return parser


def solve_points(pipeline: MappingPipeline, almanac: Almanac, workers: int) -> int:
    seeds = almanac.seed_points()
    log.info("Point mode: %d seeds", len(seeds))
    return pipeline.minimum_output(seeds, workers=workers)


def solve_ranges(
    pipeline: MappingPipeline, almanac: Almanac, workers: int,
) -> tuple[int, dict[str, Any]]:
    if almanac.unpaired_value is not None:
        log.warning(
            "Ignoring unpaired trailing value %d in range mode", almanac.unpaired_value,
        )
    ranges = almanac.seed_ranges()
    width = sum(r.length for r in ranges)
    log.info("Range mode: %d ranges covering %d seeds", len(ranges), width)
    for r in ranges:
        log.debug("  [%d, %d)", r.start, r.end)
    answer = pipeline.minimum_output(ranges, workers=workers)
    return answer, {"range_count": len(ranges), "seed_count": width}


def run(args: argparse.Namespace) -> dict[str, Any]:
    """Load, build the pipeline once, and answer the requested modes."""
    t0 = time.monotonic()
    almanac = load_almanac(args.filename)
    log.info(
        "Parsed %d values and %d tables from %s",
        len(almanac.values), len(almanac.tables), args.filename,
    )
    order = tuple(args.stages) if args.stages else DEFAULT_STAGE_ORDER
    pipeline = almanac.pipeline(order)
    for stage in pipeline.stages:
        log.debug("Stage %s: %d rules", stage.name, len(stage.rules))

    report: dict[str, Any] = {
        "input": str(args.filename),
        "stages": list(pipeline.stage_names),
        "workers": args.workers,
    }
    if args.mode in ("points", "both"):
        report["points_minimum"] = solve_points(pipeline, almanac, args.workers)
    if args.mode in ("ranges", "both"):
        answer, stats = solve_ranges(pipeline, almanac, args.workers)
        report["ranges_minimum"] = answer
        report["ranges"] = stats
    report["elapsed_sec"] = round(time.monotonic() - t0, 6)
    log.info("Done in %.3fs", report["elapsed_sec"])
    return report


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=verbosity_to_level(args.verbose),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    log.setLevel(verbosity_to_level(args.verbose))

    if args.workers < 1:
        log.error("--workers must be >= 1, got %d", args.workers)
        return 1

    try:
        report = run(args)
    except (OSError, UnicodeDecodeError) as exc:
        log.error("Cannot read %s: %s", args.filename, exc)
        return 1
    except AlmanacError as exc:
        log.error("Invalid almanac %s: %s", args.filename, exc)
        return 1
    except ValueError as exc:
        log.error("Nothing to solve in %s: %s", args.filename, exc)
        return 1

    if args.json_out is not None:
        try:
            save_json(report, args.json_out)
        except OSError as exc:
            log.error("Cannot write report to %s: %s", args.json_out, exc)
            return 1
        log.info("Report written to %s", args.json_out)
    if args.json:
        dump_json(report)
    else:
        for key in ("points_minimum", "ranges_minimum"):
            if key in report:
                print(report[key])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
