"""CLI entrypoint for nearby toilet lookup."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from toilet_finder.common.config_loader import load_settings
from toilet_finder.common.constants import EXIT_HARD_FAIL, EXIT_SUCCESS
from toilet_finder.common.errors import ToiletFinderError
from toilet_finder.common.geometry import geodesic_distance_m
from toilet_finder.common.logging import build_logger, log_event
from toilet_finder.common.models import Location
from toilet_finder.discovery.filters import ToiletFilter, filter_toilets
from toilet_finder.discovery.finder import find_toilets
from toilet_finder.geocoding.reverse import reverse_geocode

COMMANDS = ("find", "reverse")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument("--lat", type=float, required=True)
    parser.add_argument("--lng", type=float, required=True)
    parser.add_argument("--free", action="store_true")
    parser.add_argument("--wheelchair", action="store_true")
    parser.add_argument("--diaper", action="store_true")
    parser.add_argument("--config", default=None)
    parser.add_argument("--overlay-config", default=None)
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def run_command(args: argparse.Namespace) -> int:
    logger = build_logger(args.log_level, log_path=Path(args.log_file) if args.log_file else None)
    location = Location(lat=args.lat, lng=args.lng)

    try:
        settings = load_settings(
            Path(args.config) if args.config else None,
            overlay_path=Path(args.overlay_config) if args.overlay_config else None,
        )
        if args.command == "reverse":
            address = reverse_geocode(location, settings=settings, logger=logger)
            print(json.dumps({"location": location.to_dict(), "address": address}, ensure_ascii=False))
            return EXIT_SUCCESS

        records = find_toilets(location, settings=settings, logger=logger)
    except ToiletFinderError as exc:
        log_event(
            logger,
            str(exc),
            level=logging.ERROR,
            operation=args.command,
            event="COMMAND_FAIL",
            status="error",
            error_code=exc.error_code,
        )
        print(str(exc), file=sys.stderr)
        return EXIT_HARD_FAIL

    toilet_filter = ToiletFilter(free=args.free, wheelchair=args.wheelchair, diaper=args.diaper)
    rows = []
    for record in filter_toilets(records, toilet_filter):
        row = record.to_dict()
        row["distance_m"] = round(geodesic_distance_m(location, record.location), 1)
        rows.append(row)
    print(json.dumps(rows, ensure_ascii=False, indent=2))
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    return run_command(args)


if __name__ == "__main__":
    raise SystemExit(main())
