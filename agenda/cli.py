from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .grid import NORMAL_HEIGHT, grid_height, layout_days, layout_week
from .io import days_to_jsonable, dumps, load_appointments
from .model import GridConfig
from .util.console import eprint
from .util.timeparse import parse_date_yyyy_mm_dd
from .util.tz import normalize_tz_name, resolve_tz, today_date
from .validate import EventValidationError, assert_valid_events, filter_valid_events

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )


def main(argv: list[str] | None = None) -> None:
    default_out = os.path.join("build", "agenda_layout.json")
    ap = argparse.ArgumentParser(
        description="Lay out clinic appointments side by side on a day/week time grid."
    )
    ap.add_argument("--in", dest="in_json", required=True, help="Appointments JSON export (list or {\"data\": [...]})")
    ap.add_argument("--week", default=None, help="Any date of the week to lay out, YYYY-MM-DD (default: today in --tz)")
    ap.add_argument("--all-days", action="store_true", help="Lay out every day present in the input instead of one week")
    ap.add_argument("--expanded", action="store_true", help="Show the full 24h grid instead of 06:00-21:00")
    ap.add_argument("--hour-height", type=float, default=NORMAL_HEIGHT, help=f"Pixels per hour row (default: {NORMAL_HEIGHT:g})")
    ap.add_argument(
        "--tz",
        default=os.getenv("AGENDA_TZ", "local"),
        help="Display timezone for day boundaries and offsets (default: env AGENDA_TZ or 'local')",
    )
    ap.add_argument("--strict", action="store_true", help="Fail on appointments with invalid times instead of dropping them")
    ap.add_argument("--out", default=default_out, help="Output JSON path, '-' for stdout (default: ./build/agenda_layout.json)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = ap.parse_args(argv)
    _setup_logging(bool(args.verbose))

    tz_name = normalize_tz_name(args.tz)
    try:
        tzinfo = resolve_tz(tz_name)
    except ValueError as e:
        raise SystemExit(f"Invalid --tz value: {e}")

    if args.hour_height <= 0:
        raise SystemExit("--hour-height must be positive")

    if args.week:
        try:
            anchor = parse_date_yyyy_mm_dd(args.week)
        except ValueError as e:
            raise SystemExit(f"Invalid --week value: {e}")
    else:
        anchor = today_date(tzinfo)

    try:
        appointments = load_appointments(Path(args.in_json))
    except FileNotFoundError:
        raise SystemExit(f"Missing input JSON: {args.in_json}")
    except ValueError as e:
        raise SystemExit(f"Failed to load appointments: {e}")

    if args.strict:
        try:
            assert_valid_events(appointments)
        except EventValidationError as e:
            raise SystemExit(f"Invalid appointment: {e}")
        events = appointments
    else:
        events = filter_valid_events(appointments)
        dropped = len(appointments) - len(events)
        if dropped:
            logger.warning("dropped %d appointment(s) with invalid start/end times", dropped)

    cfg = GridConfig(hour_height=float(args.hour_height), expanded=bool(args.expanded), tz=tz_name)
    if args.all_days:
        days = layout_days(events, cfg)
    else:
        days = layout_week(events, anchor, cfg)
    logger.debug("laid out %d appointment(s) over %d day(s)", sum(len(v) for v in days.values()), len(days))

    data = {
        "tz": tz_name,
        "expanded": cfg.expanded,
        "hour_height": cfg.hour_height,
        "grid_height": grid_height(cfg),
        "days": days_to_jsonable(days),
    }
    text = dumps(data)

    if args.out == "-":
        sys.stdout.write(text + "\n")
        return

    out_path = Path(os.path.abspath(args.out))
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        if args.out == default_out:
            fallback = Path.home() / ".agenda" / "build" / "agenda_layout.json"
            fallback.parent.mkdir(parents=True, exist_ok=True)
            out_path = fallback
            eprint(f"WARN: default output directory is not writable; using {out_path}")
        else:
            raise SystemExit(f"Cannot create output directory '{out_path.parent}': {e}")
    out_path.write_text(text, encoding="utf-8")
    print(str(out_path))


if __name__ == "__main__":
    main()
