"""CLI entry point for static tracker snapshots.

    uv run solartracker-snapshot --date 2024-06-21 --time 13:00 --utc-offset 1
"""

import argparse
import sys
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv

from solartracker.compute import InputError, default_form, run_form
from solartracker.models import FormInput
from solartracker.renderers.static import save_static_scene
from solartracker.renderers.summary import render_text_summary
from solartracker.settings import configure_logging, load_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solartracker-snapshot",
        description="Render a dual-axis tracker snapshot to PNG and print its metrics.",
    )
    parser.add_argument("--lat", type=float, help="Latitude in degrees")
    parser.add_argument("--lon", type=float, help="Longitude in degrees, east positive")
    parser.add_argument("--utc-offset", type=float, help="Hours east of UTC")
    parser.add_argument("--date", help="Local date, YYYY-MM-DD")
    parser.add_argument("--time", help="Local time, HH:MM")
    parser.add_argument("--mode", choices=["auto", "manual"], default="auto")
    parser.add_argument("--pitch", type=float, default=30.0, help="Manual tilt (°)")
    parser.add_argument("--yaw", type=float, default=180.0, help="Manual bearing (°)")
    parser.add_argument("--width", type=float, default=2.0, help="Panel width (m)")
    parser.add_argument("--height", type=float, default=1.2, help="Panel height (m)")
    parser.add_argument("--mast", type=float, default=1.2, help="Mast height (m)")
    parser.add_argument("--albedo", type=float, default=0.45)
    parser.add_argument("--lang", choices=["fr", "en"])
    parser.add_argument("--output", type=Path, help="PNG path (default: results/)")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    settings = load_settings()
    configure_logging(settings.log_level)
    args = build_parser().parse_args(argv)

    base = default_form(settings, datetime.now(timezone.utc), args.utc_offset)
    form = FormInput(
        latitude=base.latitude if args.lat is None else args.lat,
        longitude=base.longitude if args.lon is None else args.lon,
        utc_offset=base.utc_offset,
        date=args.date or base.date,
        time=args.time or base.time,
        tracking_mode=args.mode,
        manual_pitch=args.pitch,
        manual_yaw=args.yaw,
        panel_width=args.width,
        panel_height=args.height,
        mast_height=args.mast,
        albedo=args.albedo,
    )
    lang = args.lang or settings.lang

    try:
        result = run_form(form, settings.sun_path_step_minutes)
    except InputError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    path = save_static_scene(result, args.output, lang=lang)
    print(render_text_summary(result, lang))
    print(f"Saved: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
