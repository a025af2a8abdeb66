"""Command line interface: render the lunar phase as filled ASCII art.

Defaults for --size and --hemisphere, and the log level, can be set through
ASCIIMOON_* variables in the environment or a .env file:
    uv run ascii-moon --date 1995-01-15 --show-phase
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from importlib.metadata import PackageNotFoundError, version

from dotenv import load_dotenv

from asciimoon.compute import DateParseError, run
from asciimoon.config import CliDefaults, ConfigError, load_defaults
from asciimoon.models import Hemisphere, MoonQuery, RenderConfig
from asciimoon.renderers.ascii_disc import render_moon

logger = logging.getLogger(__name__)

_DEFAULT_LIGHT = "@"
_DEFAULT_DARK = "."
_DEFAULT_EMPTY = " "


def _package_version() -> str:
    try:
        return version("ascii-moon")
    except PackageNotFoundError:
        return "unknown"


def build_parser(defaults: CliDefaults) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ascii-moon",
        description="Render the lunar phase as filled ASCII art.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--size",
        type=int,
        default=defaults.size,
        help="Height in rows (width is 2*size)",
    )
    parser.add_argument(
        "--hemisphere",
        choices=[h.value for h in Hemisphere],
        default=defaults.hemisphere.value,
        help="Orientation (north: waxing on RIGHT; south: mirrored)",
    )
    parser.add_argument(
        "--date",
        default=None,
        help="Date to render (YYYY-MM-DD). Default: today (UTC)",
    )
    parser.add_argument(
        "--phase",
        type=float,
        default=None,
        help="Phase to render (overrides --date). 0.0=new, 0.5=full, 1.0=new",
    )
    parser.add_argument(
        "--light-char", default=_DEFAULT_LIGHT, help="Character for illuminated area"
    )
    parser.add_argument(
        "--dark-char", default=_DEFAULT_DARK, help="Character for dark area"
    )
    parser.add_argument(
        "--empty-char", default=_DEFAULT_EMPTY, help="Character outside the disc"
    )
    parser.add_argument(
        "--show-phase",
        action="store_true",
        help="Print the numeric phase after the art",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {_package_version()}"
    )
    return parser


def _first_char(value: str, default: str) -> str:
    """Multi-character arguments are truncated; empty ones fall back to default."""
    return value[:1] or default


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()

    try:
        defaults = load_defaults()
    except ConfigError as e:
        build_parser(CliDefaults()).error(str(e))
    parser = build_parser(defaults)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else defaults.log_level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        stream=sys.stderr,
    )

    if args.size < 2:
        parser.error(f"Invalid --size: must be at least 2, got {args.size}")
    if args.phase is not None and not 0.0 <= args.phase <= 1.0:
        parser.error("Invalid --phase: must be between 0.0 and 1.0")

    try:
        moon = run(MoonQuery(date=args.date, phase=args.phase))
    except DateParseError as e:
        parser.error(f"Invalid --date: {e}")

    config = RenderConfig(
        size=args.size,
        hemisphere=Hemisphere(args.hemisphere),
        light_char=_first_char(args.light_char, _DEFAULT_LIGHT),
        dark_char=_first_char(args.dark_char, _DEFAULT_DARK),
        empty_char=_first_char(args.empty_char, _DEFAULT_EMPTY),
    )
    logger.debug("rendering %s with %s", moon, config)
    print(render_moon(moon, config))

    if args.show_phase:
        print(f"\nphase={moon.phase:.6f}  ({moon.label})")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
