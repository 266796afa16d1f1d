"""Entry point for the pi-style CLI."""

from __future__ import annotations

import argparse
import logging
import sys

from pi.style.codec import strip_control_sequences
from pi.style.config import StyleConfig
from pi.style.errors import MarkupError
from pi.style.renderer import Renderer
from pi.style.segments import from_dollar_template
from pi.style.width import visible_width

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pi-style",
        description="Render inline style markup as terminal escape sequences",
    )
    parser.add_argument("--no-color", action="store_true", help="Validate markup but emit no escape sequences")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])

    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a markup template, e.g. '{bold.red Error:} $msg'")
    render.add_argument("template", help="Template text; $name placeholders are filled from --set")
    render.add_argument(
        "--set",
        dest="values",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Placeholder value (repeatable)",
    )
    render.add_argument("-n", "--no-newline", action="store_true", help="Do not print a trailing newline")

    width = sub.add_parser("width", help="Print the visible width of already-styled text")
    width.add_argument("text")

    strip = sub.add_parser("strip", help="Remove escape sequences from text")
    strip.add_argument("text")

    return parser


def _parse_values(pairs: list[str]) -> dict[str, str]:
    values: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got {pair!r}")
        values[name] = value
    return values


def _run_render(args: argparse.Namespace) -> int:
    config = StyleConfig(color=False) if args.no_color else StyleConfig.from_env()
    renderer = Renderer(config)

    try:
        values = _parse_values(args.values)
        segments = from_dollar_template(args.template, values)
    except argparse.ArgumentTypeError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except KeyError as e:
        print(f"error: no value for placeholder {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    try:
        output = renderer.render_to_string(segments)
    except MarkupError as e:
        logger.debug("Render failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(output)
    if not args.no_newline:
        sys.stdout.write("\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command == "render":
        return _run_render(args)
    if args.command == "width":
        print(visible_width(args.text))
        return 0
    if args.command == "strip":
        print(strip_control_sequences(args.text))
        return 0

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
