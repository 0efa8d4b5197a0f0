"""Convert a website or an HTML fragment to PDF or a full-page screenshot."""

from __future__ import annotations

import argparse
import json
from typing import Optional, Sequence

from config_loader import ConfigError, load_config
from page_renderer import render
from render_options import (
    DEFAULT_FORMAT,
    DEFAULT_IMAGE_OUTPUT,
    DEFAULT_PDF_OUTPUT,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_WAIT_UNTIL,
    OptionsError,
    RenderOptions,
)

__version__ = "1.0.0"

NON_CONFIG_DESTS = frozenset({"help", "version", "config"})
NUMERIC_DESTS = frozenset(
    {"scale", "timeout", "margin_top", "margin_bottom", "margin_left", "margin_right"}
)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser; ``-h`` is taken by --header-template."""

    parser = argparse.ArgumentParser(
        prog="site2pdf",
        description="Convert a website to PDF",
        add_help=False,
    )
    parser.add_argument(
        "--help", action="help", help="Show this help message and exit."
    )
    parser.add_argument(
        "-V", "--version", action="version", version=__version__
    )
    parser.add_argument(
        "--config",
        default=None,
        help=(
            "JSON file providing option defaults "
            "(falls back to $SITE2PDF_CONFIG, then ./site2pdf.json)"
        ),
    )
    parser.add_argument("-u", "--url", help="URL of the website to convert")
    parser.add_argument(
        "-o", "--output", default=DEFAULT_PDF_OUTPUT,
        help="Output PDF file path",
    )
    parser.add_argument(
        "-f", "--format", default=DEFAULT_FORMAT,
        help="Paper format ('A4', 'Letter', etc.)",
    )
    parser.add_argument(
        "-l", "--landscape", action="store_true",
        help="Whether to set the PDF in landscape mode",
    )
    parser.add_argument(
        "-s", "--scale", default="1",
        help="Scale of the webpage rendering",
    )
    parser.add_argument(
        "-m", "--margin-top", default="0", help="Top margin of the PDF file"
    )
    parser.add_argument(
        "-b", "--margin-bottom", default="0",
        help="Bottom margin of the PDF file",
    )
    parser.add_argument(
        "-r", "--margin-right", default="0",
        help="Right margin of the PDF file",
    )
    parser.add_argument(
        "-e", "--margin-left", default="0", help="Left margin of the PDF file"
    )
    parser.add_argument(
        "-h", "--header-template",
        help="HTML template for the header of the PDF file",
    )
    parser.add_argument(
        "-t", "--footer-template",
        help="HTML template for the footer of the PDF file",
    )
    parser.add_argument(
        "-n", "--display-header-footer", action="store_true",
        help="Whether to display the header and footer of the PDF file",
    )
    parser.add_argument(
        "-c", "--prefer-css-page-size", action="store_true",
        help="Whether to prefer the CSS page size over the viewport size",
    )
    parser.add_argument(
        "-d", "--page-ranges",
        help="Page ranges to print, e.g., '1-5, 8, 11-13'",
    )
    parser.add_argument(
        "-a", "--ignore-http-errors", action="store_true",
        help="Whether to ignore HTTPS errors during the navigation",
    )
    parser.add_argument(
        "-g", "--wait-until", default=DEFAULT_WAIT_UNTIL,
        help=(
            "When to consider the navigation succeeded, e.g., "
            "'networkidle', 'load', etc."
        ),
    )
    parser.add_argument(
        "-k", "--timeout", default=str(DEFAULT_TIMEOUT_MS),
        help="Maximum navigation time in milliseconds",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Display detailed information during execution",
    )
    parser.add_argument(
        "-x", "--content", help="HTML content to set on the page"
    )
    parser.add_argument(
        "--content-type", default="string", choices=("string", "file"),
        help="Type of content ('string' or 'file')",
    )
    parser.add_argument(
        "-i", "--image", action="store_true",
        help="Generate an image instead of a PDF",
    )
    parser.add_argument(
        "-p", "--image-output", default=DEFAULT_IMAGE_OUTPUT,
        help="Output image file path",
    )
    return parser


def _config_types(parser: argparse.ArgumentParser) -> dict[str, tuple[type, ...]]:
    """Map each configurable option to the JSON types it accepts."""

    key_types: dict[str, tuple[type, ...]] = {}
    for dest, default in vars(parser.parse_args([])).items():
        if dest in NON_CONFIG_DESTS:
            continue
        if isinstance(default, bool):
            key_types[dest] = (bool,)
        elif dest in NUMERIC_DESTS:
            key_types[dest] = (str, int, float)
        elif default is None:
            key_types[dest] = (str, type(None))
        else:
            key_types[dest] = (str,)
    return key_types


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments, seeding defaults from the JSON config file."""

    parser = build_parser()
    pre_args, _ = parser.parse_known_args(argv)
    try:
        config = load_config(
            pre_args.config, key_types=_config_types(parser)
        )
    except ConfigError as exc:
        raise SystemExit(f"Config error: {exc}") from exc

    parser.set_defaults(**config)
    return parser.parse_args(argv)


def _print_verbose(options: RenderOptions) -> None:
    print("options: ")
    print(json.dumps(options.describe(), indent=2))
    print("pdf options: ")
    print(json.dumps(options.pdf_options().to_playwright(), indent=2))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for rendering a page to PDF or PNG."""

    args = parse_args(argv)
    try:
        options = RenderOptions.from_namespace(args)
    except OptionsError as exc:
        raise SystemExit(f"Option error: {exc}") from exc

    if options.verbose:
        _print_verbose(options)

    success, error = render(options)
    if not success:
        target = "inline content" if options.content else options.url
        print(f"⚠️ Failed to render {target}: {error}")
        return 1

    if options.image:
        print(f"✅ Screenshot written: {options.image_output}")
    else:
        print(f"✅ PDF written: {options.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
