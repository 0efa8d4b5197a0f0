"""Option objects translating CLI flags into Playwright render calls."""

from __future__ import annotations

import argparse
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional

WaitUntilLiteral = Literal["commit", "domcontentloaded", "load", "networkidle"]
ContentTypeLiteral = Literal["string", "file"]

DEFAULT_FORMAT = "A4"
DEFAULT_PDF_OUTPUT = "output.pdf"
DEFAULT_IMAGE_OUTPUT = "output.png"
DEFAULT_WAIT_UNTIL: WaitUntilLiteral = "load"
DEFAULT_TIMEOUT_MS = 30_000
MIN_SCALE = 0.1
MAX_SCALE = 2.0

# Viewport sizes in CSS pixels at 96 DPI.
FORMAT_DIMENSIONS: dict[str, tuple[int, int]] = {
    "A3": (1123, 1587),
    "A4": (794, 1123),
    "A5": (559, 794),
    "Letter": (816, 1056),
    "Legal": (816, 1344),
    "Tabloid": (1056, 1632),
}

WAIT_UNTIL_ALIASES: dict[str, WaitUntilLiteral] = {
    "commit": "commit",
    "domcontentloaded": "domcontentloaded",
    "load": "load",
    "networkidle": "networkidle",
    "networkidle0": "networkidle",
    "networkidle2": "networkidle",
}


class OptionsError(Exception):
    """Raised when CLI options cannot be turned into a render request."""


def format_dimensions(paper_format: str) -> tuple[int, int]:
    """Return the viewport ``(width, height)`` for ``paper_format``.

    Unknown formats fall back to A4.
    """

    for name, dimensions in FORMAT_DIMENSIONS.items():
        if name.lower() == paper_format.lower():
            return dimensions
    return FORMAT_DIMENSIONS[DEFAULT_FORMAT]


def resolve_output_path(value: str, cwd: Optional[str] = None) -> Path:
    """Return ``value`` as an absolute path rooted at ``cwd`` if relative."""

    expanded = os.path.expanduser(value)
    if os.path.isabs(expanded):
        return Path(expanded)
    return Path(cwd or os.getcwd()) / expanded


def normalize_wait_until(value: str) -> WaitUntilLiteral:
    """Map Playwright and Puppeteer readiness names onto Playwright's."""

    try:
        return WAIT_UNTIL_ALIASES[value.strip().lower()]
    except KeyError:
        choices = ", ".join(sorted(WAIT_UNTIL_ALIASES))
        raise OptionsError(
            f"Unsupported wait-until value {value!r}; expected one of {choices}"
        ) from None


def _parse_scale(value: Any) -> float:
    try:
        scale = float(value)
    except (TypeError, ValueError):
        raise OptionsError(f"Scale must be a number, got {value!r}") from None
    if not MIN_SCALE <= scale <= MAX_SCALE:
        raise OptionsError(
            f"Scale must be between {MIN_SCALE} and {MAX_SCALE}, got {scale}"
        )
    return scale


def _parse_timeout(value: Any) -> int:
    try:
        timeout = int(value)
    except (TypeError, ValueError):
        raise OptionsError(
            f"Timeout must be an integer number of milliseconds, got {value!r}"
        ) from None
    if timeout < 0:
        raise OptionsError(f"Timeout must not be negative, got {timeout}")
    return timeout


@dataclass(slots=True)
class Margins:
    """PDF page margins expressed as CSS lengths.

    Uses slots for memory efficiency. Do not inherit from this class
    unless the subclass also uses slots=True.
    """

    top: str = "0"
    bottom: str = "0"
    left: str = "0"
    right: str = "0"


@dataclass(slots=True)
class PdfOptions:
    """Keyword arguments handed to ``page.pdf``.

    Uses slots for memory efficiency. Do not inherit from this class
    unless the subclass also uses slots=True.
    """

    path: Path
    format: str = DEFAULT_FORMAT
    landscape: bool = False
    scale: float = 1.0
    margin: Margins = field(default_factory=Margins)
    display_header_footer: bool = False
    header_template: Optional[str] = None
    footer_template: Optional[str] = None
    print_background: bool = True
    prefer_css_page_size: bool = False
    page_ranges: Optional[str] = None

    def to_playwright(self) -> dict[str, Any]:
        """Return ``page.pdf`` keyword arguments, skipping unset templates."""

        kwargs: dict[str, Any] = {
            "path": str(self.path),
            "format": self.format,
            "landscape": self.landscape,
            "scale": self.scale,
            "margin": asdict(self.margin),
            "display_header_footer": self.display_header_footer,
            "print_background": self.print_background,
            "prefer_css_page_size": self.prefer_css_page_size,
        }
        if self.header_template is not None:
            kwargs["header_template"] = self.header_template
        if self.footer_template is not None:
            kwargs["footer_template"] = self.footer_template
        if self.page_ranges:
            kwargs["page_ranges"] = self.page_ranges
        return kwargs


@dataclass(slots=True)
class RenderOptions:
    """Flat render request assembled from the command line.

    Uses slots for memory efficiency. Do not inherit from this class
    unless the subclass also uses slots=True.
    """

    url: Optional[str] = None
    output: Path = field(
        default_factory=lambda: resolve_output_path(DEFAULT_PDF_OUTPUT)
    )
    format: str = DEFAULT_FORMAT
    landscape: bool = False
    scale: float = 1.0
    margin: Margins = field(default_factory=Margins)
    header_template: Optional[str] = None
    footer_template: Optional[str] = None
    display_header_footer: bool = False
    prefer_css_page_size: bool = False
    page_ranges: Optional[str] = None
    ignore_http_errors: bool = False
    wait_until: WaitUntilLiteral = DEFAULT_WAIT_UNTIL
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    verbose: bool = False
    content: Optional[str] = None
    content_type: ContentTypeLiteral = "string"
    image: bool = False
    image_output: Path = field(
        default_factory=lambda: resolve_output_path(DEFAULT_IMAGE_OUTPUT)
    )

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> "RenderOptions":
        """Validate parsed CLI arguments and build a ``RenderOptions``."""

        if not args.url and not args.content:
            raise OptionsError("Either --url or --content must be provided.")
        if args.content_type not in ("string", "file"):
            raise OptionsError(
                "Content type must be 'string' or 'file', "
                f"got {args.content_type!r}"
            )

        return cls(
            url=args.url,
            output=resolve_output_path(args.output or DEFAULT_PDF_OUTPUT),
            format=args.format or DEFAULT_FORMAT,
            landscape=bool(args.landscape),
            scale=_parse_scale(args.scale),
            margin=Margins(
                top=str(args.margin_top),
                bottom=str(args.margin_bottom),
                left=str(args.margin_left),
                right=str(args.margin_right),
            ),
            header_template=args.header_template,
            footer_template=args.footer_template,
            display_header_footer=bool(args.display_header_footer),
            prefer_css_page_size=bool(args.prefer_css_page_size),
            page_ranges=args.page_ranges,
            ignore_http_errors=bool(args.ignore_http_errors),
            wait_until=normalize_wait_until(args.wait_until),
            timeout_ms=_parse_timeout(args.timeout),
            verbose=bool(args.verbose),
            content=args.content,
            content_type=args.content_type,
            image=bool(args.image),
            image_output=resolve_output_path(
                args.image_output or DEFAULT_IMAGE_OUTPUT
            ),
        )

    @property
    def viewport(self) -> dict[str, int]:
        """Return the screenshot viewport derived from the paper format."""

        width, height = format_dimensions(self.format)
        return {"width": width, "height": height}

    def pdf_options(self) -> PdfOptions:
        """Return the ``page.pdf`` options for this request."""

        return PdfOptions(
            path=self.output,
            format=self.format,
            landscape=self.landscape,
            scale=self.scale,
            margin=self.margin,
            display_header_footer=self.display_header_footer,
            header_template=self.header_template,
            footer_template=self.footer_template,
            prefer_css_page_size=self.prefer_css_page_size,
            page_ranges=self.page_ranges,
        )

    def load_content(self) -> Optional[str]:
        """Return the HTML to set on the page, reading it from disk if needed."""

        if not self.content:
            return None
        if self.content_type == "file":
            content_path = Path(self.content).expanduser()
            return content_path.read_text(encoding="utf-8", errors="replace")
        return self.content

    def describe(self) -> dict[str, Any]:
        """Return a JSON-friendly view of the options for verbose output."""

        payload = asdict(self)
        payload["output"] = str(self.output)
        payload["image_output"] = str(self.image_output)
        return payload
