"""Render a URL or HTML fragment to PDF or a full-page screenshot."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Tuple

try:
    from playwright.sync_api import (  # type: ignore[import-not-found]
        Browser,
        Error as PlaywrightError,
        Page,
        sync_playwright,
    )
except ImportError as exc:  # pragma: no cover - surfacing missing dependency
    raise SystemExit(
        "Missing dependency 'playwright'. Install with pip install playwright "
        "&& playwright install chromium"
    ) from exc

from render_options import RenderOptions

CHROMIUM_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
)


@contextmanager
def _launch_browser() -> Iterator[Browser]:
    """Context manager that yields a headless Chromium browser instance."""

    with sync_playwright() as playwright:  # type: ignore[misc]
        browser: Browser = playwright.chromium.launch(
            headless=True, args=list(CHROMIUM_ARGS)
        )
        try:
            yield browser
        finally:
            browser.close()


def load_page(page: Page, options: RenderOptions) -> None:
    """Set inline content on ``page`` or navigate it to the target URL."""

    content = options.load_content()
    if content:
        page.set_content(
            content,
            wait_until=options.wait_until,
            timeout=options.timeout_ms,
        )
    else:
        page.goto(
            options.url,
            wait_until=options.wait_until,
            timeout=options.timeout_ms,
        )


def capture_screenshot(page: Page, options: RenderOptions) -> Path:
    """Write a full-page screenshot sized to the requested paper format."""

    image_path = options.image_output
    image_path.parent.mkdir(parents=True, exist_ok=True)
    page.set_viewport_size(options.viewport)
    page.screenshot(path=str(image_path), full_page=True)
    return image_path


def print_pdf(page: Page, options: RenderOptions) -> Path:
    """Print ``page`` to PDF using screen media styles."""

    pdf_options = options.pdf_options()
    pdf_options.path.parent.mkdir(parents=True, exist_ok=True)
    page.emulate_media(media="screen")
    page.pdf(**pdf_options.to_playwright())
    return pdf_options.path


def render_document(browser: Browser, options: RenderOptions) -> Path:
    """Load the page in a fresh context and write the requested artifact."""

    context = browser.new_context(
        ignore_https_errors=options.ignore_http_errors
    )
    try:
        page = context.new_page()
        load_page(page, options)
        if options.image:
            return capture_screenshot(page, options)
        return print_pdf(page, options)
    finally:
        context.close()


def render(options: RenderOptions) -> Tuple[bool, Optional[str]]:
    """Render ``options`` with a headless browser and report status."""

    try:
        with _launch_browser() as browser:
            render_document(browser, options)
        return True, None
    except (PlaywrightError, OSError) as exc:
        return False, str(exc)


__all__ = [
    "capture_screenshot",
    "load_page",
    "print_pdf",
    "render",
    "render_document",
]
