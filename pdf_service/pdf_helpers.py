"""
Helper functions for resume PDF generation.

Wraps the Playwright/Chromium boundary (one transient browser per render,
closed on every exit path) and builds download filenames.
"""

import asyncio
import logging
import re
import unicodedata
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator, Optional
from urllib.parse import quote

logger = logging.getLogger(__name__)

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


def sanitize_for_path(text: str) -> str:
    """
    Sanitize text for use in filenames.

    Replaces special characters (except word chars, spaces, hyphens) with
    underscores, then replaces spaces with underscores.

    Example:
        >>> sanitize_for_path("Jane O'Neil")
        "Jane_O_Neil"
    """
    cleaned = re.sub(r"[^\w\s-]", "_", text.strip())
    return cleaned.replace(" ", "_")


def format_month_year(today: Optional[date] = None) -> str:
    """Month-year label such as "October 2026" for the given (or current) date."""
    today = today or date.today()
    return f"{MONTH_NAMES[today.month - 1]} {today.year}"


def build_export_filename(name: str, extension: str, today: Optional[date] = None) -> str:
    """
    Download filename for an exported resume.

    Example:
        >>> build_export_filename("Jane Doe", "pdf", date(2026, 10, 19))
        "Jane_Doe_October_2026.pdf"
    """
    base = (name or "").strip() or "Resume"
    return f"{sanitize_for_path(f'{base} {format_month_year(today)}')}.{extension}"


def content_disposition(name: Optional[str], extension: str, today: Optional[date] = None) -> str:
    """
    Content-Disposition header value for a resume download.

    Header values must be latin-1, so non-ASCII names get an ASCII fallback
    in filename= plus the UTF-8 name in filename* (RFC 6266 / RFC 5987).

    Example:
        "Zoë Li" -> attachment; filename="Zoe_Li_October_2026.pdf";
                    filename*=UTF-8''Zo%C3%AB_Li_October_2026.pdf
    """
    filename = build_export_filename(name, extension, today)
    ascii_name = unicodedata.normalize("NFKD", name or "").encode("ascii", "ignore").decode("ascii")
    fallback = build_export_filename(ascii_name, extension, today)
    if fallback == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


@asynccontextmanager
async def browser_session(headless: bool = True) -> AsyncIterator:
    """
    Yield a fresh Chromium page; the browser is closed on every exit path.

    Usage:
        async with browser_session() as page:
            await page.set_content(html)
    """
    # Import here to avoid loading Playwright on module import
    from playwright.async_api import async_playwright

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=headless, args=CHROMIUM_ARGS)
        try:
            page = await browser.new_page()
            yield page
        finally:
            await browser.close()


async def _print_page(html: str, headless: bool) -> bytes:
    async with browser_session(headless=headless) as page:
        await page.set_content(html, wait_until="networkidle")
        # Web fonts load asynchronously; printing earlier falls back to system fonts
        await page.evaluate("document.fonts.ready")
        # Margins come from the document's @page rule
        return await page.pdf(
            format="Letter",
            print_background=True,
            prefer_css_page_size=True,
            margin={"top": "0", "right": "0", "bottom": "0", "left": "0"},
        )


async def render_html_to_pdf(html: str, timeout_ms: int = 30000, headless: bool = True) -> bytes:
    """
    Print an HTML document to PDF with headless Chromium.

    Args:
        html: Complete HTML document (with @page rule for size and margins)
        timeout_ms: Upper bound for the whole launch-render-print cycle
        headless: Run Chromium headless

    Returns:
        PDF bytes

    Raises:
        asyncio.TimeoutError: If the browser does not finish in time
    """
    pdf_bytes = await asyncio.wait_for(_print_page(html, headless), timeout=timeout_ms / 1000)
    logger.debug(f"Printed {len(pdf_bytes)} byte PDF")
    return pdf_bytes
