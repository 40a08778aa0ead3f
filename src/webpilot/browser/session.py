"""Browser lifecycle, navigation and screenshots around a Playwright page."""

from __future__ import annotations

import base64
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional, Tuple

from playwright.async_api import Page, async_playwright

from ..core.config import EngineConfig
from ..recon.static import USER_AGENT

logger = logging.getLogger(__name__)

VIEWPORT = {"width": 1280, "height": 720}
LAUNCH_ARGS = [
    "--ignore-certificate-errors",
    "--ignore-ssl-errors",
    "--disable-web-security",
]
SCREENSHOT_QUALITY = 60


@asynccontextmanager
async def open_page(config: EngineConfig) -> AsyncIterator[Page]:
    """Launches Chromium and yields a fresh page; everything is closed on exit."""

    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=config.headless, args=LAUNCH_ARGS)
        try:
            context = await browser.new_context(
                viewport=VIEWPORT,
                user_agent=USER_AGENT,
                ignore_https_errors=True,
            )
            context.set_default_timeout(config.wait_timeout_ms)
            page = await context.new_page()
            logger.debug("Browser ready (headless=%s)", config.headless)
            yield page
        finally:
            await browser.close()
            logger.debug("Browser closed")


def candidate_urls(url: str) -> Tuple[str, ...]:
    """https addresses (and bare hosts) get a second try over plain http."""

    if url.startswith("https://"):
        return (url, "http://" + url[len("https://"):])
    if "://" in url or url.startswith(("about:", "data:")):
        return (url,)
    return (f"https://{url}", f"http://{url}")


async def navigate(page: Page, url: str, timeout_ms: int = 60000) -> Tuple[bool, str]:
    """Opens ``url``; returns ``(ok, message)`` instead of raising."""

    last_error = "no URL to open"
    for candidate in candidate_urls(url.strip()):
        try:
            await page.goto(candidate, wait_until="domcontentloaded", timeout=timeout_ms)
        except Exception as exc:  # noqa: BLE001 - the next scheme is tried
            last_error = str(exc).strip().splitlines()[0] if str(exc).strip() else repr(exc)
            logger.debug("Navigation to %s failed: %s", candidate, last_error)
            continue
        return True, f"Navigated to {page.url or candidate}"
    return False, f"Could not open {url}: {last_error}"


async def capture_screenshot(page: Page, path: Optional[Path] = None) -> str:
    """Viewport JPEG; saved to ``path`` when given, else returned as a data URL."""

    image = await page.screenshot(type="jpeg", quality=SCREENSHOT_QUALITY, full_page=False)
    if path is not None:
        path.write_bytes(image)
        return str(path)
    return "data:image/jpeg;base64," + base64.b64encode(image).decode("ascii")
