from __future__ import annotations

import logging

from playwright.async_api import async_playwright

from .errors import RenderFailure
from .models import ScreenshotResult, Viewport


logger = logging.getLogger(__name__)

# Needed to run Chromium inside containers without a user namespace sandbox.
CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
]


async def capture_screenshot(
    url: str,
    *,
    viewport: Viewport | None = None,
    timeout_ms: int = 15000,
) -> ScreenshotResult:
    viewport = viewport or Viewport()
    # One browser per call, closed on every path. Failures surface as RenderFailure only.
    try:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True, args=CHROMIUM_ARGS)
            try:
                context = await browser.new_context(
                    viewport={"width": viewport.width, "height": viewport.height},
                )
                try:
                    page = await context.new_page()
                    await page.goto(url, wait_until="networkidle", timeout=timeout_ms)
                    data = await page.screenshot(type="png", full_page=False)
                finally:
                    await context.close()
            finally:
                await browser.close()
    except Exception as e:
        logger.error("Screenshot error: %s", e)
        raise RenderFailure() from e
    return ScreenshotResult(mime="image/png", data=data)
