"""
Headless Chromium sessions shared by the PDF compiler and the rasterizer.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import structlog
from playwright.async_api import Page, async_playwright

from ..config import StudioConfig

logger = structlog.get_logger()

# Container-friendly flags; Chromium cannot use its sandbox as root
LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox", "--disable-dev-shm-usage"]


@asynccontextmanager
async def browser_page(
    config: StudioConfig,
    viewport: Optional[dict[str, int]] = None,
    device_scale_factor: float = 1,
) -> AsyncIterator[Page]:
    """
    Launch one headless browser and yield a fresh page.

    The browser is closed on every exit path, including errors raised by
    the caller inside the ``async with`` block.
    """
    timeout_ms = config.render_timeout_s * 1000
    async with async_playwright() as pw:
        browser = await pw.chromium.launch(
            headless=True,
            args=LAUNCH_ARGS,
            executable_path=config.chromium_executable_path,
            timeout=timeout_ms,
        )
        logger.debug("Browser launched", version=browser.version)
        try:
            context_kwargs = {"device_scale_factor": device_scale_factor}
            if viewport:
                context_kwargs["viewport"] = viewport
            context = await browser.new_context(**context_kwargs)
            page = await context.new_page()
            page.set_default_timeout(timeout_ms)
            yield page
        finally:
            await browser.close()
