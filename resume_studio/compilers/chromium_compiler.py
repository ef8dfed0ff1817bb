"""
Chromium (Playwright) HTML to PDF compilation.
"""

import structlog

from ..config import StudioConfig
from ..exceptions import RenderingFailure
from .browser import browser_page

logger = structlog.get_logger()

PAGE_FORMAT = "A4"
PAGE_MARGIN = {"top": "10mm", "right": "10mm", "bottom": "10mm", "left": "10mm"}


class ChromiumCompiler:
    """Compiles HTML resumes to PDF with headless Chromium."""

    name = "chromium"

    def __init__(self, config: StudioConfig):
        self.config = config

    async def compile(self, html: str) -> bytes:
        """
        Render HTML to PDF bytes.

        Args:
            html: Complete HTML document

        Returns:
            PDF document bytes

        Raises:
            RenderingFailure: any browser error; no partial document is returned
        """
        log = logger.bind(backend=self.name, html_length=len(html))
        log.info("Starting PDF render")
        try:
            async with browser_page(self.config) as page:
                await page.set_content(html, wait_until="networkidle")
                pdf = await page.pdf(
                    format=PAGE_FORMAT,
                    print_background=True,
                    margin=PAGE_MARGIN,
                )
        except Exception as e:
            log.error("PDF render failed", error=str(e))
            raise RenderingFailure(
                f"Chromium PDF rendering failed: {e}", details={"backend": self.name}
            ) from e

        if not pdf:
            raise RenderingFailure("Chromium returned an empty PDF", details={"backend": self.name})

        log.info("PDF render finished", size=len(pdf))
        return pdf
