"""
WeasyPrint compilation utilities.
"""

import asyncio

import structlog

from ..config import StudioConfig
from ..exceptions import RenderingFailure

logger = structlog.get_logger()

# Same page box as the Chromium backend
PAGE_CSS = "@page { size: A4; margin: 10mm; }"


class WeasyPrintCompiler:
    """Compiles HTML resumes to PDF using WeasyPrint."""

    name = "weasyprint"

    def __init__(self, config: StudioConfig):
        self.config = config

    def _write_pdf(self, html: str) -> bytes:
        # Imported here: WeasyPrint needs system Pango libraries at import time
        from weasyprint import CSS, HTML  # type: ignore

        # HTML(string=...).write_pdf(...) is the recommended pattern
        return HTML(string=html).write_pdf(stylesheets=[CSS(string=PAGE_CSS)])

    async def compile(self, html: str) -> bytes:
        """
        Render HTML to PDF bytes.

        Raises:
            RenderingFailure: WeasyPrint is unavailable or layout failed
        """
        log = logger.bind(backend=self.name, html_length=len(html))
        log.info("Starting PDF render")
        try:
            pdf = await asyncio.wait_for(
                asyncio.to_thread(self._write_pdf, html),
                timeout=self.config.render_timeout_s,
            )
        except Exception as e:
            log.error("PDF render failed", error=str(e))
            raise RenderingFailure(
                f"WeasyPrint rendering failed: {e}", details={"backend": self.name}
            ) from e

        if not pdf:
            raise RenderingFailure("WeasyPrint returned an empty PDF", details={"backend": self.name})

        log.info("PDF render finished", size=len(pdf))
        return pdf
