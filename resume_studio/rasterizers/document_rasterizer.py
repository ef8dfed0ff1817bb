"""
Conversion of uploaded resumes (PDF, DOCX, plain text) into page images.
"""

import base64
import zipfile
from io import BytesIO
from pathlib import PurePath
from typing import Optional

import structlog
from markupsafe import escape
from pypdf import PdfReader

from ..compilers.browser import browser_page
from ..config import StudioConfig
from ..exceptions import RasterizationFailure, ValidationFailure
from ..models import DocumentFormat, RasterizedDocument
from .docx_html import docx_to_html

logger = structlog.get_logger()

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

DEVICE_SCALE = 2
PDFJS_SCALE = 2
PDF_VIEWER_VIEWPORT = {"width": 1200, "height": 1600}
PAGE_VIEWPORT = {"width": 900, "height": 1200}
MAX_SCROLL_STEPS = 12
MIN_PRINTABLE_RATIO = 0.85

_PDFJS_RENDER = """
async ({ b64, workerSrc, scale }) => {
  const pdfjsLib = window.pdfjsLib;
  pdfjsLib.GlobalWorkerOptions.workerSrc = workerSrc;
  const raw = atob(b64);
  const bytes = new Uint8Array(raw.length);
  for (let i = 0; i < raw.length; i++) bytes[i] = raw.charCodeAt(i);
  const pdf = await pdfjsLib.getDocument({ data: bytes }).promise;
  const out = [];
  for (let n = 1; n <= pdf.numPages; n++) {
    const page = await pdf.getPage(n);
    const viewport = page.getViewport({ scale });
    const canvas = document.createElement('canvas');
    canvas.width = viewport.width;
    canvas.height = viewport.height;
    await page.render({ canvasContext: canvas.getContext('2d'), viewport }).promise;
    out.push(canvas.toDataURL('image/png').split(',')[1]);
  }
  return out;
}
"""

_SCROLL_VIEWER = """
async (maxSteps) => {
  for (let i = 0; i < maxSteps; i++) {
    window.scrollBy(0, window.innerHeight);
    await new Promise(r => setTimeout(r, 250));
    if (window.scrollY + window.innerHeight >= document.documentElement.scrollHeight) break;
  }
  window.scrollTo(0, 0);
}
"""

_DOCX_PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8" />
<style>
  body {{ font-family: Arial, sans-serif; padding: 24px; margin: 0; }}
  .page {{ width: 794px; margin: 0 auto; }}
  h1, h2, h3 {{ margin: 12px 0; }}
  ul, ol {{ padding-left: 20px; }}
  li {{ margin: 4px 0; }}
  table {{ border-collapse: collapse; margin: 8px 0; }}
  td {{ border: 1px solid #ccc; padding: 4px 6px; vertical-align: top; }}
</style>
</head>
<body><div class="page">{body}</div></body>
</html>"""

_TEXT_PAGE = (
    '<!DOCTYPE html><html><head><meta charset="utf-8" /></head><body>'
    '<pre style="white-space:pre-wrap;font:14px monospace;padding:24px;max-width:800px;">'
    "{body}</pre></body></html>"
)


def _is_docx_zip(content: bytes) -> bool:
    buffer = BytesIO(content)
    if not zipfile.is_zipfile(buffer):
        return False
    try:
        with zipfile.ZipFile(buffer) as archive:
            return "word/document.xml" in archive.namelist()
    except zipfile.BadZipFile:
        return False


def detect_format(
    content: bytes, file_name: Optional[str] = None, content_type: Optional[str] = None
) -> DocumentFormat:
    """Declared MIME type or extension first, then magic-byte sniffing."""
    mime = (content_type or "").split(";")[0].strip().lower()
    suffix = PurePath(file_name).suffix.lower() if file_name else ""

    if mime == PDF_MIME or suffix == ".pdf":
        return DocumentFormat.PDF
    if mime == DOCX_MIME or suffix == ".docx":
        return DocumentFormat.DOCX
    if content.startswith(b"%PDF-"):
        return DocumentFormat.PDF
    if _is_docx_zip(content):
        return DocumentFormat.DOCX
    return DocumentFormat.TEXT


def printable_ratio(text: str) -> float:
    """Share of characters that are printable or ordinary whitespace."""
    if not text:
        return 0.0
    good = sum(
        1 for ch in text if ch in "\n\r\t" or (ch.isprintable() and ch != "\ufffd")
    )
    return good / len(text)


def validate_pdf(content: bytes) -> int:
    """
    Check that pypdf can open the document.

    Returns:
        Page count

    Raises:
        RasterizationFailure: unreadable, encrypted or page-less PDF
    """
    try:
        reader = PdfReader(BytesIO(content))
        if reader.is_encrypted:
            raise RasterizationFailure("PDF is encrypted")
        page_count = len(reader.pages)
    except RasterizationFailure:
        raise
    except Exception as e:
        raise RasterizationFailure(f"Unreadable PDF: {e}") from e
    if page_count == 0:
        raise RasterizationFailure("PDF has no pages")
    return page_count


class DocumentRasterizer:
    """Renders documents to PNG page images in a headless browser."""

    def __init__(self, config: StudioConfig):
        self.config = config

    @property
    def _pdfjs_base(self) -> str:
        return f"https://cdn.jsdelivr.net/npm/pdfjs-dist@{self.config.pdfjs_version}/build"

    async def rasterize(
        self,
        content: Optional[bytes] = None,
        file_name: Optional[str] = None,
        content_type: Optional[str] = None,
        text: Optional[str] = None,
    ) -> RasterizedDocument:
        """
        Convert a file payload or pasted text into page images.

        Args:
            content: Uploaded file bytes (takes precedence over text)
            file_name: Original file name, used for format detection
            content_type: Declared MIME type
            text: Pasted resume text

        Raises:
            ValidationFailure: neither content nor text was supplied
            RasterizationFailure: the input could not be turned into any image
        """
        if content is None and not (text and text.strip()):
            raise ValidationFailure("no input provided")

        if content is None:
            fmt = DocumentFormat.TEXT
            log = logger.bind(format=fmt.value, source="text")
            log.info("Rasterizing document")
            images = await self._render_text(text or "")
        else:
            if len(content) == 0:
                raise RasterizationFailure("Uploaded file is empty", details={"file_name": file_name})
            fmt = detect_format(content, file_name, content_type)
            log = logger.bind(format=fmt.value, file_name=file_name, size=len(content))
            log.info("Rasterizing document")
            if fmt is DocumentFormat.PDF:
                validate_pdf(content)
                images = await self._render_pdf(content)
            elif fmt is DocumentFormat.DOCX:
                try:
                    body = docx_to_html(content)
                except Exception as e:
                    raise RasterizationFailure(f"Unreadable DOCX: {e}") from e
                images = await self._render_docx(body)
            else:
                decoded = content.decode("utf-8", errors="replace")
                if printable_ratio(decoded) < MIN_PRINTABLE_RATIO:
                    raise RasterizationFailure(
                        "File does not look like a PDF, DOCX or text document",
                        details={"file_name": file_name},
                    )
                images = await self._render_text(decoded)

        images = [img for img in images if img]
        if not images:
            raise RasterizationFailure("Failed to render resume to images.")
        log.info("Rasterization finished", image_count=len(images))
        return RasterizedDocument(images=images, source_format=fmt, file_name=file_name)

    async def _render_pdf(self, content: bytes) -> list[bytes]:
        try:
            async with browser_page(
                self.config, viewport=PDF_VIEWER_VIEWPORT, device_scale_factor=DEVICE_SCALE
            ) as page:
                try:
                    images = await self._render_pdf_with_pdfjs(page, content)
                    if images:
                        return images
                except Exception as e:
                    logger.warning("pdf.js rendering failed, using viewer screenshot", error=str(e))
                return [await self._screenshot_pdf_viewer(page, content)]
        except RasterizationFailure:
            raise
        except Exception as e:
            raise RasterizationFailure(f"PDF rasterization failed: {e}") from e

    async def _render_pdf_with_pdfjs(self, page, content: bytes) -> list[bytes]:
        await page.goto("about:blank")
        await page.add_script_tag(url=f"{self._pdfjs_base}/pdf.min.js")
        encoded_pages = await page.evaluate(
            _PDFJS_RENDER,
            {
                "b64": base64.b64encode(content).decode("ascii"),
                "workerSrc": f"{self._pdfjs_base}/pdf.worker.min.js",
                "scale": PDFJS_SCALE,
            },
        )
        return [base64.b64decode(p) for p in encoded_pages or []]

    async def _screenshot_pdf_viewer(self, page, content: bytes) -> bytes:
        data_url = f"data:{PDF_MIME};base64,{base64.b64encode(content).decode('ascii')}"
        html = (
            '<!doctype html><html><head><meta charset="utf-8"/>'
            "<style>html,body{margin:0;height:100%}</style></head><body>"
            f'<embed id="pdf" type="{PDF_MIME}" src="{data_url}" style="width:100vw;height:100vh;"/>'
            "</body></html>"
        )
        await page.set_content(html, wait_until="domcontentloaded")
        await page.wait_for_timeout(800)
        await page.evaluate(_SCROLL_VIEWER, MAX_SCROLL_STEPS)
        return await page.screenshot(full_page=True)

    async def _render_docx(self, body: str) -> list[bytes]:
        html = _DOCX_PAGE.format(body=body)
        try:
            async with browser_page(
                self.config, viewport=PAGE_VIEWPORT, device_scale_factor=DEVICE_SCALE
            ) as page:
                await page.set_content(html, wait_until="networkidle")
                target = await page.query_selector(".page")
                box = await target.bounding_box() if target else None
                if not box:
                    return [await page.screenshot(full_page=True)]
                clip = {
                    "x": max(0, box["x"]),
                    "y": max(0, box["y"]),
                    "width": min(box["width"], PAGE_VIEWPORT["width"]),
                    "height": box["height"],
                }
                return [await page.screenshot(clip=clip, full_page=True)]
        except Exception as e:
            raise RasterizationFailure(f"DOCX rasterization failed: {e}") from e

    async def _render_text(self, text: str) -> list[bytes]:
        html = _TEXT_PAGE.format(body=escape(text))
        try:
            async with browser_page(
                self.config, viewport=PAGE_VIEWPORT, device_scale_factor=DEVICE_SCALE
            ) as page:
                await page.set_content(html)
                return [await page.screenshot(full_page=True)]
        except Exception as e:
            raise RasterizationFailure(f"Text rasterization failed: {e}") from e
