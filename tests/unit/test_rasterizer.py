"""
Unit tests for format detection, validation and rasterization with a mocked browser.
"""

import asyncio
import base64
import zipfile
from contextlib import asynccontextmanager
from io import BytesIO
from unittest.mock import AsyncMock, MagicMock

import pytest
from docx import Document
from pypdf import PdfWriter

from resume_studio.exceptions import RasterizationFailure, ValidationFailure
from resume_studio.models import DocumentFormat
from resume_studio.rasterizers import DocumentRasterizer, detect_format, docx_to_html
from resume_studio.rasterizers import document_rasterizer
from resume_studio.rasterizers.document_rasterizer import printable_ratio, validate_pdf


def _pdf_bytes(pages: int = 1) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=200, height=200)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def _docx_bytes() -> bytes:
    document = Document()
    document.add_heading("Ada Lovelace", level=1)
    document.add_paragraph("Plain & simple")
    paragraph = document.add_paragraph()
    paragraph.add_run("Bold").bold = True
    paragraph.add_run(" and ")
    paragraph.add_run("italic").italic = True
    document.add_paragraph("First", style="List Bullet")
    document.add_paragraph("Second", style="List Bullet")
    document.add_paragraph("One", style="List Number")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Skill"
    table.rows[0].cells[1].text = "Python"
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def _fake_page(screenshot=b"PNG"):
    page = MagicMock()
    page.goto = AsyncMock()
    page.add_script_tag = AsyncMock()
    page.evaluate = AsyncMock()
    page.set_content = AsyncMock()
    page.wait_for_timeout = AsyncMock()
    page.query_selector = AsyncMock(return_value=None)
    page.screenshot = AsyncMock(return_value=screenshot)
    return page


@pytest.fixture
def patch_browser(monkeypatch):
    """Replace the browser session with one yielding the given mock page."""

    def _patch(page):
        sessions = []

        @asynccontextmanager
        async def fake_browser_page(config, viewport=None, device_scale_factor=1):
            sessions.append({"viewport": viewport, "scale": device_scale_factor})
            yield page

        monkeypatch.setattr(document_rasterizer, "browser_page", fake_browser_page)
        return sessions

    return _patch


@pytest.mark.unit
@pytest.mark.parametrize(
    "content, file_name, content_type, expected",
    [
        (b"%PDF-1.7 ...", None, None, DocumentFormat.PDF),
        (b"anything", "cv.PDF", None, DocumentFormat.PDF),
        (b"anything", None, "application/pdf; charset=binary", DocumentFormat.PDF),
        (b"anything", "cv.docx", None, DocumentFormat.DOCX),
        (b"Ada Lovelace\nEngineer", "cv.txt", "text/plain", DocumentFormat.TEXT),
        (b"Ada Lovelace\nEngineer", None, None, DocumentFormat.TEXT),
    ],
)
def test_detect_format(content, file_name, content_type, expected):
    assert detect_format(content, file_name, content_type) is expected


@pytest.mark.unit
def test_detect_format_sniffs_docx_archive():
    assert detect_format(_docx_bytes()) is DocumentFormat.DOCX


@pytest.mark.unit
def test_plain_zip_is_not_docx():
    buffer = BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("notes.txt", "hello")

    assert detect_format(buffer.getvalue()) is DocumentFormat.TEXT


@pytest.mark.unit
def test_printable_ratio():
    assert printable_ratio("hello\nworld\t!") == 1.0
    assert printable_ratio("") == 0.0
    assert printable_ratio(bytes(range(256)).decode("utf-8", errors="replace")) < 0.85


@pytest.mark.unit
def test_validate_pdf_counts_pages():
    assert validate_pdf(_pdf_bytes(3)) == 3


@pytest.mark.unit
def test_validate_pdf_rejects_garbage():
    with pytest.raises(RasterizationFailure):
        validate_pdf(b"%PDF-1.4 this is not really a pdf")


@pytest.mark.unit
def test_docx_to_html_keeps_structure():
    html = docx_to_html(_docx_bytes())

    assert "<h1>Ada Lovelace</h1>" in html
    assert "<p>Plain &amp; simple</p>" in html
    assert "<p><strong>Bold</strong> and <em>italic</em></p>" in html
    assert "<ul>\n<li>First</li>\n<li>Second</li>\n</ul>" in html
    assert "<ol>\n<li>One</li>\n</ol>" in html
    assert "<table><tr><td>Skill</td><td>Python</td></tr></table>" in html


@pytest.mark.unit
def test_no_input_is_a_validation_failure(config):
    rasterizer = DocumentRasterizer(config)

    with pytest.raises(ValidationFailure):
        asyncio.run(rasterizer.rasterize())
    with pytest.raises(ValidationFailure):
        asyncio.run(rasterizer.rasterize(text="   "))


@pytest.mark.unit
def test_empty_file_fails(config):
    with pytest.raises(RasterizationFailure, match="empty"):
        asyncio.run(DocumentRasterizer(config).rasterize(content=b"", file_name="cv.pdf"))


@pytest.mark.unit
def test_binary_garbage_fails_before_rendering(config, patch_browser):
    page = _fake_page()
    patch_browser(page)

    with pytest.raises(RasterizationFailure, match="does not look like"):
        asyncio.run(
            DocumentRasterizer(config).rasterize(content=bytes(range(256)) * 4, file_name="cv.bin")
        )
    page.screenshot.assert_not_awaited()


@pytest.mark.unit
def test_unreadable_pdf_fails(config, patch_browser):
    page = _fake_page()
    patch_browser(page)

    with pytest.raises(RasterizationFailure):
        asyncio.run(
            DocumentRasterizer(config).rasterize(content=b"%PDF-1.4 broken", file_name="cv.pdf")
        )
    page.screenshot.assert_not_awaited()


@pytest.mark.unit
def test_text_is_escaped_and_rendered(config, patch_browser):
    page = _fake_page(screenshot=b"TEXT-PNG")
    patch_browser(page)

    document = asyncio.run(DocumentRasterizer(config).rasterize(text="<b>Ada</b> & co"))

    assert document.images == [b"TEXT-PNG"]
    assert document.source_format is DocumentFormat.TEXT
    html = page.set_content.await_args.args[0]
    assert "&lt;b&gt;Ada&lt;/b&gt; &amp; co" in html


@pytest.mark.unit
def test_file_takes_precedence_over_text(config, patch_browser):
    page = _fake_page()
    patch_browser(page)

    document = asyncio.run(
        DocumentRasterizer(config).rasterize(
            content=b"Uploaded resume text", file_name="cv.txt", text="Pasted text"
        )
    )

    assert document.file_name == "cv.txt"
    assert "Uploaded resume text" in page.set_content.await_args.args[0]


@pytest.mark.unit
def test_pdf_pages_rendered_with_pdfjs(config, patch_browser):
    page = _fake_page()
    page.evaluate = AsyncMock(
        return_value=[base64.b64encode(b"page-1").decode(), base64.b64encode(b"page-2").decode()]
    )
    sessions = patch_browser(page)

    document = asyncio.run(DocumentRasterizer(config).rasterize(content=_pdf_bytes(2)))

    assert document.images == [b"page-1", b"page-2"]
    assert document.source_format is DocumentFormat.PDF
    script_url = page.add_script_tag.await_args.kwargs["url"]
    assert f"pdfjs-dist@{config.pdfjs_version}" in script_url
    assert sessions[0]["scale"] == 2


@pytest.mark.unit
def test_pdf_falls_back_to_viewer_screenshot(config, patch_browser):
    page = _fake_page(screenshot=b"VIEWER-PNG")
    page.add_script_tag = AsyncMock(side_effect=RuntimeError("CDN unreachable"))
    patch_browser(page)

    document = asyncio.run(DocumentRasterizer(config).rasterize(content=_pdf_bytes()))

    assert document.images == [b"VIEWER-PNG"]
    html = page.set_content.await_args.args[0]
    assert 'type="application/pdf"' in html


@pytest.mark.unit
def test_docx_page_clipped_to_content(config, patch_browser):
    page = _fake_page(screenshot=b"DOCX-PNG")
    target = MagicMock()
    target.bounding_box = AsyncMock(
        return_value={"x": 53, "y": 24, "width": 794, "height": 2000}
    )
    page.query_selector = AsyncMock(return_value=target)
    patch_browser(page)

    document = asyncio.run(
        DocumentRasterizer(config).rasterize(content=_docx_bytes(), file_name="cv.docx")
    )

    assert document.images == [b"DOCX-PNG"]
    assert document.source_format is DocumentFormat.DOCX
    clip = page.screenshot.await_args.kwargs["clip"]
    assert clip == {"x": 53, "y": 24, "width": 794, "height": 2000}


@pytest.mark.unit
def test_corrupt_docx_fails(config, patch_browser):
    patch_browser(_fake_page())

    with pytest.raises(RasterizationFailure, match="Unreadable DOCX"):
        asyncio.run(
            DocumentRasterizer(config).rasterize(content=b"not a zip", file_name="cv.docx")
        )


@pytest.mark.unit
def test_browser_failure_becomes_rasterization_failure(config, monkeypatch):
    @asynccontextmanager
    async def broken_browser_page(config, viewport=None, device_scale_factor=1):
        raise RuntimeError("Executable doesn't exist")
        yield

    monkeypatch.setattr(document_rasterizer, "browser_page", broken_browser_page)

    with pytest.raises(RasterizationFailure, match="Executable doesn't exist"):
        asyncio.run(DocumentRasterizer(config).rasterize(text="Ada Lovelace"))


@pytest.mark.unit
def test_blank_screenshot_fails(config, patch_browser):
    patch_browser(_fake_page(screenshot=b""))

    with pytest.raises(RasterizationFailure, match="Failed to render"):
        asyncio.run(DocumentRasterizer(config).rasterize(text="Ada Lovelace"))
