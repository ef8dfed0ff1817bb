"""
Integration tests against a real headless Chromium.
Skipped automatically when the Playwright browser is not installed.
"""

import asyncio
from io import BytesIO

import pytest
from pypdf import PdfReader

from resume_studio.compilers import ChromiumCompiler
from resume_studio.config import StudioConfig
from resume_studio.models import PolishedResume, Provenance, RenderStyle
from resume_studio.rasterizers import DocumentRasterizer
from resume_studio.templates import render_resume

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def config():
    return StudioConfig(render_timeout_s=60)


@pytest.mark.browser
@pytest.mark.parametrize("style", list(RenderStyle))
def test_every_layout_compiles_to_pdf(config, resume, style):
    polished = PolishedResume.unpolished(
        resume, Provenance(provider="groq", polished_at="2024-01-01T00:00:00+00:00")
    )
    html = render_resume(polished, style)

    pdf = asyncio.run(ChromiumCompiler(config).compile(html))

    assert pdf.startswith(b"%PDF")
    reader = PdfReader(BytesIO(pdf))
    assert len(reader.pages) >= 1
    # A4 is 595 x 842 points
    assert round(float(reader.pages[0].mediabox.width)) == 595


@pytest.mark.browser
def test_text_rasterizes_to_png(config):
    document = asyncio.run(
        DocumentRasterizer(config).rasterize(text="Ada Lovelace\nSoftware Engineer\n\nPython, SQL")
    )

    assert document.page_count == 1
    assert document.images[0].startswith(PNG_MAGIC)


@pytest.mark.browser
def test_generated_pdf_rasterizes(config, resume):
    polished = PolishedResume.unpolished(
        resume, Provenance(provider="groq", polished_at="2024-01-01T00:00:00+00:00")
    )
    pdf = asyncio.run(ChromiumCompiler(config).compile(render_resume(polished)))

    document = asyncio.run(
        DocumentRasterizer(config).rasterize(content=pdf, file_name="ada-lovelace-resume.pdf")
    )

    assert document.page_count >= 1
    assert all(image.startswith(PNG_MAGIC) for image in document.images)
