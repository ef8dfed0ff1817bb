"""
DOCX to HTML conversion with python-docx.

Only the structure that matters for a visual resume review is kept:
headings, paragraphs, bullet/numbered lists, bold/italic runs and tables.
"""

from io import BytesIO
from typing import Optional

from docx import Document
from docx.table import Table
from docx.text.paragraph import Paragraph
from markupsafe import escape


def _heading_tag(paragraph: Paragraph) -> Optional[str]:
    style = (paragraph.style.name if paragraph.style is not None else "") or ""
    if style == "Title":
        return "h1"
    if style.startswith("Heading"):
        level = style.replace("Heading", "").strip()
        if level.isdigit():
            return f"h{min(int(level), 3)}"
        return "h3"
    return None


def _list_tag(paragraph: Paragraph) -> Optional[str]:
    style = (paragraph.style.name if paragraph.style is not None else "") or ""
    if style.startswith("List Number"):
        return "ol"
    if style.startswith("List"):
        return "ul"
    p_pr = paragraph._p.pPr
    if p_pr is not None and p_pr.numPr is not None:
        return "ul"
    return None


def _runs_html(paragraph: Paragraph) -> str:
    parts = []
    for run in paragraph.runs:
        if not run.text:
            continue
        text = str(escape(run.text))
        if run.italic:
            text = f"<em>{text}</em>"
        if run.bold:
            text = f"<strong>{text}</strong>"
        parts.append(text)
    return "".join(parts)


def _table_html(table: Table) -> str:
    rows = []
    for row in table.rows:
        cells = "".join(f"<td>{escape(cell.text)}</td>" for cell in row.cells)
        rows.append(f"<tr>{cells}</tr>")
    return f"<table>{''.join(rows)}</table>"


def docx_to_html(content: bytes) -> str:
    """
    Convert a DOCX payload to an HTML fragment.

    Args:
        content: Raw .docx bytes

    Returns:
        HTML fragment (no ``<html>`` wrapper)
    """
    document = Document(BytesIO(content))
    out: list[str] = []
    open_list: Optional[str] = None

    for block in document.iter_inner_content():
        if isinstance(block, Table):
            if open_list:
                out.append(f"</{open_list}>")
                open_list = None
            out.append(_table_html(block))
            continue

        body = _runs_html(block)
        if not body.strip():
            continue

        list_tag = _list_tag(block)
        if list_tag != open_list:
            if open_list:
                out.append(f"</{open_list}>")
            if list_tag:
                out.append(f"<{list_tag}>")
            open_list = list_tag

        if list_tag:
            out.append(f"<li>{body}</li>")
        else:
            tag = _heading_tag(block) or "p"
            out.append(f"<{tag}>{body}</{tag}>")

    if open_list:
        out.append(f"</{open_list}>")
    return "\n".join(out)
