"""Document rasterization for vision analysis."""

from .document_rasterizer import DocumentRasterizer, detect_format, printable_ratio, validate_pdf
from .docx_html import docx_to_html

__all__ = [
    "DocumentRasterizer",
    "detect_format",
    "docx_to_html",
    "printable_ratio",
    "validate_pdf",
]
