"""HTML to PDF compilation backends."""

from ..config import StudioConfig
from ..exceptions import ConfigurationError
from .browser import browser_page
from .chromium_compiler import ChromiumCompiler
from .weasyprint_compiler import WeasyPrintCompiler

__all__ = ["ChromiumCompiler", "WeasyPrintCompiler", "browser_page", "get_compiler"]
COMPILERS = {"chromium": ChromiumCompiler, "weasyprint": WeasyPrintCompiler}


def get_compiler(config: StudioConfig):
    """Instantiate the configured backend."""
    compiler_cls = COMPILERS.get(config.pdf_backend)
    if not compiler_cls:
        raise ConfigurationError(f"Unsupported PDF_BACKEND: {config.pdf_backend}")
    return compiler_cls(config)
