"""HTML resume layouts."""

from ..models import PolishedResume, RenderStyle
from .base import BaseTemplate, build_view, sentence_split
from .classic import ClassicTemplate
from .compact import CompactTemplate
from .creative import CreativeTemplate
from .elegant import ElegantTemplate
from .minimal import MinimalTemplate
from .modern import ModernTemplate

TEMPLATES = {
    RenderStyle.CLASSIC: ClassicTemplate,
    RenderStyle.MODERN: ModernTemplate,
    RenderStyle.MINIMAL: MinimalTemplate,
    RenderStyle.ELEGANT: ElegantTemplate,
    RenderStyle.COMPACT: CompactTemplate,
    RenderStyle.CREATIVE: CreativeTemplate,
}


def render_resume(polished: PolishedResume, style: "RenderStyle | str | None" = None) -> str:
    """Render a polished resume as HTML; unknown styles fall back to classic."""
    template_cls = TEMPLATES[RenderStyle.from_tag(style)]
    return template_cls().render(polished)


__all__ = [
    "BaseTemplate",
    "TEMPLATES",
    "build_view",
    "render_resume",
    "sentence_split",
    "ClassicTemplate",
    "CompactTemplate",
    "CreativeTemplate",
    "ElegantTemplate",
    "MinimalTemplate",
    "ModernTemplate",
]
