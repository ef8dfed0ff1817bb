"""Resume content polishing."""

from .content_polisher import ContentPolisher, coerce_bullets, sanitize_summary

__all__ = ["ContentPolisher", "coerce_bullets", "sanitize_summary"]
