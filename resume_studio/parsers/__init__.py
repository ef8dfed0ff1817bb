"""Parsing utilities for model output."""

from .structured_output import (
    RecoveryResult,
    decode_embedded,
    extract_embedded,
    parse_repaired,
    parse_strict,
    recover_structured,
    salvage_heuristic,
    strip_code_fences,
)

__all__ = [
    "RecoveryResult",
    "decode_embedded",
    "extract_embedded",
    "parse_repaired",
    "parse_strict",
    "recover_structured",
    "salvage_heuristic",
    "strip_code_fences",
]
