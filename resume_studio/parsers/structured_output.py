"""
Recovery of structured data from language-model output.

Models are asked for JSON but routinely wrap it in Markdown fences, prefix it
with commentary, or emit it slightly malformed. The helpers here are applied
in order by ``recover_structured`` until one yields a usable value.
"""

import json
import re
from typing import Any, Literal, Optional

from json_repair import repair_json
from pydantic import BaseModel

Expect = Literal["object", "array", "any"]

_FENCE = re.compile(r"```[a-zA-Z0-9_-]*[ \t]*\r?\n?(.*?)```", re.DOTALL)
_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")
_MAX_SALVAGE_CHARS = 300


class RecoveryResult(BaseModel):
    """Outcome of a recovery attempt; ``strategy`` names the step that succeeded."""

    value: Any = None
    strategy: str

    @property
    def is_structured(self) -> bool:
        return isinstance(self.value, (dict, list))

    @property
    def text(self) -> str:
        """Fallback string, or empty when the value is structured."""
        return self.value if isinstance(self.value, str) else ""


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences, keeping their contents."""
    if not text:
        return ""
    out = _FENCE.sub(lambda m: m.group(1), text)
    # Unterminated fence left behind by a truncated response
    out = re.sub(r"^```[a-zA-Z0-9_-]*\s*", "", out.strip())
    out = re.sub(r"\s*```$", "", out)
    return out.strip()


def _accepts(value: Any, expect: Expect, allow_empty: bool = False) -> bool:
    if expect == "object":
        shaped = isinstance(value, dict)
    elif expect == "array":
        shaped = isinstance(value, list)
    else:
        shaped = isinstance(value, (dict, list))
    return shaped and (allow_empty or bool(value))


def parse_strict(text: str, expect: Expect = "any", allow_empty: bool = False) -> Optional[Any]:
    """Plain ``json.loads``; None unless the result has the expected shape."""
    try:
        value = json.loads(text)
    except (json.JSONDecodeError, TypeError, ValueError):
        return None
    return value if _accepts(value, expect, allow_empty) else None


def parse_repaired(text: str, expect: Expect = "any", allow_empty: bool = False) -> Optional[Any]:
    """Permissive repair and parse; prose repaired into a bare string is rejected."""
    if not text or not text.strip():
        return None
    try:
        value = repair_json(text, return_objects=True)
    except Exception:  # repair_json raises assorted errors on hostile input
        return None
    return value if _accepts(value, expect, allow_empty) else None


def decode_embedded(
    text: str, expect: Expect = "object", allow_empty: bool = False
) -> Optional[Any]:
    """
    First complete JSON value embedded in the text that has the expected shape.

    Decoding starts at each opening bracket in turn, so braces in the
    surrounding prose never become part of the result.
    """
    if not text:
        return None
    openings = {"object": "{", "array": "[", "any": "{["}[expect]
    decoder = json.JSONDecoder()
    for index, char in enumerate(text):
        if char not in openings:
            continue
        try:
            value, _ = decoder.raw_decode(text, index)
        except (ValueError, RecursionError):
            continue
        if _accepts(value, expect, allow_empty):
            return value
    return None


def extract_embedded(text: str, expect: Expect = "object") -> Optional[str]:
    """Substring from the first opening bracket to the last matching closing one."""
    if not text:
        return None
    pairs = {"object": [("{", "}")], "array": [("[", "]")], "any": [("{", "}"), ("[", "]")]}
    candidates = []
    for opening, closing in pairs[expect]:
        start = text.find(opening)
        end = text.rfind(closing)
        if start != -1 and end > start:
            candidates.append((start, text[start : end + 1]))
    if not candidates:
        return None
    # Prefer whichever structure opens first in the text
    return min(candidates, key=lambda c: c[0])[1]


def salvage_heuristic(text: str, label: str = "summary") -> Optional[str]:
    """
    Last-resort extraction of a usable string.

    Tries a labeled JSON-like field (``"summary": "..."``) first, then the
    first two sentences of the whitespace-collapsed text.
    """
    if not text:
        return None
    match = re.search(rf'"{re.escape(label)}"\s*:\s*"((?:[^"\\]|\\.)*)"', text, re.DOTALL)
    if match:
        raw = match.group(1)
        try:
            return json.loads(f'"{raw}"').strip() or None
        except json.JSONDecodeError:
            return raw.strip() or None

    cleaned = re.sub(r"\s+", " ", text).strip()
    if not cleaned:
        return None
    sentences = " ".join(_SENTENCE_SPLIT.split(cleaned)[:2])
    return (sentences or cleaned)[:_MAX_SALVAGE_CHARS].strip()


def recover_structured(
    text: Optional[str],
    expect: Expect = "object",
    label: str = "summary",
    allow_empty: bool = False,
) -> RecoveryResult:
    """
    Run the recovery chain over raw model output. Never raises.

    Args:
        text: Raw model output
        expect: Shape required for structured success
        label: Field name tried by the heuristic salvage step
        allow_empty: Accept an empty object or array as structured success

    Returns:
        RecoveryResult holding a dict/list on structured success, otherwise a
        fallback string (possibly empty) with strategy ``heuristic`` or ``none``
    """
    unfenced = strip_code_fences(text or "")
    if not unfenced:
        return RecoveryResult(value="", strategy="none")

    value = parse_strict(unfenced, expect, allow_empty)
    if value is not None:
        return RecoveryResult(value=value, strategy="strict")

    # Whole-text repair only for text that opens as JSON; repairing prose
    # yields arbitrary fragments
    if unfenced.startswith(("{", "[")):
        value = parse_repaired(unfenced, expect, allow_empty)
        if value is not None:
            return RecoveryResult(value=value, strategy="repair")

    value = decode_embedded(unfenced, expect, allow_empty)
    if value is not None:
        return RecoveryResult(value=value, strategy="extract")

    embedded = extract_embedded(unfenced, expect)
    if embedded is not None:
        value = parse_repaired(embedded, expect, allow_empty)
        if value is not None:
            return RecoveryResult(value=value, strategy="extract")

    salvaged = salvage_heuristic(unfenced, label)
    if salvaged:
        return RecoveryResult(value=salvaged, strategy="heuristic")
    return RecoveryResult(value="", strategy="none")
