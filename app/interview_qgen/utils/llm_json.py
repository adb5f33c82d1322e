"""Pull JSON question lists out of chatty model replies."""

from __future__ import annotations
import json
import re
from typing import Any

_FENCE = re.compile(r"^```[\w-]*\s*(.*?)\s*```$", re.DOTALL)
_DECODER = json.JSONDecoder()


def _strip_code_fences(text: str) -> str:
    """Unwrap a reply that is one ``` fenced block (with or without a language tag)."""
    t = text.strip()
    m = _FENCE.match(t)
    return m.group(1).strip() if m else t


def extract_json(text: str) -> Any:
    """
    Parse the first JSON array or object in `text`, skipping any prose around it.
    Returns {} when nothing parses.
    """
    if not text:
        return {}
    t = _strip_code_fences(text)
    for i, ch in enumerate(t):
        if ch not in "[{":
            continue
        try:
            value, _ = _DECODER.raw_decode(t, i)
        except ValueError:
            continue
        return value
    return {}


def string_items(data: Any, *, key: str = "questions") -> list[str]:
    """
    Non-empty strings from a bare array or from `data[key]`. Items may be
    objects carrying "question" or "text". Anything else gives [].
    """
    if isinstance(data, dict):
        data = data.get(key)
    if not isinstance(data, list):
        return []
    out = []
    for item in data:
        if isinstance(item, dict):
            item = item.get("question") or item.get("text") or ""
        s = str(item or "").strip()
        if s:
            out.append(s)
    return out
