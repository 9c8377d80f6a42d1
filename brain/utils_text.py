# -*- coding: utf-8 -*-
"""
brain.utils_text

Small text helpers shared by the brain modules.

Role
----
- normalize(text): trim + lower-case + collapse whitespace
- contains_any(text, keywords): does any keyword occur as a substring
- clean_field_value(value): turn an extracted model value into a string
  worth storing, or None when it is empty / "null"
- as_bool(value): read a model-provided flag
- preview(text, limit): shortened one-line text for log lines
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Optional


# ------------------------------------------------------------
# 1. Normalization
# ------------------------------------------------------------

def normalize(text: str) -> str:
    """
    Make user replies easy to compare:
    - strip both ends
    - lower-case
    - newlines and runs of whitespace become one space
    """
    if not text:
        return ""

    t = text.strip().lower()
    t = re.sub(r"\s+", " ", t)
    return t


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """
    True if any keyword occurs in text.
    Plain substring check; text is expected to be normalized already.
    """
    if not text:
        return False

    return any(kw in text for kw in keywords)


# ------------------------------------------------------------
# 2. Extracted field values
# ------------------------------------------------------------

_NULL_MARKERS = ("null",)


def clean_field_value(value: Any) -> Optional[str]:
    """
    Models answer missing fields with null, "null" or "".
    Those come back as None; everything else as a stripped string.
    """
    if value is None:
        return None

    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value).strip()

    if not text or text.lower() in _NULL_MARKERS:
        return None
    return text


def as_bool(value: Any) -> bool:
    """JSON booleans as-is; the strings "true"/"yes" from sloppier models too."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes")
    return bool(value)


# ------------------------------------------------------------
# 3. Logging helpers
# ------------------------------------------------------------

def preview(text: str, limit: int = 80) -> str:
    if not text:
        return ""
    one_line = text.replace("\n", " ")
    if len(one_line) <= limit:
        return one_line
    return one_line[:limit] + "..."
