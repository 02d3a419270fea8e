from __future__ import annotations

import re

_NON_LETTER = re.compile(r"[^A-Z ]")
_WHITESPACE = re.compile(r"\s+")


def normalize_name(raw: str) -> str:
    """Uppercase, keep only A-Z and spaces, collapse whitespace runs."""
    text = _NON_LETTER.sub("", raw.upper())
    return _WHITESPACE.sub(" ", text).strip()
