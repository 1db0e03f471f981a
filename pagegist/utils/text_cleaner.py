"""Helpers to normalise extracted text."""

import re

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_whitespace(raw_text: str | None) -> str:
    """Collapse every whitespace run to a single space and trim the ends."""
    if not raw_text:
        return ""
    return _WHITESPACE_RUN.sub(" ", raw_text).strip()
