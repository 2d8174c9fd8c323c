"""Clean user supplied fact text before layout."""

import unicodedata
from typing import List

ALLOWED_PUNCTUATION = frozenset(".,;:!?'\"()-")


def _is_allowed(char: str) -> bool:
    if char.isspace() or char in ALLOWED_PUNCTUATION:
        return True
    # Letters (L*) and numbers (N*); emoji and other symbols are S*
    return unicodedata.category(char)[0] in ("L", "N")


def sanitize_text(raw: str) -> str:
    """Drop characters the renderer should not draw.

    Keeps letters, digits, whitespace and a small punctuation set, then
    collapses whitespace.

    Args:
        raw: Text as typed by the user.

    Returns:
        The cleaned text.
    """
    kept = "".join(char for char in str(raw or "") if _is_allowed(char))
    return " ".join(kept.split())


def split_fact_lines(text: str) -> List[str]:
    """Split a message into one fact per non-empty line."""
    return [line.strip() for line in (text or "").splitlines() if line.strip()]
