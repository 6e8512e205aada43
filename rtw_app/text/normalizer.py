"""
Transcript and sentence normalization.

Tokens are lowercase runs of ``[a-z0-9']``. Everything else, including
accented letters and hyphens, becomes a word break, so "Ice-cream!" reads
as two tokens.
"""

import re
from typing import Optional

_DISALLOWED = re.compile(r"[^a-z0-9\s']")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: Optional[str]) -> str:
    """Lowercase, blank out punctuation and collapse whitespace."""
    lowered = (text or "").lower()
    return _WHITESPACE.sub(" ", _DISALLOWED.sub(" ", lowered)).strip()


def tokenize(text: Optional[str]) -> list[str]:
    """Split normalized text into tokens."""
    return [token for token in normalize(text).split(" ") if token]
