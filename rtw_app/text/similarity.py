"""
Edit-distance based fuzzy matching between single tokens.

The default threshold of 0.68 accepts one slip in a four-letter word
("jump"/"jumpp" scores 0.8) and rejects unrelated short words.
"""

from collections.abc import Sequence

from rapidfuzz.distance import Levenshtein

DEFAULT_THRESHOLD = 0.68
DEFAULT_MATCH_WINDOW = 4


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit insert, delete and substitute costs."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """
    Normalized similarity in [0, 1].

    Args:
        a: First token
        b: Second token

    Returns:
        ``1 - distance / longest length``; two empty strings score 1.0
    """
    a = (a or "").lower()
    b = (b or "").lower()
    denom = max(len(a), len(b), 1)
    return 1.0 - edit_distance(a, b) / denom


def is_match(target: str, candidate: str, threshold: float = DEFAULT_THRESHOLD) -> bool:
    """True when the candidate is close enough to the target word."""
    return similarity(target, candidate) >= threshold


def matches_window(
    target: str,
    tokens: Sequence[str],
    threshold: float = DEFAULT_THRESHOLD,
    window: int = DEFAULT_MATCH_WINDOW
) -> bool:
    """
    Check the target against the most recent tokens of a transcript.

    Only the last ``window`` tokens are considered so earlier words of a
    long final transcript cannot satisfy the current word.
    """
    if window <= 0:
        return False
    return any(is_match(target, token, threshold) for token in tokens[-window:])
