"""Text normalization and fuzzy word matching."""

from .normalizer import normalize, tokenize
from .similarity import edit_distance, is_match, matches_window, similarity

__all__ = [
    "normalize",
    "tokenize",
    "edit_distance",
    "similarity",
    "is_match",
    "matches_window",
]
