"""Sentence bank and weak-word biased sentence selection."""

from .sentences import SentenceBank, SentenceLevel

__all__ = ["SentenceBank", "SentenceLevel"]
