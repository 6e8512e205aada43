"""
Challenge error classifications for word progression misuse.
"""

from typing import Optional, Dict, Any


class ChallengeError(Exception):
    """Base class for reading challenge errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class EmptyTargetSequenceError(ChallengeError):
    """A target sequence must hold at least one token."""

    def __init__(self, message: str = "Target sequence is empty",
                 sentence: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.sentence = sentence


class ChallengeStateError(ChallengeError):
    """Invalid word or phase transition."""

    def __init__(self, message: str, current_state: Optional[str] = None,
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_transition = attempted_transition


class SentenceSourceError(ChallengeError):
    """The sentence bank could not be read."""

    def __init__(self, message: str, source: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.source = source
