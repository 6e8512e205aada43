"""
Error classification for the reading challenge engine.

Recognition errors describe what went wrong with the host speech recognizer
and whether the engine can recover on its own. Challenge errors describe
misuse of the word progression model.
"""

from .recognition import (
    RecognitionError,
    RecognitionUnsupportedError,
    RecognizerStartError,
    RecognizerSessionError,
)
from .challenge import (
    ChallengeError,
    EmptyTargetSequenceError,
    ChallengeStateError,
    SentenceSourceError,
)

__all__ = [
    # Recognition Errors
    "RecognitionError",
    "RecognitionUnsupportedError",
    "RecognizerStartError",
    "RecognizerSessionError",
    # Challenge Errors
    "ChallengeError",
    "EmptyTargetSequenceError",
    "ChallengeStateError",
    "SentenceSourceError",
]
