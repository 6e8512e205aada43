"""
Recognition error classifications.

Transient session faults and gesture-blocked starts are recoverable: the
lifecycle manager retries or asks the user for a tap. A host with no
recognizer at all is not.
"""

from typing import Optional, Dict, Any


class RecognitionError(Exception):
    """Base class for speech recognizer failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class RecognitionUnsupportedError(RecognitionError):
    """The host provides no speech recognizer implementation."""

    def __init__(self, message: str = "Speech recognition not supported",
                 host: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.host = host
        self.recoverable = False


class RecognizerStartError(RecognitionError):
    """Starting the session was refused, usually for lack of a user gesture."""

    def __init__(self, message: str, requires_gesture: bool = True, **kwargs):
        super().__init__(message, **kwargs)
        self.requires_gesture = requires_gesture


class RecognizerSessionError(RecognitionError):
    """Session reported an error mid-stream (network, no-speech, aborted)."""

    def __init__(self, message: str, error_code: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.error_code = error_code
