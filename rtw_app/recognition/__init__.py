"""
Speech recognizer session contract and lifecycle management.

The host supplies a RecognitionSession implementation; the lifecycle
manager owns starting, stopping and restarting it.
"""

from .lifecycle import RecognitionSink, RecognizerLifecycleManager
from .models import RecognitionEvent, SessionOptions
from .session import RecognitionHandler, RecognitionSession, SessionFactory, no_recognizer

__all__ = [
    "RecognitionEvent",
    "RecognitionHandler",
    "RecognitionSession",
    "RecognitionSink",
    "RecognizerLifecycleManager",
    "SessionFactory",
    "SessionOptions",
    "no_recognizer",
]
