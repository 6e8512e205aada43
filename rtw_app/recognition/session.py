"""
Host speech recognizer contract.

A host adapter subclasses ``RecognitionSession`` and forwards the
underlying recognizer's callbacks to the bound ``RecognitionHandler``.
``start()`` and ``stop()`` are fire-and-forget: outcomes arrive later
through the handler. ``start()`` raises when the host refuses to start,
for example without a user gesture.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Callable, Optional

from ..errors import RecognitionUnsupportedError
from .models import RecognitionEvent, SessionOptions


class RecognitionHandler(ABC):
    """Receives recognizer session events."""

    @abstractmethod
    def on_result(self, events: Sequence[RecognitionEvent]) -> None:
        """Hypotheses of the current result batch, in order."""

    @abstractmethod
    def on_speech_start(self) -> None:
        """Speech detected."""

    @abstractmethod
    def on_speech_end(self) -> None:
        """Speech stopped. Final results may still follow."""

    @abstractmethod
    def on_end(self) -> None:
        """The session ended."""

    @abstractmethod
    def on_error(self, error: Exception) -> None:
        """The session reported an error."""


class RecognitionSession(ABC):
    """A live speech recognition session provided by the host."""

    def __init__(self, options: SessionOptions):
        self.options = options
        self.handler: Optional[RecognitionHandler] = None

    def bind(self, handler: RecognitionHandler) -> None:
        """Route session events to ``handler``."""
        self.handler = handler

    @abstractmethod
    def start(self) -> None:
        """Begin listening."""

    @abstractmethod
    def stop(self) -> None:
        """Stop listening; ``on_end`` follows."""


SessionFactory = Callable[[SessionOptions], RecognitionSession]


def no_recognizer(options: SessionOptions) -> RecognitionSession:
    """Factory for hosts without speech recognition."""
    raise RecognitionUnsupportedError(context={"language": options.language})
