"""Recognition data models."""

from dataclasses import dataclass, field
from datetime import datetime

from ..utils.time import utc_now


@dataclass(frozen=True)
class RecognitionEvent:
    """One hypothesis from a recognizer result batch."""

    is_final: bool
    transcript: str
    timestamp: datetime = field(default_factory=utc_now)   # Arrival time


@dataclass(frozen=True)
class SessionOptions:
    """How a recognition session is configured at construction."""

    language: str = "en-US"
    continuous: bool = True
    interim_results: bool = True
