"""
Word progression data models.

This module defines immutable data structures for the target sentence,
per-word progress and the sentence-complete result.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterator, Optional

from ..errors import ChallengeStateError, EmptyTargetSequenceError
from ..text.normalizer import tokenize


class ChallengePhase(str, Enum):
    """Challenge lifecycle phases."""
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETE = "complete"


class WordStatus(str, Enum):
    """Per-word status shown to the reader."""
    PENDING = "pending"
    ACTIVE = "active"
    CORRECT = "correct"
    HELPED = "helped"


class WordOutcome(str, Enum):
    """Outcomes reported for UI highlighting."""
    CORRECT = "correct"
    ERROR = "error"
    HELPED = "helped"


_FINISHED = (WordStatus.CORRECT, WordStatus.HELPED)


@dataclass(frozen=True)
class TargetSequence:
    """Ordered, immutable tokens of the sentence being read."""

    tokens: tuple[str, ...]
    sentence: str = ""

    def __post_init__(self) -> None:
        if not self.tokens:
            raise EmptyTargetSequenceError(sentence=self.sentence or None)

    @classmethod
    def from_sentence(cls, sentence: str) -> "TargetSequence":
        """Tokenize a sentence into a target sequence."""
        return cls(tokens=tuple(tokenize(sentence)), sentence=sentence)

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> str:
        return self.tokens[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)


@dataclass(frozen=True)
class WordState:
    """Progress on a single target word."""

    status: WordStatus = WordStatus.PENDING
    attempts: int = 0                                # Recorded errors, never reset mid-challenge

    def with_status(self, status: WordStatus) -> "WordState":
        """Create new state with updated status; finished words stay finished."""
        if self.status in _FINISHED and status not in _FINISHED:
            raise ChallengeStateError(
                f"Cannot move word from {self.status.value} to {status.value}",
                current_state=self.status.value,
                attempted_transition=status.value
            )
        return WordState(status=status, attempts=self.attempts)

    def with_attempt(self) -> "WordState":
        """Record one more failed attempt."""
        return WordState(status=self.status, attempts=self.attempts + 1)

    @property
    def finished(self) -> bool:
        return self.status in _FINISHED


@dataclass(frozen=True)
class SentenceResult:
    """Payload of the sentence-complete event."""

    sentence: str
    total_words: int
    helped_words: tuple[str, ...]
    first_try_words: int = 0                         # Correct with no recorded error
    completed_at: Optional[datetime] = None
    attempts: tuple[int, ...] = field(default_factory=tuple)

    @property
    def words_correct(self) -> int:
        return self.total_words - len(self.helped_words)

    @property
    def first_attempt_mastery(self) -> float:
        """
        Percentage of words read correctly without a recorded error.

        Counts first-try words directly instead of subtracting the helped
        count from ``words_correct``, which already excludes helped words
        and would count them twice.
        """
        return round(100.0 * self.first_try_words / max(1, self.total_words), 1)
