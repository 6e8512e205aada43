"""Default configuration parameters for the reading challenge engine."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MatchingParams:
    """Fuzzy word matching parameters."""
    threshold: float = 0.68            # Min similarity, tolerant for kid speech
    match_window: int = 4              # Trailing tokens of a final transcript checked


@dataclass(frozen=True)
class RecognizerParams:
    """Speech recognizer session and restart parameters."""
    language: str = "en-US"
    continuous: bool = True
    interim_results: bool = True

    # Speech-end suppression before a word is declared unrecognized
    suppression_delay_ms: int = 800

    # Restart backoff: min(max, base + step * attempts)
    restart_base_delay_ms: int = 100
    restart_step_ms: int = 100
    restart_max_delay_ms: int = 1000
    max_restarts: int = 8


@dataclass(frozen=True)
class ChallengeParams:
    """Word progression parameters."""
    max_attempts: int = 2              # Errors on one word before it is helped
    help_settle_ms: int = 1100         # Pause after revealing a helped word


@dataclass(frozen=True)
class SelectionParams:
    """Sentence selection parameters."""
    default_level: int = 1
    fallback_sentence: str = "Read this sentence."
    prefer_struggling_words: bool = True


@dataclass(frozen=True)
class PersistenceParams:
    """Progress store parameters."""
    db_path: Optional[str] = None      # No progress store when unset
    max_sessions: int = 200            # Most recent sessions kept


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    matching: MatchingParams
    recognizer: RecognizerParams
    challenge: ChallengeParams
    selection: SelectionParams
    persistence: PersistenceParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        matching=MatchingParams(),
        recognizer=RecognizerParams(),
        challenge=ChallengeParams(),
        selection=SelectionParams(),
        persistence=PersistenceParams(),
    )
