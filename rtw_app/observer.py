"""
Outbound event contract of the reading challenge engine.

Hosts subclass ``ChallengeObserver`` and override what they render. Every
method defaults to a no-op.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state.models import SentenceResult, WordOutcome


class ChallengeObserver:
    """Receives word outcomes and recognizer fallback signals."""

    def on_word_outcome(self, index: int, outcome: "WordOutcome") -> None:
        """A word was read correctly, missed (error pulse) or revealed."""

    def on_sentence_complete(self, result: "SentenceResult") -> None:
        """Every word is correct or helped. Fires once per challenge."""

    def on_recognition_unsupported(self) -> None:
        """The host has no speech recognizer. Fatal for the challenge."""

    def on_gesture_required(self) -> None:
        """Show the manual "tap to enable mic" control."""

    def on_gesture_cleared(self) -> None:
        """Hide the manual start control."""

    def on_listening_changed(self, listening: bool) -> None:
        """Show or hide the listening indicator."""
