"""
Reading challenge coordinator.

Wires sentence selection, the word progression state machine, the
recognizer lifecycle manager and progress persistence:
Sentence Bank → Target Sequence → Recognizer → Word Checks → Session Record
"""

from dataclasses import asdict
from pathlib import Path
from random import Random
from typing import Optional

import structlog

from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .errors import EmptyTargetSequenceError
from .observer import ChallengeObserver
from .persistence.progress_store import ProgressStore
from .recognition.lifecycle import RecognizerLifecycleManager
from .recognition.session import SessionFactory, no_recognizer
from .selection.sentences import SentenceBank
from .state.machine import WordProgressionMachine
from .state.models import SentenceResult, TargetSequence, WordOutcome
from .utils.clock import AsyncioClock, Clock

logger = structlog.get_logger(__name__)


class ReadingChallengeEngine(ChallengeObserver):
    """
    Main coordinator for read-aloud challenges.

    Receives the component events first, reacts to completion (stop
    listening, persist the session) and forwards everything to the host
    observer.
    """

    def __init__(
        self,
        session_factory: Optional[SessionFactory] = None,
        clock: Optional[Clock] = None,
        observer: Optional[ChallengeObserver] = None,
        config: Optional[DefaultConfig] = None,
        config_dir: Optional[Path] = None,
        sentence_bank: Optional[SentenceBank] = None,
        store: Optional[ProgressStore] = None,
        rng: Optional[Random] = None
    ) -> None:
        """Initialize the reading challenge engine."""
        self.logger = logger
        loader = ConfigLoader.create(config_dir)
        self.config = config or loader.load_config()

        validation_errors = ConfigValidator.validate_config(asdict(self.config))
        if validation_errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in validation_errors]
            self.logger.error("Configuration validation failed", errors=error_msgs)
            raise ValueError("Invalid configuration: " + "; ".join(error_msgs))

        self.clock = clock or AsyncioClock()
        self.observer = observer or ChallengeObserver()
        persistence = self.config.persistence
        if store is None and persistence.db_path:
            store = ProgressStore(persistence.db_path, max_sessions=persistence.max_sessions)
        self.store = store
        self.bank = sentence_bank or SentenceBank.load_or_fallback(
            loader.config_dir / "sentences.yaml", self.config.selection
        )
        self.rng = rng or Random()

        struggling = self.store.load_struggling_words() if self.store else {}
        self.focus_words: list[str] = self.store.load_focus_words() if self.store else []

        self.machine = WordProgressionMachine(
            clock=self.clock,
            observer=self,
            challenge=self.config.challenge,
            matching=self.config.matching,
            struggling_words=struggling,
        )
        self.lifecycle = RecognizerLifecycleManager(
            session_factory=session_factory or no_recognizer,
            clock=self.clock,
            sink=self.machine,
            observer=self,
            params=self.config.recognizer,
        )

        self.logger.info("Reading challenge engine initialized",
                         levels=len(self.bank.levels),
                         persistent=self.store is not None)

    @property
    def struggling_words(self) -> dict[str, int]:
        return dict(self.machine.struggling_words)

    def start_challenge(
        self,
        level_id: Optional[int] = None,
        sentence: Optional[str] = None
    ) -> Optional[TargetSequence]:
        """
        Select a sentence, begin word progression and start listening.

        Args:
            level_id: Difficulty level for selection
            sentence: Explicit sentence, bypassing selection

        Returns:
            The target sequence, or None if no challenge could start
        """
        if self.lifecycle.is_unsupported:
            self.logger.warning("Cannot start challenge without speech recognition")
            return None

        self.lifecycle.stop()

        if sentence is None:
            sentence = self.bank.choose_sentence(
                level_id,
                struggling_words=self.machine.struggling_words.keys(),
                focus_words=self.focus_words,
                rng=self.rng,
            )

        try:
            target = TargetSequence.from_sentence(sentence)
        except EmptyTargetSequenceError:
            self.logger.error("Sentence has no readable words", sentence=sentence)
            return None

        self.machine.begin(target)
        self.lifecycle.reset_backoff()
        if not self.lifecycle.start(from_manual_gesture=False) and self.lifecycle.is_unsupported:
            self.machine.abort()
            return None
        return target

    def manual_start(self) -> bool:
        """Start listening from a user tap on the manual start control."""
        return self.lifecycle.start(from_manual_gesture=True)

    def request_help(self) -> bool:
        """Reveal the active word."""
        return self.machine.help()

    def skip_word(self) -> bool:
        """Skip the active word."""
        return self.machine.skip()

    def abort(self) -> None:
        """Stop listening and drop the challenge without recording it."""
        self.lifecycle.stop()
        self.machine.abort()

    # ChallengeObserver

    def on_word_outcome(self, index: int, outcome: WordOutcome) -> None:
        self.observer.on_word_outcome(index, outcome)

    def on_sentence_complete(self, result: SentenceResult) -> None:
        self.lifecycle.stop()
        if self.store is not None:
            self.store.record_session(result)
            self.store.save_struggling_words(self.machine.struggling_words)
        self.observer.on_sentence_complete(result)

    def on_recognition_unsupported(self) -> None:
        self.observer.on_recognition_unsupported()

    def on_gesture_required(self) -> None:
        self.observer.on_gesture_required()

    def on_gesture_cleared(self) -> None:
        self.observer.on_gesture_cleared()

    def on_listening_changed(self, listening: bool) -> None:
        self.observer.on_listening_changed(listening)
