"""
Recognizer lifecycle management.

Keeps a single host recognition session alive for the duration of a
challenge. The caller's intent (``should_run``) is tracked separately from
what the recognizer last reported (``is_active``) because end and error
events arrive asynchronously and race with stop requests.

Unexpected session ends and errors are retried with a growing delay. After
``max_restarts`` consecutive automatic restarts the manager gives up and asks
for a manual start instead.

A speech-end event does not mean the word was missed: the final transcript
for the same utterance often arrives afterwards. The miss is reported only
after ``suppression_delay_ms`` and only if the active word has not changed.
"""

from collections.abc import Sequence
from typing import Optional, Protocol

from ..config.defaults import RecognizerParams
from ..errors import RecognitionUnsupportedError, RecognizerSessionError
from ..logging.config import get_recognizer_logger
from ..observer import ChallengeObserver
from ..utils.clock import Clock, TimerHandle
from .models import RecognitionEvent, SessionOptions
from .session import RecognitionHandler, RecognitionSession, SessionFactory

logger = get_recognizer_logger(__name__)


class RecognitionSink(Protocol):
    """Word tracker fed by the lifecycle manager."""

    @property
    def current_index(self) -> int: ...

    @property
    def is_exhausted(self) -> bool: ...

    def submit_recognized_text(self, text: str) -> bool: ...

    def register_word_error(self, index: int) -> bool: ...


class RecognizerLifecycleManager(RecognitionHandler):
    """Owns start/stop/restart of the recognition session."""

    def __init__(
        self,
        session_factory: SessionFactory,
        clock: Clock,
        sink: RecognitionSink,
        observer: Optional[ChallengeObserver] = None,
        params: Optional[RecognizerParams] = None
    ) -> None:
        self.logger = logger
        self.session_factory = session_factory
        self.clock = clock
        self.sink = sink
        self.observer = observer or ChallengeObserver()
        self.params = params or RecognizerParams()

        self._session: Optional[RecognitionSession] = None
        self._should_run = False
        self._active = False
        self._unsupported = False
        self._restart_attempts = 0
        self._restart_timer: Optional[TimerHandle] = None
        self._suppression_timer: Optional[TimerHandle] = None
        self._gesture_visible = False
        self._listening = False

    @property
    def should_run(self) -> bool:
        return self._should_run

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def is_unsupported(self) -> bool:
        return self._unsupported

    @property
    def restart_attempts(self) -> int:
        return self._restart_attempts

    @property
    def gesture_visible(self) -> bool:
        return self._gesture_visible

    @property
    def listening(self) -> bool:
        return self._listening

    @property
    def restart_pending(self) -> bool:
        return self._restart_timer is not None

    @property
    def suppression_pending(self) -> bool:
        return self._suppression_timer is not None

    @property
    def session_options(self) -> SessionOptions:
        return SessionOptions(
            language=self.params.language,
            continuous=self.params.continuous,
            interim_results=self.params.interim_results,
        )

    def restart_delay(self, attempts: int) -> int:
        """Delay in milliseconds before the restart following ``attempts`` restarts."""
        return min(
            self.params.restart_max_delay_ms,
            self.params.restart_base_delay_ms + self.params.restart_step_ms * attempts
        )

    def reset_backoff(self) -> None:
        """Forget earlier restarts, e.g. at the start of a new challenge."""
        self._restart_attempts = 0

    def start(self, from_manual_gesture: bool = False) -> bool:
        """
        Ask the recognizer to start listening.

        Never raises. A refused start shows the manual start control; a host
        without a recognizer is reported once and never retried.

        Args:
            from_manual_gesture: True when triggered by a user tap

        Returns:
            True if the session is (already) running
        """
        if self._unsupported:
            return False

        self._should_run = True
        if from_manual_gesture:
            self._cancel_restart()
            self.reset_backoff()

        if self._active:
            self.logger.debug("Recognizer already active, ignoring start")
            return True

        if self._session is None:
            try:
                self._session = self.session_factory(self.session_options)
            except RecognitionUnsupportedError as e:
                self._unsupported = True
                self._should_run = False
                self.logger.error(
                    "Speech recognition not supported",
                    error=str(e),
                    context=e.context
                )
                self.observer.on_recognition_unsupported()
                return False
            self._session.bind(self)

        try:
            self._session.start()
        except Exception as e:
            self.logger.warning(
                "Recognizer start refused, manual start required",
                error=str(e),
                error_type=type(e).__name__,
                from_manual_gesture=from_manual_gesture
            )
            self._show_gesture()
            return False

        self._active = True
        self._hide_gesture()
        self._set_listening(True)
        self.logger.info(
            "Recognizer started",
            from_manual_gesture=from_manual_gesture,
            restart_attempts=self._restart_attempts,
            language=self.params.language
        )
        return True

    def stop(self) -> None:
        """Stop listening and cancel all pending timers. Idempotent."""
        self._should_run = False
        if self._session is not None and self._active:
            try:
                self._session.stop()
            except Exception as e:
                self.logger.warning("Recognizer stop failed", error=str(e))
        self._active = False
        self._cancel_suppression()
        self._cancel_restart()
        self._set_listening(False)
        self._hide_gesture()
        self.logger.debug("Recognizer stopped")

    # Session events

    def on_result(self, events: Sequence[RecognitionEvent]) -> None:
        if not self._should_run:
            return

        # A delivered batch proves the session is healthy again
        self._restart_attempts = 0

        final_text = " ".join(
            event.transcript.strip() for event in events
            if event.is_final and event.transcript.strip()
        )
        if not final_text:
            return

        self.logger.debug("Final transcript", transcript=final_text,
                          word_index=self.sink.current_index)
        if self.sink.submit_recognized_text(final_text):
            self._cancel_suppression()

    def on_speech_start(self) -> None:
        self._set_listening(True)
        self._cancel_suppression()

    def on_speech_end(self) -> None:
        if not self._should_run or self.sink.is_exhausted:
            return

        self._cancel_suppression()
        index = self.sink.current_index
        self._suppression_timer = self.clock.call_later(
            self.params.suppression_delay_ms,
            lambda: self._on_suppression_elapsed(index)
        )

    def on_end(self) -> None:
        self._active = False
        self.logger.debug("Recognizer session ended", should_run=self._should_run)
        if self._should_run and not self.sink.is_exhausted:
            self._schedule_restart(reason="session_end")

    def on_error(self, error: Exception) -> None:
        self.logger.warning(
            "Recognizer session error",
            error=str(error),
            error_code=getattr(error, "error_code", None),
            should_run=self._should_run
        )
        if self._should_run:
            self._schedule_restart(reason="session_error")

    def report_error(self, error_code: str) -> None:
        """Convenience for adapters that only receive an error code."""
        self.on_error(RecognizerSessionError(f"Recognizer error: {error_code}",
                                             error_code=error_code))

    # Timers

    def _on_suppression_elapsed(self, index: int) -> None:
        self._suppression_timer = None
        if self.sink.is_exhausted or self.sink.current_index != index:
            self.logger.debug("Suppression timer is stale", scheduled_index=index,
                              current_index=self.sink.current_index)
            return
        self.logger.info("No final result after speech end", word_index=index,
                         delay_ms=self.params.suppression_delay_ms)
        self.sink.register_word_error(index)

    def _schedule_restart(self, reason: str) -> None:
        if self._restart_timer is not None:
            return

        if self._restart_attempts >= self.params.max_restarts:
            self.logger.warning(
                "Restart limit reached, waiting for manual start",
                restart_attempts=self._restart_attempts,
                reason=reason
            )
            self._show_gesture()
            return

        delay = self.restart_delay(self._restart_attempts)
        self._restart_attempts += 1
        self.logger.info(
            "Scheduling recognizer restart",
            reason=reason,
            delay_ms=delay,
            restart_attempts=self._restart_attempts
        )
        self._restart_timer = self.clock.call_later(delay, self._on_restart_due)

    def _on_restart_due(self) -> None:
        self._restart_timer = None
        if self._should_run:
            self.start(from_manual_gesture=False)

    def _cancel_suppression(self) -> None:
        if self._suppression_timer is not None:
            self._suppression_timer.cancel()
            self._suppression_timer = None

    def _cancel_restart(self) -> None:
        if self._restart_timer is not None:
            self._restart_timer.cancel()
            self._restart_timer = None

    # Indicators

    def _show_gesture(self) -> None:
        if not self._gesture_visible:
            self._gesture_visible = True
            self.observer.on_gesture_required()

    def _hide_gesture(self) -> None:
        if self._gesture_visible:
            self._gesture_visible = False
            self.observer.on_gesture_cleared()

    def _set_listening(self, listening: bool) -> None:
        if self._listening != listening:
            self._listening = listening
            self.observer.on_listening_changed(listening)
