"""Pytest configuration and shared fixtures."""

import pytest
from typing import Any, List, Optional, Tuple

from rtw_app.config.defaults import ChallengeParams, MatchingParams, RecognizerParams
from rtw_app.errors import RecognizerStartError
from rtw_app.observer import ChallengeObserver
from rtw_app.recognition.lifecycle import RecognizerLifecycleManager
from rtw_app.recognition.models import RecognitionEvent, SessionOptions
from rtw_app.recognition.session import RecognitionSession
from rtw_app.state.machine import WordProgressionMachine
from rtw_app.utils.clock import ManualClock


class RecordingObserver(ChallengeObserver):
    """Observer that records every event in order."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Any]] = []

    def on_word_outcome(self, index, outcome):
        self.events.append(("word", (index, outcome.value)))

    def on_sentence_complete(self, result):
        self.events.append(("complete", result))

    def on_recognition_unsupported(self):
        self.events.append(("unsupported", None))

    def on_gesture_required(self):
        self.events.append(("gesture_required", None))

    def on_gesture_cleared(self):
        self.events.append(("gesture_cleared", None))

    def on_listening_changed(self, listening):
        self.events.append(("listening", listening))

    def of(self, kind: str) -> list:
        return [payload for name, payload in self.events if name == kind]

    @property
    def outcomes(self) -> list:
        return self.of("word")

    @property
    def completions(self) -> list:
        return self.of("complete")


class FakeRecognitionSession(RecognitionSession):
    """Scriptable stand-in for a host recognizer."""

    def __init__(self, options: SessionOptions, refuse_starts: int = 0) -> None:
        super().__init__(options)
        self.start_calls = 0
        self.stop_calls = 0
        self.refuse_starts = refuse_starts

    def start(self) -> None:
        self.start_calls += 1
        if self.refuse_starts > 0:
            self.refuse_starts -= 1
            raise RecognizerStartError("not-allowed: user gesture required")

    def stop(self) -> None:
        self.stop_calls += 1

    # Helpers driving the bound handler the way a host would

    def say(self, *finals: str, interim: Optional[str] = None) -> None:
        events = [RecognitionEvent(is_final=True, transcript=text) for text in finals]
        if interim is not None:
            events.append(RecognitionEvent(is_final=False, transcript=interim))
        self.handler.on_result(events)

    def speech_start(self) -> None:
        self.handler.on_speech_start()

    def speech_end(self) -> None:
        self.handler.on_speech_end()

    def end(self) -> None:
        self.handler.on_end()

    def error(self, exc: Exception) -> None:
        self.handler.on_error(exc)


class FakeSessionFactory:
    """Session factory recording what it built."""

    def __init__(self, refuse_starts: int = 0) -> None:
        self.refuse_starts = refuse_starts
        self.sessions: List[FakeRecognitionSession] = []
        self.options: List[SessionOptions] = []

    def __call__(self, options: SessionOptions) -> FakeRecognitionSession:
        self.options.append(options)
        session = FakeRecognitionSession(options, refuse_starts=self.refuse_starts)
        self.sessions.append(session)
        return session

    @property
    def session(self) -> FakeRecognitionSession:
        return self.sessions[-1]


@pytest.fixture
def clock() -> ManualClock:
    """Deterministic clock."""
    return ManualClock()


@pytest.fixture
def observer() -> RecordingObserver:
    """Observer recording engine events."""
    return RecordingObserver()


@pytest.fixture
def session_factory() -> FakeSessionFactory:
    """Factory producing fake recognition sessions."""
    return FakeSessionFactory()


@pytest.fixture
def machine(clock, observer) -> WordProgressionMachine:
    """State machine with no help settle delay."""
    return WordProgressionMachine(
        clock=clock,
        observer=observer,
        challenge=ChallengeParams(max_attempts=2, help_settle_ms=0),
        matching=MatchingParams(),
    )


@pytest.fixture
def lifecycle(clock, observer, session_factory, machine) -> RecognizerLifecycleManager:
    """Lifecycle manager feeding the machine fixture."""
    return RecognizerLifecycleManager(
        session_factory=session_factory,
        clock=clock,
        sink=machine,
        observer=observer,
        params=RecognizerParams(),
    )
