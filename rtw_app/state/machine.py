"""
Word progression state machine.

One word of the target sequence is active at a time. Recognized text is only
ever checked against that word; a match marks it correct, repeated misses
reveal it (help) after ``max_attempts``, and the index never moves backward.
The sentence-complete event fires exactly once per challenge.
"""

from collections.abc import Sequence
from typing import Optional, Union

from ..config.defaults import ChallengeParams, MatchingParams
from ..errors import EmptyTargetSequenceError
from ..logging.config import get_challenge_logger, log_state_transition, log_word_outcome
from ..observer import ChallengeObserver
from ..text.normalizer import tokenize
from ..text.similarity import matches_window
from ..utils.clock import Clock, TimerHandle
from ..utils.time import utc_now
from .models import (
    ChallengePhase,
    SentenceResult,
    TargetSequence,
    WordOutcome,
    WordState,
    WordStatus,
)

state_logger = get_challenge_logger(__name__)


class WordProgressionMachine:
    """Advances through a target sentence as words are read, missed or helped."""

    def __init__(
        self,
        clock: Clock,
        observer: Optional[ChallengeObserver] = None,
        challenge: Optional[ChallengeParams] = None,
        matching: Optional[MatchingParams] = None,
        struggling_words: Optional[dict[str, int]] = None
    ) -> None:
        self.logger = state_logger
        self.clock = clock
        self.observer = observer or ChallengeObserver()
        self.challenge_params = challenge or ChallengeParams()
        self.matching_params = matching or MatchingParams()

        # Cumulative across challenges; owned and persisted by the caller
        self.struggling_words: dict[str, int] = (
            struggling_words if struggling_words is not None else {}
        )

        self._phase = ChallengePhase.IDLE
        self._target: Optional[TargetSequence] = None
        self._words: list[WordState] = []
        self._index = 0
        self._helped: list[str] = []
        self._settle_timer: Optional[TimerHandle] = None
        self._result: Optional[SentenceResult] = None

    @property
    def phase(self) -> ChallengePhase:
        return self._phase

    @property
    def target(self) -> Optional[TargetSequence]:
        return self._target

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_word(self) -> Optional[str]:
        if self._target is None or self._index >= len(self._target):
            return None
        return self._target[self._index]

    @property
    def word_states(self) -> tuple[WordState, ...]:
        return tuple(self._words)

    @property
    def helped_words(self) -> tuple[str, ...]:
        return tuple(self._helped)

    @property
    def result(self) -> Optional[SentenceResult]:
        return self._result

    @property
    def is_complete(self) -> bool:
        return self._phase == ChallengePhase.COMPLETE

    @property
    def is_exhausted(self) -> bool:
        """True when there is no word left to listen for."""
        return self._target is None or self._index >= len(self._target)

    @property
    def is_settling(self) -> bool:
        return self._settle_timer is not None

    @property
    def is_accepting(self) -> bool:
        """True while the active word can be matched, missed or helped."""
        return (
            self._phase == ChallengePhase.ACTIVE
            and not self.is_exhausted
            and not self.is_settling
        )

    def begin(self, target: Union[TargetSequence, Sequence[str]]) -> bool:
        """
        Start a fresh challenge on the given tokens.

        Args:
            target: Target sequence or plain token list

        Returns:
            False (and no state change) if the target is empty
        """
        if not isinstance(target, TargetSequence):
            try:
                target = TargetSequence(tokens=tuple(target))
            except EmptyTargetSequenceError:
                self.logger.error("Refusing to begin challenge with empty target sequence")
                return False

        self._cancel_settle()
        previous = self._phase

        self._target = target
        self._words = [WordState() for _ in target]
        self._words[0] = self._words[0].with_status(WordStatus.ACTIVE)
        self._index = 0
        self._helped = []
        self._result = None
        self._phase = ChallengePhase.ACTIVE

        log_state_transition(
            self.logger,
            from_state=previous.value,
            to_state=ChallengePhase.ACTIVE.value,
            trigger="begin",
            context={
                "total_words": len(target),
                "sentence": target.sentence,
            }
        )
        return True

    def submit_recognized_text(self, text: str) -> bool:
        """
        Check a final transcript against the active word.

        Only the trailing ``match_window`` tokens are considered, and only
        the word at the current index, so one call advances at most one word.

        Returns:
            True if the active word matched and the index advanced
        """
        if not self.is_accepting:
            return False

        target_word = self._target[self._index]
        tokens = tokenize(text)
        if not matches_window(
            target_word,
            tokens,
            threshold=self.matching_params.threshold,
            window=self.matching_params.match_window
        ):
            self.logger.debug(
                "Transcript did not match active word",
                word_index=self._index,
                word=target_word,
                tail=tokens[-self.matching_params.match_window:]
            )
            return False

        self._mark(WordStatus.CORRECT, WordOutcome.CORRECT)
        self._advance(trigger="word_correct")
        return True

    def register_word_error(self, index: int) -> bool:
        """
        Record that the word at ``index`` went unrecognized.

        Stale reports for an index the machine has already left are ignored.

        Returns:
            True if the error was recorded
        """
        if not self.is_accepting or index != self._index:
            self.logger.debug(
                "Ignoring stale word error",
                reported_index=index,
                current_index=self._index,
                phase=self._phase.value
            )
            return False

        self._words[index] = self._words[index].with_attempt()
        attempts = self._words[index].attempts
        log_word_outcome(
            self.logger,
            index=index,
            word=self._target[index],
            outcome=WordOutcome.ERROR.value,
            attempts=attempts
        )
        self.observer.on_word_outcome(index, WordOutcome.ERROR)

        if attempts >= self.challenge_params.max_attempts:
            self.help(index)
        return True

    def help(self, index: Optional[int] = None) -> bool:
        """
        Reveal the active word and move on after the settle delay.

        Args:
            index: Word to help, defaults to the active word

        Returns:
            True if the word was helped
        """
        if not self.is_accepting:
            return False
        if index is None:
            index = self._index
        if index != self._index:
            self.logger.debug("Ignoring help for inactive word", requested_index=index,
                              current_index=self._index)
            return False

        word = self._target[index]
        self._helped.append(word)
        self.struggling_words[word] = self.struggling_words.get(word, 0) + 1
        self._mark(WordStatus.HELPED, WordOutcome.HELPED,
                   context={"struggling_count": self.struggling_words[word]})

        delay = self.challenge_params.help_settle_ms
        if delay <= 0:
            self._advance(trigger="word_helped")
        else:
            self._settle_timer = self.clock.call_later(delay, self._on_settle_elapsed)
        return True

    def skip(self) -> bool:
        """Skip the active word; recorded the same way as help."""
        return self.help()

    def abort(self) -> None:
        """Abandon the challenge without emitting a result."""
        self._cancel_settle()
        if self._phase == ChallengePhase.ACTIVE:
            log_state_transition(
                self.logger,
                from_state=self._phase.value,
                to_state=ChallengePhase.IDLE.value,
                trigger="abort",
                context={"word_index": self._index}
            )
            self._phase = ChallengePhase.IDLE

    def _mark(self, status: WordStatus, outcome: WordOutcome,
              context: Optional[dict] = None) -> None:
        index = self._index
        self._words[index] = self._words[index].with_status(status)
        log_word_outcome(
            self.logger,
            index=index,
            word=self._target[index],
            outcome=outcome.value,
            attempts=self._words[index].attempts,
            context=context
        )
        self.observer.on_word_outcome(index, outcome)

    def _on_settle_elapsed(self) -> None:
        self._settle_timer = None
        if self._phase == ChallengePhase.ACTIVE:
            self._advance(trigger="word_helped")

    def _cancel_settle(self) -> None:
        if self._settle_timer is not None:
            self._settle_timer.cancel()
            self._settle_timer = None

    def _advance(self, trigger: str) -> None:
        self._index += 1
        if self._index < len(self._target):
            self._words[self._index] = self._words[self._index].with_status(WordStatus.ACTIVE)
            self.logger.debug("Advanced to next word", word_index=self._index,
                              word=self._target[self._index], trigger=trigger)
        else:
            self._complete(trigger)

    def _complete(self, trigger: str) -> None:
        if self._phase == ChallengePhase.COMPLETE:
            return

        first_try = sum(
            1 for state in self._words
            if state.status == WordStatus.CORRECT and state.attempts == 0
        )
        self._result = SentenceResult(
            sentence=self._target.sentence or " ".join(self._target),
            total_words=len(self._target),
            helped_words=tuple(self._helped),
            first_try_words=first_try,
            completed_at=utc_now(),
            attempts=tuple(state.attempts for state in self._words),
        )
        self._phase = ChallengePhase.COMPLETE

        log_state_transition(
            self.logger,
            from_state=ChallengePhase.ACTIVE.value,
            to_state=ChallengePhase.COMPLETE.value,
            trigger=trigger,
            context={
                "total_words": self._result.total_words,
                "helped_words": list(self._result.helped_words),
                "first_attempt_mastery": self._result.first_attempt_mastery,
            }
        )
        self.observer.on_sentence_complete(self._result)
