"""Tests for logging integration in the word progression and recognizer components."""

from rtw_app.config.defaults import RecognizerParams
from rtw_app.logging.config import (
    configure_logging,
    get_challenge_logger,
    get_recognizer_logger,
    log_state_transition,
    log_word_outcome,
)
from rtw_app.recognition.lifecycle import RecognizerLifecycleManager
from rtw_app.state.machine import WordProgressionMachine


class CapturingLogger:
    """Structlog-like logger recording messages with their bound context."""

    def __init__(self, messages, context=None):
        self.messages = messages
        self.context = context or {}

    def bind(self, **kwargs):
        return CapturingLogger(self.messages, {**self.context, **kwargs})

    def _log(self, level, message, **kwargs):
        self.messages.append({
            'message': message,
            'level': level,
            'kwargs': {**self.context, **kwargs},
        })

    def debug(self, message, **kwargs):
        self._log('debug', message, **kwargs)

    def info(self, message, **kwargs):
        self._log('info', message, **kwargs)

    def warning(self, message, **kwargs):
        self._log('warning', message, **kwargs)

    def error(self, message, **kwargs):
        self._log('error', message, **kwargs)


class TestLoggingIntegration:
    """Test logging of word outcomes, transitions and recognizer decisions."""

    def setup_method(self):
        configure_logging(level="DEBUG", format_json=True)
        self.log_messages = []
        self.mock_logger = CapturingLogger(self.log_messages)

    def _named(self, message):
        return [m for m in self.log_messages if m['message'] == message]

    def test_subsystem_loggers(self):
        """Test subsystem loggers are created."""
        assert get_challenge_logger("test") is not None
        assert get_recognizer_logger("test") is not None

    def test_word_outcome_levels(self):
        """Test misses log at warning and other outcomes at info."""
        log_word_outcome(self.mock_logger, index=0, word="cat", outcome="correct", attempts=0)
        log_word_outcome(self.mock_logger, index=1, word="sat", outcome="error", attempts=1,
                         context={"delay_ms": 800})

        assert self.log_messages[0]['level'] == 'info'
        assert self.log_messages[0]['kwargs']['word'] == 'cat'
        assert self.log_messages[1]['level'] == 'warning'
        assert self.log_messages[1]['message'] == 'Word not recognized'
        assert self.log_messages[1]['kwargs']['context'] == {"delay_ms": 800}

    def test_state_transition_format(self):
        """Test transition log fields."""
        log_state_transition(self.mock_logger, "idle", "active", "begin")
        entry = self.log_messages[0]
        assert entry['message'] == 'State transition'
        assert entry['kwargs'] == {'from_state': 'idle', 'to_state': 'active', 'trigger': 'begin'}

    def test_machine_logs_challenge(self, clock, observer):
        """Test a challenge logs its transitions and outcomes."""
        machine = WordProgressionMachine(clock, observer)
        machine.logger = self.mock_logger

        machine.begin(["cat", "sat"])
        machine.submit_recognized_text("cat")
        machine.register_word_error(1)
        machine.register_word_error(1)
        clock.advance(2000)

        transitions = self._named('State transition')
        assert [t['kwargs']['trigger'] for t in transitions] == ['begin', 'word_helped']
        assert transitions[-1]['kwargs']['to_state'] == 'complete'
        assert transitions[-1]['kwargs']['context']['helped_words'] == ['sat']

        outcomes = [m['kwargs']['outcome'] for m in self.log_messages if 'outcome' in m['kwargs']]
        assert outcomes == ['correct', 'error', 'error', 'helped']

    def test_empty_target_logged(self, clock):
        """Test an empty target is logged as an error."""
        machine = WordProgressionMachine(clock)
        machine.logger = self.mock_logger
        assert machine.begin([]) is False
        assert self.log_messages[0]['level'] == 'error'

    def test_lifecycle_logs_restart_decisions(self, lifecycle, machine, session_factory, clock):
        """Test restart scheduling is logged."""
        lifecycle.logger = self.mock_logger
        machine.begin(["cat"])
        lifecycle.start()
        session_factory.session.end()

        restart = self._named('Scheduling recognizer restart')
        assert restart[0]['kwargs']['delay_ms'] == 100
        assert restart[0]['kwargs']['reason'] == 'session_end'

    def test_lifecycle_logs_restart_limit(self, clock, observer, machine, session_factory):
        """Test reaching the restart cap is logged."""
        lifecycle = RecognizerLifecycleManager(session_factory, clock, machine, observer,
                                               RecognizerParams(max_restarts=0))
        lifecycle.logger = self.mock_logger
        machine.begin(["cat"])
        lifecycle.start()
        session_factory.session.end()

        limit = self._named('Restart limit reached, waiting for manual start')
        assert limit[0]['level'] == 'warning'

    def test_lifecycle_logs_suppressed_miss(self, lifecycle, machine, session_factory, clock):
        """Test a timed-out miss is logged."""
        lifecycle.logger = self.mock_logger
        machine.begin(["cat"])
        lifecycle.start()
        session_factory.session.speech_end()
        clock.advance(800)

        miss = self._named('No final result after speech end')
        assert miss[0]['kwargs']['word_index'] == 0
        assert miss[0]['kwargs']['delay_ms'] == 800
