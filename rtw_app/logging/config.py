"""
Centralized logging configuration for the reading challenge engine.

This module provides standardized logging configuration using structlog
for all components. Recognizer lifecycle events and word progression
transitions are logged through the helpers below so the event stream of
a challenge can be reconstructed from the logs.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_challenge_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for word progression events.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for challenge state changes
    """
    return get_logger(name).bind(
        subsystem="challenge",
        audit_trail=True
    )


def get_recognizer_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for recognizer lifecycle events.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for start/stop/restart decisions
    """
    return get_logger(name).bind(subsystem="recognizer")


def log_word_outcome(
    logger: FilteringBoundLogger,
    index: int,
    word: str,
    outcome: str,
    attempts: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a per-word outcome with standardized format.

    Args:
        logger: Structlog logger instance
        index: Position of the word in the target sequence
        word: Target token at that position
        outcome: Outcome value (correct, error, helped)
        attempts: Recorded error attempts on the word
        context: Additional context data
    """
    bound_logger = logger.bind(
        word_index=index,
        word=word,
        outcome=outcome,
        attempts=attempts,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if outcome == "error":
        bound_logger.warning("Word not recognized")
    else:
        bound_logger.info("Word outcome")


def log_state_transition(
    logger: FilteringBoundLogger,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a challenge phase transition with standardized format.

    Args:
        logger: Structlog logger instance
        from_state: Current phase
        to_state: Target phase
        trigger: What triggered the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("State transition")
