"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from ..text.normalizer import tokenize


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_matching_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate fuzzy matching parameters."""
        errors = []

        # Validate threshold
        if "threshold" in params:
            value = params["threshold"]
            if not _is_number(value) or value <= 0 or value > 1:
                errors.append(ValidationError(
                    field="threshold",
                    message="Must be a positive number between 0 and 1",
                    value=value
                ))

        # Validate match_window
        if "match_window" in params:
            value = params["match_window"]
            if not _is_int(value) or value < 1:
                errors.append(ValidationError(
                    field="match_window",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_recognizer_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate recognizer session and backoff parameters."""
        errors = []

        # Validate language
        if "language" in params:
            value = params["language"]
            if not isinstance(value, str) or not value.strip():
                errors.append(ValidationError(
                    field="language",
                    message="Must be a non-empty locale tag",
                    value=value
                ))

        for name in ("continuous", "interim_results"):
            if name in params and not isinstance(params[name], bool):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a boolean",
                    value=params[name]
                ))

        for name in ("suppression_delay_ms", "restart_base_delay_ms",
                     "restart_step_ms", "restart_max_delay_ms"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value < 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-negative integer",
                        value=value
                    ))

        # Validate max_restarts
        if "max_restarts" in params:
            value = params["max_restarts"]
            if not _is_int(value) or value < 0:
                errors.append(ValidationError(
                    field="max_restarts",
                    message="Must be a non-negative integer",
                    value=value
                ))

        base = params.get("restart_base_delay_ms")
        ceiling = params.get("restart_max_delay_ms")
        if _is_int(base) and _is_int(ceiling) and ceiling < base:
            errors.append(ValidationError(
                field="restart_max_delay_ms",
                message="Must not be smaller than restart_base_delay_ms",
                value=ceiling
            ))

        return errors

    @staticmethod
    def validate_challenge_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate word progression parameters."""
        errors = []

        # Validate max_attempts
        if "max_attempts" in params:
            value = params["max_attempts"]
            if not _is_int(value) or value < 1:
                errors.append(ValidationError(
                    field="max_attempts",
                    message="Must be a positive integer",
                    value=value
                ))

        # Validate help_settle_ms
        if "help_settle_ms" in params:
            value = params["help_settle_ms"]
            if not _is_int(value) or value < 0:
                errors.append(ValidationError(
                    field="help_settle_ms",
                    message="Must be a non-negative integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_persistence_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate progress store parameters."""
        errors = []

        if "max_sessions" in params:
            value = params["max_sessions"]
            if not _is_int(value) or value < 1:
                errors.append(ValidationError(
                    field="max_sessions",
                    message="Must be a positive integer",
                    value=value
                ))

        if params.get("db_path") is not None:
            value = params["db_path"]
            if not isinstance(value, str) or not value.strip():
                errors.append(ValidationError(
                    field="db_path",
                    message="Must be a non-empty path or null",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_selection_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate sentence selection parameters."""
        errors = []

        if "default_level" in params:
            value = params["default_level"]
            if not _is_int(value) or value < 1:
                errors.append(ValidationError(
                    field="default_level",
                    message="Must be a positive integer",
                    value=value
                ))

        if "fallback_sentence" in params:
            value = params["fallback_sentence"]
            if not isinstance(value, str) or not tokenize(value):
                errors.append(ValidationError(
                    field="fallback_sentence",
                    message="Must contain at least one readable word",
                    value=value
                ))

        if "prefer_struggling_words" in params:
            value = params["prefer_struggling_words"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="prefer_struggling_words",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "matching" in config:
            errors.extend(ConfigValidator.validate_matching_params(config["matching"]))

        if "recognizer" in config:
            errors.extend(ConfigValidator.validate_recognizer_params(config["recognizer"]))

        if "challenge" in config:
            errors.extend(ConfigValidator.validate_challenge_params(config["challenge"]))

        if "selection" in config:
            errors.extend(ConfigValidator.validate_selection_params(config["selection"]))

        if "persistence" in config:
            errors.extend(ConfigValidator.validate_persistence_params(config["persistence"]))

        return errors
