"""Unit tests for configuration management."""

import pytest
from pathlib import Path

from rtw_app.config.defaults import get_default_config
from rtw_app.config.loader import ConfigLoader
from rtw_app.config.validation import ConfigValidator


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        """Test default configuration values."""
        config = get_default_config()
        assert config.matching.threshold == 0.68
        assert config.matching.match_window == 4
        assert config.recognizer.suppression_delay_ms == 800
        assert config.recognizer.max_restarts == 8
        assert config.recognizer.restart_max_delay_ms == 1000
        assert config.challenge.max_attempts == 2
        assert config.challenge.help_settle_ms == 1100
        assert config.persistence.max_sessions == 200


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        """Test loader points at a config directory."""
        loader = ConfigLoader.create()
        assert isinstance(loader.config_dir, Path)

    def test_merge_config_defaults_only(self, tmp_path) -> None:
        """Test merge with no settings file yields defaults."""
        loader = ConfigLoader.create(tmp_path)
        config = loader.merge_config()

        assert config["matching"]["threshold"] == 0.68
        assert config["recognizer"]["language"] == "en-US"

    def test_settings_file_overrides_defaults(self, tmp_path) -> None:
        """Test settings.yaml overrides individual defaults."""
        (tmp_path / "settings.yaml").write_text(
            "challenge:\n  max_attempts: 3\nrecognizer:\n  language: en-GB\n"
        )
        loader = ConfigLoader.create(tmp_path)
        config = loader.merge_config()

        assert config["challenge"]["max_attempts"] == 3
        assert config["challenge"]["help_settle_ms"] == 1100
        assert config["recognizer"]["language"] == "en-GB"

    def test_overrides_beat_settings_file(self, tmp_path) -> None:
        """Test caller overrides take precedence over settings.yaml."""
        (tmp_path / "settings.yaml").write_text("challenge:\n  max_attempts: 3\n")
        loader = ConfigLoader.create(tmp_path)
        config = loader.merge_config({"challenge": {"max_attempts": 5}})

        assert config["challenge"]["max_attempts"] == 5

    def test_empty_settings_file(self, tmp_path) -> None:
        """Test an empty settings file is ignored."""
        (tmp_path / "settings.yaml").write_text("")
        loader = ConfigLoader.create(tmp_path)
        assert loader.merge_config()["matching"]["match_window"] == 4

    def test_load_config_builds_typed_sections(self, tmp_path) -> None:
        """Test typed sections are built and unknown keys dropped."""
        loader = ConfigLoader.create(tmp_path)
        config = loader.load_config({
            "matching": {"threshold": 0.75, "unknown_key": True},
            "recognizer": {"max_restarts": 3},
        })

        assert config.matching.threshold == 0.75
        assert config.matching.match_window == 4
        assert config.recognizer.max_restarts == 3
        assert config.challenge.max_attempts == 2

    def test_repository_settings_are_valid(self) -> None:
        """Test the shipped settings pass validation."""
        config = ConfigLoader.create().merge_config()
        assert ConfigValidator.validate_config(config) == []


class TestConfigValidator:
    """Test suite for configuration validator."""

    def test_valid_defaults(self) -> None:
        """Test defaults produce no validation errors."""
        config = ConfigLoader.create().merge_config()
        assert ConfigValidator.validate_config(config) == []

    @pytest.mark.parametrize("value", [0, -0.1, 1.5, "high", None])
    def test_invalid_threshold(self, value) -> None:
        """Test threshold must lie in (0, 1]."""
        errors = ConfigValidator.validate_matching_params({"threshold": value})
        assert [e.field for e in errors] == ["threshold"]

    def test_invalid_window(self) -> None:
        """Test match window must be positive."""
        errors = ConfigValidator.validate_matching_params({"match_window": 0})
        assert errors[0].field == "match_window"
        assert errors[0].value == 0

    def test_invalid_recognizer_params(self) -> None:
        """Test recognizer parameter type and range checks."""
        errors = ConfigValidator.validate_recognizer_params({
            "language": "",
            "continuous": "yes",
            "suppression_delay_ms": -1,
            "max_restarts": 2.5,
        })
        assert {e.field for e in errors} == {
            "language", "continuous", "suppression_delay_ms", "max_restarts"
        }

    def test_backoff_ceiling_below_base(self) -> None:
        """Test restart ceiling cannot be below the base delay."""
        errors = ConfigValidator.validate_recognizer_params({
            "restart_base_delay_ms": 500,
            "restart_max_delay_ms": 100,
        })
        assert [e.field for e in errors] == ["restart_max_delay_ms"]

    def test_bool_is_not_an_integer(self) -> None:
        """Test booleans are rejected where integers are expected."""
        errors = ConfigValidator.validate_challenge_params({"max_attempts": True})
        assert errors[0].field == "max_attempts"

    def test_invalid_challenge_and_persistence(self) -> None:
        """Test challenge and persistence range checks."""
        errors = ConfigValidator.validate_config({
            "challenge": {"max_attempts": 0, "help_settle_ms": -5},
            "persistence": {"max_sessions": 0},
        })
        assert {e.field for e in errors} == {"max_attempts", "help_settle_ms", "max_sessions"}

    def test_invalid_selection_params(self) -> None:
        """Test selection level and fallback sentence checks."""
        errors = ConfigValidator.validate_config({
            "selection": {
                "default_level": 0,
                "fallback_sentence": "?!",
                "prefer_struggling_words": "yes",
            },
        })
        assert {e.field for e in errors} == {
            "default_level", "fallback_sentence", "prefer_struggling_words"
        }

    def test_invalid_db_path(self) -> None:
        """Test an empty database path is rejected but null is allowed."""
        assert ConfigValidator.validate_persistence_params({"db_path": None}) == []
        errors = ConfigValidator.validate_persistence_params({"db_path": "  "})
        assert [e.field for e in errors] == ["db_path"]
