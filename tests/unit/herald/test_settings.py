"""Tests for configuration and logging setup."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from config.settings import HeraldSettings
from herald.core.dispatcher import CommandDispatcher
from herald.core.options import DispatcherOptions
from herald.core.utils import setup_logging


class TestHeraldSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch):
        """Test defaults when nothing is configured."""
        for name in ("PRELUDE", "COOLDOWN_MS", "STRICT_DATES", "LOG_LEVEL"):
            monkeypatch.delenv(f"HERALD_{name}", raising=False)

        config = HeraldSettings(_env_file=None)

        assert config.prelude == ""
        assert config.cooldown_ms == 0
        assert config.strict_dates is True
        assert config.reply_on_argument_errors is False
        assert config.log_level == "INFO"

    def test_reads_environment(self, monkeypatch):
        """Test HERALD_ prefixed environment variables."""
        monkeypatch.setenv("HERALD_PRELUDE", "!")
        monkeypatch.setenv("HERALD_COOLDOWN_MS", "5000")
        monkeypatch.setenv("herald_strict_dates", "false")

        config = HeraldSettings(_env_file=None)

        assert config.prelude == "!"
        assert config.cooldown_ms == 5000
        assert config.strict_dates is False

    def test_negative_cooldown_rejected(self, monkeypatch):
        """Test that a negative cooldown is a configuration error."""
        monkeypatch.setenv("HERALD_COOLDOWN_MS", "-1")

        with pytest.raises(ValidationError):
            HeraldSettings(_env_file=None)


class TestDispatcherOptions:
    """Test dispatcher options."""

    def test_from_settings(self):
        """Test building options from settings."""
        source = HeraldSettings(_env_file=None, prelude="?", cooldown_ms=250, track_in_flight=True)

        options = DispatcherOptions.from_settings(source)

        assert options.prelude == "?"
        assert options.cooldown == 250
        assert options.track_in_flight is True

    def test_zero_cooldown_disables(self):
        """Test that a zero cooldown maps to no cooldown."""
        options = DispatcherOptions.from_settings(HeraldSettings(_env_file=None, cooldown_ms=0))

        assert options.cooldown is None

    def test_overrides_win(self):
        """Test that explicit overrides beat settings."""
        source = HeraldSettings(_env_file=None, prelude="?")

        options = DispatcherOptions.from_settings(source, prelude="!", cooldown=10)

        assert options.prelude == "!"
        assert options.cooldown == 10

    def test_negative_cooldown_rejected(self):
        """Test validation of the cooldown window."""
        with pytest.raises(ValidationError):
            DispatcherOptions(cooldown=-5)

    def test_unknown_option_rejected(self):
        """Test that a misspelled option is an error, not a silent default."""
        with pytest.raises(ValidationError):
            DispatcherOptions(cooldwn=5000)

    def test_dispatcher_rejects_unknown_keyword(self):
        """Test that a misspelled dispatcher keyword fails construction."""
        with pytest.raises(ValidationError):
            CommandDispatcher({}, cooldwn=5000)

        with pytest.raises(ValidationError):
            CommandDispatcher({}, DispatcherOptions(), cooldwn=5000)

    def test_dispatcher_validates_overrides(self):
        """Test that dispatcher overrides go through validation."""
        with pytest.raises(ValidationError):
            CommandDispatcher({}, DispatcherOptions(), cooldown=-5)


class TestSetupLogging:
    """Test logging setup functionality."""

    @patch("herald.core.utils.settings")
    @patch("herald.core.utils.logging.basicConfig")
    def test_setup_logging_default_level(self, mock_basic_config, mock_settings):
        """Test setup_logging with default INFO level."""
        mock_settings.log_level = "INFO"

        setup_logging()

        mock_basic_config.assert_called_once()
        assert mock_basic_config.call_args[1]["level"] == 20  # logging.INFO

    @patch("herald.core.utils.settings")
    @patch("herald.core.utils.logging.basicConfig")
    def test_setup_logging_uses_configured_level(self, mock_basic_config, mock_settings):
        """Test that the configured log level is used when none is given."""
        mock_settings.log_level = "WARNING"

        setup_logging()

        assert mock_basic_config.call_args[1]["level"] == 30  # logging.WARNING

    @patch("herald.core.utils.logging.basicConfig")
    def test_setup_logging_custom_level(self, mock_basic_config):
        """Test setup_logging with custom level."""
        setup_logging("debug")

        assert mock_basic_config.call_args[1]["level"] == 10  # logging.DEBUG

    @patch("herald.core.utils.logging.basicConfig")
    def test_setup_logging_invalid_level(self, mock_basic_config):
        """Test setup_logging with an unknown level."""
        with pytest.raises(AttributeError):
            setup_logging("INVALID")
