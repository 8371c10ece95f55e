"""Tests for the logging micro API."""

import io
import logging

import pytest

from .lib import get_logger, parse_level, setup_logging


class TestParseLevel:
    """Tests for level parsing."""

    @pytest.mark.unit
    def test_names_are_case_insensitive(self):
        """Level names resolve regardless of case."""
        assert parse_level("debug") == logging.DEBUG
        assert parse_level("WARNING") == logging.WARNING

    @pytest.mark.unit
    def test_numeric_strings(self):
        """Numeric strings convert to ints."""
        assert parse_level("30") == 30

    @pytest.mark.unit
    def test_unknown_falls_back_to_default(self):
        """Unknown names use the default level."""
        assert parse_level("chatty") == logging.INFO
        assert parse_level(None, default=logging.ERROR) == logging.ERROR


class TestGetLogger:
    """Tests for get_logger."""

    @pytest.mark.unit
    def test_default_name(self):
        """Unnamed loggers use the project logger."""
        assert get_logger().name == "design-viewer"

    @pytest.mark.unit
    def test_named_logger(self):
        """Named loggers keep their name."""
        assert get_logger("cli").name == "cli"


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.mark.unit
    def test_accepts_level_name(self, monkeypatch):
        """Level names are forwarded to basicConfig as numbers."""
        captured = {}

        def fake_basic_config(**kwargs):
            captured.update(kwargs)

        monkeypatch.setattr(logging, "basicConfig", fake_basic_config)
        stream = io.StringIO()
        setup_logging("debug", stream=stream)

        assert captured["level"] == logging.DEBUG
        assert captured["stream"] is stream
        assert "%(levelname)s" in captured["format"]
