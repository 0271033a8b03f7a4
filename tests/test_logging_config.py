"""Unit tests for configuration and structured logging."""

import json
import logging

import pytest
from pydantic import ValidationError

from pantrylist.config import Settings, get_settings
from pantrylist.logging_config import (
    ContextLogger,
    ContextualFormatter,
    LoggingContext,
    StructuredJsonFormatter,
    configure_logging,
    get_logger,
    list_id_ctx,
    recipe_id_ctx,
    set_context,
)
from pantrylist.schemas import Category


def _record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="pantrylist.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        """Test default values."""
        settings = Settings()
        assert settings.quantity_precision == 3
        assert settings.low_confidence_threshold == 0.6
        assert settings.fuzzy_synonym_threshold == 92.0
        assert settings.default_category == "pantry"
        assert settings.is_development is True

    def test_environment_override(self, monkeypatch):
        """Test PANTRYLIST_ variables override defaults."""
        monkeypatch.setenv("PANTRYLIST_QUANTITY_PRECISION", "2")
        monkeypatch.setenv("PANTRYLIST_ENVIRONMENT", "production")
        settings = Settings()
        assert settings.quantity_precision == 2
        assert settings.is_development is False

    def test_default_category_is_a_category(self, monkeypatch):
        """Test the default category is read as a Category."""
        monkeypatch.setenv("PANTRYLIST_DEFAULT_CATEGORY", "frozen")
        assert Settings().default_category is Category.FROZEN

    def test_unknown_default_category_rejected(self, monkeypatch):
        """Test an unknown category fails when settings load."""
        monkeypatch.setenv("PANTRYLIST_DEFAULT_CATEGORY", "snacks")
        with pytest.raises(ValidationError):
            Settings()

    def test_cached(self):
        """Test get_settings returns one instance."""
        assert get_settings() is get_settings()


class TestLoggingContext:
    """Tests for context variables."""

    def test_scoped_values(self):
        """Test values are set inside the block and restored after it."""
        with LoggingContext(list_id="list-1"):
            assert list_id_ctx.get() == "list-1"
            with LoggingContext(recipe_id="r1"):
                assert list_id_ctx.get() == "list-1"
                assert recipe_id_ctx.get() == "r1"
            assert recipe_id_ctx.get() is None
        assert list_id_ctx.get() is None

    def test_set_context(self):
        """Test set_context only sets given values."""
        set_context(recipe_id="r9")
        assert recipe_id_ctx.get() == "r9"
        assert list_id_ctx.get() is None


class TestFormatters:
    """Tests for the log formatters."""

    def test_json_formatter(self):
        """Test JSON output includes message and context."""
        with LoggingContext(list_id="list-1", recipe_id="r1"):
            output = StructuredJsonFormatter().format(_record())
        data = json.loads(output)
        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["list_id"] == "list-1"
        assert data["recipe_id"] == "r1"
        assert data["location"]["line"] == 1

    def test_contextual_formatter(self):
        """Test human-readable output includes context."""
        with LoggingContext(list_id="list-1"):
            output = ContextualFormatter().format(_record())
        assert "[list=list-1]" in output
        assert output.endswith("| hello")

    def test_no_context(self):
        """Test output without context has no brackets."""
        output = ContextualFormatter().format(_record())
        assert "[" not in output


class TestConfigureLogging:
    """Tests for configure_logging and get_logger."""

    def test_get_logger(self):
        """Test get_logger returns a context adapter."""
        logger = get_logger("pantrylist.test")
        assert isinstance(logger, ContextLogger)
        assert logger.logger.name == "pantrylist.test"

    def test_configure_json(self):
        """Test JSON format selection and level."""
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(log_level="debug", json_format=True)
            assert isinstance(root.handlers[-1].formatter, StructuredJsonFormatter)
            assert logging.getLogger("pantrylist").level == logging.DEBUG
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
            logging.getLogger("pantrylist").setLevel(logging.NOTSET)

    def test_configure_text(self):
        """Test the text formatter is used in development."""
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(json_format=False)
            assert isinstance(root.handlers[-1].formatter, ContextualFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
            logging.getLogger("pantrylist").setLevel(logging.NOTSET)
