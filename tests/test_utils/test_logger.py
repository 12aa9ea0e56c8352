from __future__ import annotations

import io
import logging
from typing import Generator
from unittest.mock import patch

import pytest

import julia_version.utils.logger as logger_module
from julia_version.utils.logger import (
    ActionsFormatter,
    ColoredFormatter,
    disable_logging,
    get_logger,
    running_in_github_actions,
    setup_logging,
)


@pytest.fixture
def clean_logger_state() -> Generator[None, None, None]:
    """Reset the julia_version logger before and after each test."""
    root_logger = logging.getLogger("julia_version")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    logger_module._logging_configured = False

    yield

    disable_logging()


@pytest.fixture
def captured_stream() -> io.StringIO:
    return io.StringIO()


def _record(level: int, message: str) -> logging.LogRecord:
    return logging.LogRecord("julia_version.test", level, __file__, 1, message, None, None)


@pytest.mark.unit
class TestColoredFormatter:
    """Tests for ColoredFormatter ANSI color formatting."""

    def test_no_color_when_disabled(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=False)

        assert formatter.format(_record(logging.WARNING, "hello")) == "WARNING: hello"

    def test_color_applied_on_tty(self) -> None:
        """Test level names are colored when color is possible."""
        formatter = ColoredFormatter("%(levelname)s: %(message)s")
        record = _record(logging.ERROR, "boom")

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            output = formatter.format(record)

        assert output.startswith("\033[31mERROR\033[0m")
        # The record shared with other handlers is left untouched
        assert record.levelname == "ERROR"

    @pytest.mark.parametrize("env_var", ["NO_COLOR", "CI"])
    def test_color_suppressed_by_environment(self, env_var: str) -> None:
        with patch.dict("os.environ", {env_var: "1"}):
            assert ColoredFormatter._should_use_color() is False


@pytest.mark.unit
class TestActionsFormatter:
    """Tests for GitHub Actions workflow command rendering."""

    @pytest.mark.parametrize(
        "level,expected",
        [
            (logging.DEBUG, "::debug::message"),
            (logging.WARNING, "::warning::message"),
            (logging.ERROR, "::error::message"),
            (logging.CRITICAL, "::error::message"),
        ],
    )
    def test_levels_map_to_commands(self, level: int, expected: str) -> None:
        assert ActionsFormatter().format(_record(level, "message")) == expected

    def test_info_is_plain(self) -> None:
        assert ActionsFormatter().format(_record(logging.INFO, "message")) == "message"

    def test_payload_is_escaped(self) -> None:
        output = ActionsFormatter().format(_record(logging.WARNING, "50%\nnext"))

        assert output == "::warning::50%25%0Anext"


@pytest.mark.unit
class TestRunningInGithubActions:
    def test_detects_runner(self) -> None:
        with patch.dict("os.environ", {"GITHUB_ACTIONS": "true"}):
            assert running_in_github_actions() is True

    def test_false_outside_runner(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            assert running_in_github_actions() is False


@pytest.mark.unit
@pytest.mark.usefixtures("clean_logger_state")
class TestSetupLogging:
    """Tests for setup_logging configuration."""

    def test_configures_single_handler(self, captured_stream: io.StringIO) -> None:
        with patch.dict("os.environ", {"GITHUB_ACTIONS": ""}):
            setup_logging(level=logging.INFO, stream=captured_stream)
            setup_logging(level=logging.INFO, stream=captured_stream)

        root_logger = logging.getLogger("julia_version")
        assert len(root_logger.handlers) == 1
        assert root_logger.propagate is False

    def test_writes_default_format(self, captured_stream: io.StringIO) -> None:
        with patch.dict("os.environ", {"GITHUB_ACTIONS": "", "NO_COLOR": "1"}):
            setup_logging(level=logging.WARNING, stream=captured_stream)
            get_logger("batch").warning('No Julia version exists matching specifier: "%s"', "1.9")

        assert captured_stream.getvalue() == (
            'WARNING: No Julia version exists matching specifier: "1.9"\n'
        )

    def test_uses_workflow_commands_under_actions(self, captured_stream: io.StringIO) -> None:
        with patch.dict("os.environ", {"GITHUB_ACTIONS": "true"}):
            setup_logging(level=logging.WARNING, stream=captured_stream)
            get_logger("batch").warning("missing")

        assert captured_stream.getvalue() == "::warning::missing\n"

    def test_level_filters_records(self, captured_stream: io.StringIO) -> None:
        with patch.dict("os.environ", {"GITHUB_ACTIONS": ""}):
            setup_logging(level=logging.WARNING, stream=captured_stream)
            get_logger("resolver").info("not shown")

        assert captured_stream.getvalue() == ""


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger namespacing."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            (None, "julia_version"),
            ("julia_version", "julia_version"),
            ("resolver", "julia_version.resolver"),
            ("julia_version.core.batch", "julia_version.core.batch"),
        ],
    )
    def test_names(self, name, expected: str) -> None:
        assert get_logger(name).name == expected


@pytest.mark.unit
@pytest.mark.usefixtures("clean_logger_state")
class TestDisableLogging:
    def test_disable_resets_state(self, captured_stream: io.StringIO) -> None:
        setup_logging(stream=captured_stream)

        disable_logging()

        root_logger = logging.getLogger("julia_version")
        assert all(isinstance(h, logging.NullHandler) for h in root_logger.handlers)
        assert root_logger.propagate is True
