from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock, patch

import click
import pytest
from click.testing import CliRunner

from julia_version import cli as cli_module
from julia_version.__version__ import __version__
from julia_version.cli import cli, main
from julia_version.exceptions import NoMatchingVersionError
from julia_version.utils.logger import disable_logging
from julia_version.utils.console import reconfigure_console


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("JULIA_VERSION_CONFIG", raising=False)
    reconfigure_console()
    yield
    disable_logging()
    reconfigure_console()


@pytest.mark.unit
class TestCliGroup:
    """Tests for global CLI options."""

    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert result.output.strip() == f"julia-version {__version__}"

    def test_help_lists_commands(self) -> None:
        result = CliRunner().invoke(cli, ["-h"])

        assert result.exit_code == 0
        assert "resolve" in result.output
        assert "downloads" in result.output

    def test_invalid_config_exits(self, tmp_path: Path) -> None:
        config_file = tmp_path / "julia-version.toml"
        config_file.write_text('[julia-version]\ntimeout = "soon"\n', encoding="utf-8")

        result = CliRunner().invoke(cli, ["--config", str(config_file), "resolve", "1"])

        assert result.exit_code == 1
        assert "timeout" in result.output

    def test_no_color_sets_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "")

        with patch(
            "julia_version.commands.resolve._resolve_async",
            new=AsyncMock(return_value=["1.10.8"]),
        ):
            result = CliRunner().invoke(cli, ["--no-color", "resolve", "lts"])

        assert result.exit_code == 0, result.output
        assert result.output.split() == ["1.10.8"]
        assert os.environ["NO_COLOR"] == "1"

    @pytest.mark.parametrize(
        "verbose,level",
        [(0, "WARNING"), (1, "INFO"), (2, "DEBUG"), (3, "DEBUG")],
    )
    def test_verbosity_levels(self, verbose: int, level: str) -> None:
        with patch("julia_version.cli.setup_logging") as mock_setup:
            cli_module._configure_logging(verbose)

        kwargs = mock_setup.call_args[1]
        assert logging.getLevelName(kwargs["level"]) == level
        assert kwargs["verbose"] is (verbose > 1)


@pytest.mark.unit
class TestMain:
    """Tests for main() exit code mapping."""

    def test_success(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "argv", ["julia-version", "--version"])

        assert main() == 0

    def test_usage_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "argv", ["julia-version", "no-such-command"])

        assert main() == 2

    def test_command_exit_code(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "argv", ["julia-version", "resolve", "pre"])

        assert main() == 1

    @pytest.mark.parametrize(
        "error,code",
        [
            (NoMatchingVersionError("2"), 1),
            (KeyboardInterrupt(), 130),
            (click.exceptions.Abort(), 130),
            (RuntimeError("boom"), 1),
            (SystemExit(3), 3),
            (SystemExit("fatal"), 1),
        ],
    )
    def test_exception_mapping(self, error: BaseException, code: int) -> None:
        with patch("julia_version.cli.cli", side_effect=error), patch(
            "julia_version.cli.print_error"
        ), patch("julia_version.cli.print_warning"):
            assert main() == code

    def test_interrupt_is_reported(self) -> None:
        with patch("julia_version.cli.cli", side_effect=KeyboardInterrupt()), patch(
            "julia_version.cli.print_warning"
        ) as mock_warning:
            assert main() == 130

        mock_warning.assert_called_once_with("Interrupted")
