"""
Command-line interface for julia-version.

The ``julia-version`` group loads the configuration once, sets up logging
from the ``-v`` count and hands a :class:`JuliaVersionContext` to the
``resolve`` and ``downloads`` commands. :func:`main` is the console-script
entry point and turns every outcome into a process exit code.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional, Tuple

import click

from julia_version.config import load_config
from julia_version.__version__ import __version__
from julia_version.context import JuliaVersionContext
from julia_version.exceptions import ConfigError, JuliaVersionError
from julia_version.utils.logger import get_logger, setup_logging
from julia_version.utils.console import print_error, print_warning

logger = get_logger("cli")

# Log level per ``-v`` count; anything above the last entry stays at DEBUG.
_LOG_LEVELS: Tuple[int, ...] = (logging.WARNING, logging.INFO, logging.DEBUG)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="JULIA_VERSION_CONFIG",
    help="Read settings from this TOML file instead of discovering one.",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Log more (-v for progress, -vv for debug details).",
)
@click.option(
    "--color/--no-color",
    default=True,
    envvar="JULIA_VERSION_COLOR",
    help="Colorize terminal output.",
)
@click.version_option(
    version=__version__,
    prog_name="julia-version",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """Turn Julia version specifiers into published Julia releases.

    Specifiers can be exact versions, npm-style ranges, the aliases
    ``lts``, ``min`` and ``manifest``, or nightly builds. Inside a GitHub
    Actions step the ``INPUT_*`` variables supply the arguments and
    results are appended to ``$GITHUB_OUTPUT``.

    \b
      julia-version resolve '["1", "lts", "min"]' --project .
      julia-version downloads 1.12-nightly
    """
    _configure_logging(verbose)
    _apply_color_preference(color)

    try:
        ctx.obj = _build_context(config, verbose, color)
    except ConfigError as exc:
        print_error(exc.message)
        raise SystemExit(EXIT_FAILURE) from exc

    logger.debug(
        "julia-version %s (config=%s, verbose=%d, color=%s)",
        __version__,
        ctx.obj.config_path,
        verbose,
        color,
    )


def _build_context(
    config_path: Optional[Path], verbose: int, color: bool
) -> JuliaVersionContext:
    """Load the configuration and wrap it with the global options.

    Raises:
        ConfigError: The configuration file is unreadable or invalid.
    """
    loaded = load_config(config_path)
    if loaded.source_path:
        logger.debug("Loaded configuration: %s", loaded.to_log_dict())

    jv_ctx = JuliaVersionContext()
    jv_ctx.config = loaded
    jv_ctx.config_path = config_path or loaded.source_path
    jv_ctx.verbose = verbose
    jv_ctx.color = color
    return jv_ctx


def _apply_color_preference(color: bool) -> None:
    # rich and the log formatter both read NO_COLOR
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"


def _configure_logging(verbose: int) -> None:
    """Map the ``-v`` count to a log level and install the handler."""
    level = _LOG_LEVELS[min(max(verbose, 0), len(_LOG_LEVELS) - 1)]
    setup_logging(level=level, verbose=verbose > 1)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


from julia_version.commands.resolve import resolve  # noqa: E402
from julia_version.commands.downloads import downloads  # noqa: E402

cli.add_command(resolve)
cli.add_command(downloads)


def main() -> int:
    """Run the CLI and return its exit code.

    Click usage errors keep their own code (2). Interrupts give 130, and a
    ``SystemExit`` raised by a command passes its integer code through.
    Anything else that escapes is reported on stderr and gives 1.
    """
    try:
        cli(standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except (click.exceptions.Abort, KeyboardInterrupt):
        print_warning("Interrupted")
        return EXIT_INTERRUPTED
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_FAILURE
    except JuliaVersionError as exc:
        print_error(exc.message)
        logger.debug("Error details: %s", exc.details or "<none>", exc_info=True)
        return EXIT_FAILURE
    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
