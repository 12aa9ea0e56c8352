"""Resolve command implementation for julia-version.

Resolves one or more version specifiers against the published Julia
releases and reports the concrete versions to install.

The command orchestrates three core components:

1. **parse_version_specifiers**: validates the ``VERSION`` input.
2. **VersionCatalogue** / **NightlyProber**: look up published releases
   and nightly artifacts over a shared :class:`HTTPClient`.
3. **BatchResolver**: resolves every specifier, reading the project's
   compat entry or manifest only when ``min`` or ``manifest`` is asked for.

Typical usage::

    $ julia-version resolve '["1", "lts", "min"]' --project .
    1.6.7
    1.10.8
    1.11.4

    # Inside a GitHub Actions step the inputs come from the environment
    $ INPUT_VERSION='1.10' julia-version resolve
"""

from __future__ import annotations

import sys
import json
import click
import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional

from julia_version.config import JuliaVersionConfig
from julia_version.exceptions import JuliaVersionError
from julia_version.context import pass_context, JuliaVersionContext
from julia_version.core import (
    BatchResolver,
    NightlyProber,
    VersionCatalogue,
    parse_if_missing,
    parse_version_specifiers,
)
from julia_version.utils import (
    HTTPClient,
    append_outputs,
    format_resolved,
    get_logger,
    print_error,
    print_plain,
    print_table,
    unique,
    version_sort,
)

logger = get_logger("commands.resolve")


@click.command()
@click.argument("version", envvar="INPUT_VERSION")
@click.option(
    "--project",
    "-p",
    type=click.Path(path_type=Path),
    default=".",
    envvar=["INPUT_PROJECT", "JULIA_PROJECT"],
    show_default=True,
    help="Julia project file or directory (used by 'min' and 'manifest').",
)
@click.option(
    "--if-missing",
    "if_missing",
    default=None,
    envvar="INPUT_IF-MISSING",
    help="Behaviour when a specifier matches nothing: 'warn' or 'error'.",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["simple", "json", "table"], case_sensitive=False),
    default="simple",
    help="Output format.",
)
@click.option(
    "--output-file",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="GITHUB_OUTPUT",
    default=None,
    help="Append step outputs to this file (GitHub Actions format).",
)
@pass_context
def resolve(
    ctx: JuliaVersionContext,
    version: str,
    project: Path,
    if_missing: Optional[str],
    format: str,
    output_file: Optional[Path],
) -> None:
    """Resolve VERSION to concrete Julia releases.

    VERSION is a single specifier (``1``, ``^1.6``, ``lts``, ``min``,
    ``manifest``, ``nightly``, ``1.12-nightly``) or a list of them written
    as JSON or YAML.

    The unique resolved versions are printed in ascending order. When an
    output file is given, two outputs are appended to it:

    - ``version``: JSON list of the unique resolved versions;
    - ``resolved-json``: JSON list with one entry per specifier, ``null``
      for specifiers that matched nothing.

    Args:
        ctx: julia-version context with configuration and verbosity.
        version: Raw ``version`` input.
        project: Julia project file or directory.
        if_missing: Missing-specifier policy; defaults to the configured one.
        format: Output format (``simple``, ``json`` or ``table``).
        output_file: File receiving the step outputs.

    Exits:
        0 on success, 1 if any input is invalid or a specifier cannot be
        resolved under the ``error`` policy.
    """
    config = ctx.config or JuliaVersionConfig()

    try:
        specifiers = parse_version_specifiers(version)
        policy = parse_if_missing(if_missing if if_missing else config.if_missing)
        logger.debug(
            "User inputs: %s",
            {"version": specifiers, "project": str(project), "if_missing": policy},
        )

        resolved = asyncio.run(_resolve_async(config, specifiers, project, policy))
        versions = version_sort(unique(v for v in resolved if v is not None))

        if output_file is not None:
            append_outputs(
                output_file,
                {
                    "version": json.dumps(versions),
                    "resolved-json": json.dumps(resolved),
                },
            )

    except JuliaVersionError as e:
        print_error(e.message)
        logger.debug("Error details: %s", e.details or "<none>")
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        logger.exception("Error in resolve command")
        sys.exit(1)

    if format == "json":
        _display_json(resolved, versions)
    elif format == "table":
        _display_table(specifiers, resolved)
    else:
        _display_simple(versions)


async def _resolve_async(
    config: JuliaVersionConfig,
    specifiers: List[str],
    project: Path,
    if_missing: str,
) -> List[Optional[str]]:
    """Build the network collaborators and resolve the batch."""
    async with HTTPClient(timeout=config.timeout, max_retries=config.max_retries) as http:
        resolver = BatchResolver(
            VersionCatalogue(http, config.versions_url),
            NightlyProber(http, config.nightly_base_url),
        )
        return await resolver.resolve(specifiers, project, if_missing=if_missing)


# ---------------------------------------------------------------------------
# Display renderers
# ---------------------------------------------------------------------------


def _display_simple(versions: List[str]) -> None:
    """Print one resolved version per line."""
    for version in versions:
        print_plain(version)


def _display_json(resolved: List[Optional[str]], versions: List[str]) -> None:
    """Print the per-specifier results and the unique versions as JSON.

    Example::

        {
          "resolved": ["1.11.4", null],
          "unique": ["1.11.4"]
        }
    """
    data: Dict[str, Any] = {"resolved": resolved, "unique": versions}
    print(json.dumps(data, indent=2))


def _display_table(specifiers: List[str], resolved: List[Optional[str]]) -> None:
    """Render each specifier next to the version it resolved to."""
    missing = format_resolved(None)
    rows = [
        {"Specifier": specifier, "Resolved": format_resolved(version)}
        for specifier, version in zip(specifiers, resolved)
    ]
    print_table(
        rows,
        title="Julia Versions",
        column_styles={"Specifier": {"style": "bold cyan", "no_wrap": True}},
        row_styler=lambda row: "dim" if row["Resolved"] == missing else None,
    )
