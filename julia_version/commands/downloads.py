"""Downloads command implementation for julia-version.

Resolves a single specifier and lists the files published for the selected
Julia version: the ``versions.json`` file entries of a release, or the
artifacts found by probing for a nightly build.

Typical usage::

    $ julia-version downloads 1.10
    $ julia-version downloads 1.12-nightly --output-file "$GITHUB_OUTPUT"
"""

from __future__ import annotations

import sys
import json
import click
import asyncio
from pathlib import Path
from typing import List, Optional, Tuple

from julia_version.config import JuliaVersionConfig
from julia_version.models import Download, SpecifierKind, VersionSpecifier
from julia_version.context import pass_context, JuliaVersionContext
from julia_version.exceptions import (
    JuliaVersionError,
    NoMatchingVersionError,
    SpecifierCountError,
)
from julia_version.core import (
    BatchResolver,
    NightlyProber,
    VersionCatalogue,
    parse_specifiers,
)
from julia_version.utils import HTTPClient, append_outputs, get_logger, print_error

logger = get_logger("commands.downloads")


@click.command()
@click.argument("specifier", envvar="INPUT_VERSION")
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
    "--output-file",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="GITHUB_OUTPUT",
    default=None,
    help="Append step outputs to this file (GitHub Actions format).",
)
@pass_context
def downloads(
    ctx: JuliaVersionContext,
    specifier: str,
    project: Path,
    output_file: Optional[Path],
) -> None:
    """List the downloads of the Julia version selected by SPECIFIER.

    Prints the downloads as a JSON array. When an output file is given,
    the outputs ``version`` and ``downloads`` are appended to it.

    Exits:
        0 on success, 1 if the specifier is invalid or matches nothing.
    """
    config = ctx.config or JuliaVersionConfig()

    try:
        parsed = parse_specifiers(specifier)
        if len(parsed) != 1:
            raise SpecifierCountError("downloads", len(parsed))

        version, files = asyncio.run(_downloads_async(config, parsed[0], project))
        payload = json.dumps([f.to_dict() for f in files], indent=4)

        if output_file is not None:
            append_outputs(output_file, {"version": version, "downloads": payload})

    except JuliaVersionError as e:
        print_error(e.message)
        logger.debug("Error details: %s", e.details or "<none>")
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        logger.exception("Error in downloads command")
        sys.exit(1)

    logger.info("Selected Julia version: %s", version)
    print(payload)


async def _downloads_async(
    config: JuliaVersionConfig,
    specifier: VersionSpecifier,
    project: Path,
) -> Tuple[str, List[Download]]:
    """Resolve *specifier* and collect the files of the selected version.

    Raises:
        NoMatchingVersionError: No release matches, or no nightly artifact
            is published for the requested series.
    """
    async with HTTPClient(timeout=config.timeout, max_retries=config.max_retries) as http:
        prober = NightlyProber(http, config.nightly_base_url)

        if specifier.kind is SpecifierKind.NIGHTLY:
            files = await prober.downloads(specifier.qualifier)
            if not files:
                raise NoMatchingVersionError(specifier.raw)
            return specifier.raw, files

        catalogue = VersionCatalogue(http, config.versions_url)
        resolver = BatchResolver(catalogue, prober)
        (version,) = await resolver.resolve([specifier], project, if_missing="error")
        if version is None:
            raise NoMatchingVersionError(specifier.raw)

        return version, await catalogue.downloads(version)
