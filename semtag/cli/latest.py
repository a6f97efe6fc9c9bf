"""
Latest CLI command.

Prints the latest semantic version found in git tags, in a file, or in
standard input.
"""

import json
from pathlib import Path
from typing import Optional

import click

from semtag.cli.common import get_config, resolve_latest
from semtag.logging_config import get_logger


@click.command("latest")
@click.option(
    "--stable/--all",
    "stable",
    default=None,
    help="Only consider stable versions, or include prereleases "
         "(default: configuration, else --all)",
)
@click.option(
    "--from-file",
    "source",
    default=None,
    metavar="PATH",
    help="Read candidate versions from PATH ('-' for stdin) instead of git tags",
)
@click.option(
    "--fetch/--no-fetch",
    "fetch",
    default=None,
    help="Run 'git fetch --tags' before listing tags (default: configuration)",
)
@click.option(
    "--repository",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Git repository directory (default: current directory)",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Output as JSON",
)
@click.option(
    "--require-version",
    is_flag=True,
    help="Exit with status 1 when no version is found",
)
@click.pass_context
def latest(
    ctx: click.Context,
    stable: Optional[bool],
    source: Optional[str],
    fetch: Optional[bool],
    repository: Optional[Path],
    as_json: bool,
    require_version: bool,
) -> None:
    """
    Print the latest version.

    Candidates that cannot be parsed are ignored. When nothing qualifies,
    0.0.0 is printed.

    Examples:

        semtag latest --stable

        git tag | semtag latest --from-file -
    """
    version = resolve_latest(
        get_config(ctx),
        stable,
        fetch=fetch,
        repository=repository,
        source=source,
    )
    found = not version.is_zero()

    if as_json:
        data = {
            "version": version.render(),
            "major": version.major,
            "minor": version.minor,
            "patch": version.patch,
            "info": version.info,
            "stable": version.is_stable,
            "found": found,
        }
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(version.render())

    get_logger("cli").debug(f"latest: {version.render()} (found={found})")

    if require_version and not found:
        click.echo(click.style("Error: ", fg="red") + "No version found.", err=True)
        ctx.exit(1)
