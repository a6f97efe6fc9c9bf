"""
Rewrite CLI command.

Stamps a version into files using regular-expression replacements, given
on the command line or configured under `replacements` in semtag.yaml.
"""

import dataclasses
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import click

from semtag.cli.common import get_config, resolve_latest
from semtag.config import ConfigValidationError, SemtagConfig
from semtag.rewrite import ReplacementMap, render_replacement, rewrite_file
from semtag.semver import ParseError, SemVer


PLACEHOLDERS = ("{version}", "{major}", "{minor}", "{patch}")


def _uses_placeholders(templates: List[str]) -> bool:
    return any(p in t for t in templates for p in PLACEHOLDERS)


@click.command("rewrite")
@click.argument("files", nargs=-1, type=click.Path(dir_okay=False, path_type=Path))
@click.option("--pattern", "-p", default=None, help="Regular expression to replace")
@click.option(
    "--replacement",
    "-r",
    default=None,
    help="Replacement text; may contain {version}, {major}, {minor}, {patch}",
)
@click.option(
    "--count",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Maximum replacements per file (0 replaces all matches)",
)
@click.option(
    "--version",
    "version_text",
    default=None,
    help="Version to substitute (default: latest git tag)",
)
@click.option(
    "--stable/--all",
    "stable",
    default=None,
    help="When using the latest git tag, only consider stable versions",
)
@click.option(
    "--fetch/--no-fetch",
    "fetch",
    default=None,
    help="Run 'git fetch --tags' before listing tags",
)
@click.pass_context
def rewrite(
    ctx: click.Context,
    files: Tuple[Path, ...],
    pattern: Optional[str],
    replacement: Optional[str],
    count: int,
    version_text: Optional[str],
    stable: Optional[bool],
    fetch: Optional[bool],
) -> None:
    """
    Rewrite files with version replacements.

    With --pattern/--replacement, the replacement is applied to every FILE.
    Otherwise the replacements configured in semtag.yaml are applied,
    restricted to FILES when any are given.

    Example:

        semtag rewrite pyproject.toml -p '^version = ".*"' -r 'version = "{version}"'
    """
    config = get_config(ctx)

    if (pattern is None) != (replacement is None):
        raise click.UsageError("--pattern and --replacement must be given together")

    if pattern is not None:
        if not files:
            raise click.UsageError("At least one FILE is required with --pattern")
        try:
            single = ReplacementMap.from_strings(pattern, replacement, count)
        except re.error as e:
            raise click.BadParameter(str(e), param_hint="--pattern")
        plan: Dict[str, List[ReplacementMap]] = {str(f): [single] for f in files}
    else:
        try:
            plan = config.replacement_maps()
        except ConfigValidationError as e:
            raise click.ClickException(str(e))
        if files:
            wanted = {Path(f) for f in files}
            plan = {name: maps for name, maps in plan.items() if Path(name) in wanted}
        if not plan:
            raise click.ClickException(
                "No replacements configured. Use --pattern and --replacement, "
                "or add 'replacements' to the configuration file."
            )

    templates = [m.replacement for maps in plan.values() for m in maps]
    if _uses_placeholders(templates):
        version = _resolve_version(config, version_text, stable, fetch)
        plan = {
            name: [
                dataclasses.replace(m, replacement=render_replacement(m.replacement, version))
                for m in maps
            ]
            for name, maps in plan.items()
        }

    failed = []
    for name, maps in plan.items():
        if rewrite_file(name, maps):
            click.echo(click.style("Rewrote: ", fg="green") + name)
        else:
            failed.append(name)
            label = "Cannot read: " if Path(name).is_file() else "Not found: "
            click.echo(click.style(label, fg="yellow") + name, err=True)

    if failed:
        raise click.ClickException(f"{len(failed)} file(s) could not be rewritten")


def _resolve_version(
    config: SemtagConfig,
    version_text: Optional[str],
    stable: Optional[bool],
    fetch: Optional[bool],
) -> SemVer:
    """Parse --version, or fall back to the latest git tag."""
    if version_text:
        try:
            return SemVer.parse(version_text)
        except ParseError as e:
            raise click.BadParameter(str(e), param_hint="--version")

    version = resolve_latest(config, stable, fetch=fetch)
    if version.is_zero():
        raise click.ClickException(
            "No version could be determined from git tags. Use --version."
        )
    return version
