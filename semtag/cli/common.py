"""
Helpers shared by semtag CLI commands.
"""

from pathlib import Path
from typing import Optional

import click

from semtag.config import ConfigValidationError, SemtagConfig
from semtag.semver import SemVer
from semtag.tag_source import (
    TagSourceError,
    find_latest_from_git_tags,
    find_latest_from_text,
    read_text_source,
)


def get_config(ctx: click.Context) -> SemtagConfig:
    """Return the SemtagConfig loaded by the root command group."""
    return ctx.find_root().obj["config"]


def resolve_latest(
    config: SemtagConfig,
    stable: Optional[bool],
    fetch: Optional[bool] = None,
    repository: Optional[Path] = None,
    source: Optional[str] = None,
) -> SemVer:
    """
    Find the latest version with CLI flags taking precedence over config.

    Args:
        config: Loaded configuration
        stable: --stable/--all flag, None to use configuration
        fetch: --fetch/--no-fetch flag, None to use configuration
        repository: --repository flag, None to use configuration
        source: File path or "-" to read candidates from instead of git

    Raises:
        click.ClickException: On invalid configuration or unreadable source
    """
    try:
        stable_only = config.stable_only if stable is None else stable
        do_fetch = config.fetch_tags if fetch is None else fetch
    except ConfigValidationError as e:
        raise click.ClickException(str(e))

    if source:
        try:
            text = read_text_source(source)
        except TagSourceError as e:
            raise click.ClickException(str(e))
        return find_latest_from_text(text, stable_only)

    cwd = repository or config.repository or None
    return find_latest_from_git_tags(
        stable_only,
        fetch=do_fetch,
        cwd=cwd,
        timeout=config.git_timeout_seconds,
    )
