"""
Candidate sources for latest-version selection.

Reads candidate tag text from git (`git fetch --tags` + `git tag`), from
a file, or from standard input, and reports the selection result through
the `semtag.git` / `semtag.selector` loggers.

Git failures never propagate: a repository without tags, a missing git
binary or a failing command all yield the zero version.
"""

import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Union

from semtag.logging_config import get_logger
from semtag.selector import find_latest
from semtag.semver import SemVer


DEFAULT_GIT_TIMEOUT = 30  # seconds

STDIN_SOURCE = "-"


class TagSourceError(Exception):
    """Raised when a candidate text source cannot be read."""

    pass


def run_git_command(
    args: List[str],
    cwd: Optional[Union[str, Path]] = None,
    timeout: int = DEFAULT_GIT_TIMEOUT,
) -> Optional[str]:
    """
    Run a Git command and return its output.

    Args:
        args: List of command arguments (e.g., ['tag', '--list'])
        cwd: Repository directory (current directory when None)
        timeout: Seconds before the command is abandoned

    Returns:
        Command output as string, or None if command failed
    """
    logger = get_logger("git")

    try:
        result = subprocess.run(
            ['git'] + args,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            check=True,
            timeout=timeout
        )
        return result.stdout
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError) as e:
        logger.debug(f"git {' '.join(args)} failed: {e}")
        return None


def fetch_tags(
    cwd: Optional[Union[str, Path]] = None,
    timeout: int = DEFAULT_GIT_TIMEOUT,
) -> bool:
    """
    Fetch tags from the default remote.

    Best effort: offline clones and repositories without a remote keep
    working with their local tags.

    Returns:
        True if the fetch succeeded
    """
    if run_git_command(['fetch', '--tags'], cwd=cwd, timeout=timeout) is None:
        get_logger("git").warning(
            "Could not fetch tags from remote, using local tags only."
        )
        return False
    return True


def list_tags(
    cwd: Optional[Union[str, Path]] = None,
    timeout: int = DEFAULT_GIT_TIMEOUT,
) -> Optional[str]:
    """
    List repository tags, one per line.

    Returns:
        `git tag` output, or None if tags could not be listed
    """
    return run_git_command(['tag'], cwd=cwd, timeout=timeout)


def report_latest(text: str, stable_only: bool, latest: SemVer) -> None:
    """Log the candidates considered and the selected version."""
    candidates = [line.strip() for line in text.strip().split("\n") if line.strip()]
    kind = "stable max" if stable_only else "max including pre-releases"

    get_logger("selector").info(
        f"Of versions: [{', '.join(candidates)}], the {kind} was found to be: [{latest}].",
        extra={"extra_fields": {
            "candidates": len(candidates),
            "stable_only": stable_only,
            "latest": latest.render(),
        }},
    )


def find_latest_from_text(text: str, stable_only: bool = False) -> SemVer:
    """Find the latest version in `text` and report the result."""
    latest = find_latest(text, stable_only)
    report_latest(text, stable_only, latest)
    return latest


def find_latest_from_git_tags(
    stable_only: bool = False,
    fetch: bool = True,
    cwd: Optional[Union[str, Path]] = None,
    timeout: int = DEFAULT_GIT_TIMEOUT,
) -> SemVer:
    """
    Using git tags, find the latest version (if this is possible).

    If no version is found, returns the zero version 0.0.0.

    Args:
        stable_only: Only consider versions without prerelease/build info
        fetch: Run `git fetch --tags` before listing tags
        cwd: Repository directory (current directory when None)
        timeout: Seconds allowed for each git command

    Returns:
        The latest tagged version, or the zero version
    """
    if fetch:
        fetch_tags(cwd=cwd, timeout=timeout)

    tags = list_tags(cwd=cwd, timeout=timeout)

    if tags is None:
        get_logger("git").warning(
            "Error in fetching a compliant max git tag. Returning [0.0.0]."
        )
        return SemVer.zero()

    get_logger("git").debug(f"Found {len(tags.split())} tags")

    return find_latest_from_text(tags, stable_only)


def read_text_source(source: Union[str, Path]) -> str:
    """
    Read candidate text from a file, or from stdin when `source` is "-".

    Raises:
        TagSourceError: If the file cannot be read
    """
    if str(source) == STDIN_SOURCE:
        return sys.stdin.read()

    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TagSourceError(f"Cannot read versions from {path}: {e}")
