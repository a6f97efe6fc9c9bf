"""
Latest-version selection over noisy candidate text.

Each candidate line is parsed independently; unparseable lines and (when
requested) unstable versions are replaced by the zero version, zero
versions are dropped, and what remains is folded to a maximum.

The pipeline is pure: it performs no I/O and does no logging. Callers
(tag sources, CLI) report on the result.
"""

from functools import reduce
from typing import Iterable

from semtag.semver import ParseError, SemVer, compare


def parse_candidate(line: str, stable_only: bool) -> SemVer:
    """
    Parse a single candidate line, substituting the zero version on failure.

    Args:
        line: One candidate tag/version line (surrounding whitespace allowed)
        stable_only: Whether versions with info should be rejected

    Returns:
        Parsed SemVer, or the zero version if the line is not a candidate
    """
    try:
        version = SemVer.parse(line.strip())
    except ParseError:
        return SemVer.zero()

    if stable_only and version.info is not None:
        return SemVer.zero()

    return version


def max_version(versions: Iterable[SemVer]) -> SemVer:
    """
    Find the largest of any number of SemVers.

    Returns the zero version when `versions` is empty.
    """
    return reduce(
        lambda running, version: compare(version, running),
        versions,
        SemVer.zero(),
    )


def select_latest(candidates: Iterable[str], stable_only: bool = False) -> SemVer:
    """
    Select the latest version from already split candidate strings.

    Args:
        candidates: Candidate tag/version strings
        stable_only: Only consider versions without prerelease/build info

    Returns:
        The latest version, or the zero version if there is no candidate
    """
    parsed = (parse_candidate(candidate, stable_only) for candidate in candidates)
    return max_version(version for version in parsed if not version.is_zero())


def find_latest(text: str, stable_only: bool = False) -> SemVer:
    """
    Find the latest version in a newline-separated blob of tags.

    Never raises: invalid lines are skipped and the zero version is
    returned when nothing qualifies. A literal "0.0.0" is indistinguishable
    from "no version" and is skipped as well.

    Args:
        text: Newline-separated candidate lines (e.g. `git tag` output)
        stable_only: Only consider versions without prerelease/build info

    Returns:
        The latest version, or the zero version
    """
    return select_latest(text.split("\n"), stable_only)
