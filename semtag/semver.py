"""
Semantic version value object.

Parses free-form release tags such as "v0.11.5-beta+17-2020-05-12" into
a SemVer with major, minor and patch numbers plus a verbatim info suffix.

Parsing is deliberately lenient:
- An optional leading "v" or "V" is accepted
- The match is not anchored, so surrounding noise is tolerated
- Leading zeroes are stripped numerically ("00.00124.0124" -> 0.124.124)
- Everything after the patch number is kept as-is in `info`

Usage:
    from semtag.semver import SemVer

    version = SemVer.parse("v1.2.3-rc1")
    print(version.render())  # "1.2.3-rc1"
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple


# For example, "v0.11.5-beta+17-2020-05-12" gives major=0, minor=11,
# patch=5, info="-beta+17-2020-05-12".
SEMVER_PATTERN = re.compile(
    r"[vV]?(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)(?P<info>.*)",
    re.ASCII,
)


class ParseError(ValueError):
    """Raised when text does not contain a major.minor.patch version."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Provided text is not valid SemVer: [{text}]")


@dataclass(frozen=True)
class SemVer:
    """
    A basic concrete representation of a Semantic Version.

    Attributes:
        major: Major version number
        minor: Minor version number
        patch: Patch version number
        info: Verbatim text trailing the patch number (including its
              leading separator), or None when there is none
    """
    major: int
    minor: int
    patch: int
    info: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> "SemVer":
        """
        Create a SemVer from a textual version.

        These might be something like "0.31.5" or
        "2.0.0-some_info_here+2020-03-01".

        Args:
            text: The textual version

        Returns:
            Parsed SemVer

        Raises:
            ParseError: If no major.minor.patch run can be found in the text
        """
        match = SEMVER_PATTERN.search(text)

        if not match:
            raise ParseError(text)

        # An empty remainder means there is no info
        info = match.group("info") or None

        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            info=info,
        )

    @classmethod
    def zero(cls) -> "SemVer":
        """Return the "zero version" 0.0.0 without info."""
        return cls(0, 0, 0, None)

    def is_zero(self) -> bool:
        """Return True if this is the zero version."""
        return (
            self.major == 0
            and self.minor == 0
            and self.patch == 0
            and self.info is None
        )

    @property
    def is_stable(self) -> bool:
        """A version is stable when it carries no prerelease/build info."""
        return self.info is None

    def as_tuple(self) -> Tuple[int, int, int, Optional[str]]:
        """Return (major, minor, patch, info)."""
        return (self.major, self.minor, self.patch, self.info)

    def render(self) -> str:
        """
        Render as "major.minor.patch" followed by info, if any.

        No separator is inserted before info since it already carries its
        own leading punctuation from the source text.
        """
        representation = f"{self.major}.{self.minor}.{self.patch}"

        if self.info:
            return f"{representation}{self.info}"

        return representation

    def __str__(self) -> str:
        return self.render()


def compare(left: SemVer, right: SemVer) -> SemVer:
    """
    Return the larger of two SemVers.

    Ties resolve to `right`. Info strings are compared as whole strings in
    code-point order, and only when both sides carry info and all numbers
    are equal. A stable version outranks the same numbers with info.

    Args:
        left: A SemVer
        right: A SemVer

    Returns:
        Whichever of the two is greater, `right` when equal
    """
    if left.major != right.major:
        return left if left.major > right.major else right

    if left.minor != right.minor:
        return left if left.minor > right.minor else right

    if left.patch != right.patch:
        return left if left.patch > right.patch else right

    # Is the left version stable and the right version unstable?
    if left.info is None and right.info is not None:
        return left

    # Failing that, is the left version's info lexically greater?
    if left.info is not None and right.info is not None and left.info > right.info:
        return left

    return right
