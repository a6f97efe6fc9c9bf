"""
Regex-based file rewriting.

Used to stamp a selected version into files such as `pyproject.toml`,
`package.json` or a README badge. Replacements use Python `re.sub`
syntax (`\\1`, `\\g<name>`) and may be rendered from templates containing
`{version}`, `{major}`, `{minor}` and `{patch}` placeholders.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Union

from semtag.logging_config import get_logger
from semtag.semver import SemVer


PLACEHOLDER_PATTERN = re.compile(r"\{(version|major|minor|patch)\}")


@dataclass(frozen=True)
class ReplacementMap:
    """
    A regular expression and the literal replacement for its matches.

    Attributes:
        pattern: Compiled regular expression to match
        replacement: Replacement text (re.sub syntax)
        count: Maximum number of replacements, 0 for all
    """
    pattern: re.Pattern
    replacement: str
    count: int = 0

    @classmethod
    def from_strings(cls, pattern: str, replacement: str, count: int = 0) -> "ReplacementMap":
        """
        Build a ReplacementMap from a pattern string.

        Raises:
            re.error: If the pattern is not a valid regular expression
        """
        return cls(re.compile(pattern, re.MULTILINE), replacement, count)

    def apply(self, text: str) -> str:
        """Apply this replacement to `text`."""
        return self.pattern.sub(self.replacement, text, count=self.count)


def render_replacement(template: str, version: SemVer) -> str:
    """
    Substitute version placeholders in a replacement template.

    Only the known placeholders are touched, so regex group references
    and literal braces elsewhere in the template are preserved. All
    placeholders are substituted in a single pass, and backslashes in the
    substituted values are escaped so the result stays a literal in
    re.sub replacement syntax.
    """
    values = {
        "version": version.render(),
        "major": str(version.major),
        "minor": str(version.minor),
        "patch": str(version.patch),
    }
    return PLACEHOLDER_PATTERN.sub(
        lambda match: values[match.group(1)].replace("\\", "\\\\"),
        template,
    )


def apply_replacements(text: str, replacements: Iterable[ReplacementMap]) -> str:
    """Apply each replacement in order and return the rewritten text."""
    for replacement in replacements:
        text = replacement.apply(text)
    return text


def rewrite_file(path: Union[str, Path], replacements: Iterable[ReplacementMap]) -> bool:
    """
    Given a file, perform replacements based on the ReplacementMaps and write.

    Args:
        path: The file to rewrite
        replacements: ReplacementMaps applied in order

    Returns:
        True if the file existed and was rewritten, False if it is missing
        or cannot be read as UTF-8 text
    """
    logger = get_logger("rewrite")
    path = Path(path)

    if not path.is_file():
        logger.warning(f"Cannot perform replace-rewrite of file that does not exist: {path}.")
        return False

    try:
        original = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Cannot read {path} for replace-rewrite: {e}")
        return False
    replaced = apply_replacements(original, replacements)

    if replaced == original:
        logger.info(f"No changes in {path}")
        return True

    path.write_text(replaced, encoding="utf-8")
    logger.info(f"Rewrote {path}")
    return True


def rewrite_file_with_replacement(
    path: Union[str, Path],
    pattern: str,
    replacement: str,
) -> bool:
    """Given a file, perform a single replacement based on the pattern and replacement."""
    return rewrite_file(path, [ReplacementMap.from_strings(pattern, replacement)])
