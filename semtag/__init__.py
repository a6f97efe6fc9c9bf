"""
semtag - Find the latest semantic version among free-form release tags.

This package parses loosely formatted release tags (git tags, lists of
strings) into semantic versions and selects the greatest one, optionally
restricted to stable releases.

Key modules:
- semver: SemVer value object, parsing and comparison
- selector: Latest-version selection over a text blob
- tag_source: Git tag and file/stdin candidate sources
- rewrite: Regex-based file rewriting with replacement maps
- config: YAML/environment configuration
- logging_config: Console and JSON logging setup
"""

from semtag.semver import ParseError, SemVer
from semtag.selector import find_latest, max_version, select_latest

__version__ = "0.1.0"

__all__ = [
    "ParseError",
    "SemVer",
    "find_latest",
    "max_version",
    "select_latest",
    "__version__",
]
