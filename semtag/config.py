"""
semtag configuration module.

Manages defaults for latest-version selection, git access, logging and
the file replacements applied by `semtag rewrite`. Configuration can be
loaded from a YAML file or environment variables.
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from platformdirs import user_config_dir

from semtag.logging_config import LOG_FORMATS, LOG_LEVELS
from semtag.rewrite import ReplacementMap


# ============================================================================
# Constants
# ============================================================================

APP_NAME = "semtag"
CONFIG_FILENAME = "semtag.yaml"

# Environment variable names
ENV_STABLE_ONLY = "SEMTAG_STABLE_ONLY"
ENV_FETCH_TAGS = "SEMTAG_FETCH_TAGS"
ENV_REPOSITORY = "SEMTAG_REPOSITORY"
ENV_LOG_LEVEL = "SEMTAG_LOG_LEVEL"
ENV_LOG_FORMAT = "SEMTAG_LOG_FORMAT"
ENV_CONFIG_PATH = "SEMTAG_CONFIG_PATH"

# Default values
DEFAULT_STABLE_ONLY = False
DEFAULT_FETCH_TAGS = True
DEFAULT_GIT_TIMEOUT = 30  # seconds
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "console"

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")

# Keys that `semtag config set` may change
SCALAR_KEYS = (
    "stable_only",
    "fetch_tags",
    "repository",
    "git_timeout_seconds",
    "log_level",
    "log_format",
)


# ============================================================================
# Exceptions
# ============================================================================


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when configuration validation fails."""

    pass


# ============================================================================
# Helper Functions
# ============================================================================


def get_default_config_dir() -> Path:
    """Get the default configuration directory for the current platform."""
    return Path(user_config_dir(APP_NAME))


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return get_default_config_dir() / CONFIG_FILENAME


def parse_bool(value: Any, name: str) -> bool:
    """
    Interpret a boolean setting from YAML or an environment variable.

    Args:
        value: bool, or a string such as "true"/"0"/"yes"
        name: Setting name used in the error message

    Raises:
        ConfigValidationError: If the value is not a recognized boolean
    """
    if isinstance(value, bool):
        return value

    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False

    raise ConfigValidationError(f"{name} must be a boolean, got: {value!r}")


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return parse_bool(value, name)


# ============================================================================
# SemtagConfig Class
# ============================================================================


class SemtagConfig:
    """
    semtag configuration manager.

    Handles loading, saving, and validating configuration.
    Configuration sources (in priority order):
    1. Environment variables
    2. Configuration file
    3. Default values

    Attributes:
        stable_only: Only consider versions without prerelease/build info
        fetch_tags: Run `git fetch --tags` before listing tags
        repository: Git repository directory ("" for the current directory)
        git_timeout_seconds: Timeout for each git command
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log output format (console, json)
        replacements: Raw replacement entries for `semtag rewrite`
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        config_dir: Optional[Path] = None,
    ):
        """
        Initialize configuration.

        Args:
            config_path: Explicit path to config file (takes precedence)
            config_dir: Directory containing config file
        """
        if config_path:
            self._config_path = Path(config_path)
            self._config_dir = self._config_path.parent
        elif config_dir:
            self._config_dir = Path(config_dir)
            self._config_path = self._config_dir / CONFIG_FILENAME
        else:
            env_path = os.environ.get(ENV_CONFIG_PATH)
            if env_path:
                self._config_path = Path(env_path)
                self._config_dir = self._config_path.parent
            else:
                self._config_dir = get_default_config_dir()
                self._config_path = self._config_dir / CONFIG_FILENAME

        self._stable_only: bool = DEFAULT_STABLE_ONLY
        self._fetch_tags: bool = DEFAULT_FETCH_TAGS
        self._repository: str = ""
        self._git_timeout_seconds: int = DEFAULT_GIT_TIMEOUT
        self._log_level: str = DEFAULT_LOG_LEVEL
        self._log_format: str = DEFAULT_LOG_FORMAT
        self._replacements: List[Dict[str, Any]] = []

        self._load()

    @property
    def config_path(self) -> Path:
        """Get the configuration file path."""
        return self._config_path

    @property
    def config_dir(self) -> Path:
        """Get the configuration directory."""
        return self._config_dir

    # -------------------------------------------------------------------------
    # Configuration Properties
    # -------------------------------------------------------------------------

    @property
    def stable_only(self) -> bool:
        """Whether only stable versions are considered by default."""
        return _env_bool(ENV_STABLE_ONLY, self._stable_only)

    @stable_only.setter
    def stable_only(self, value: bool) -> None:
        self._stable_only = value

    @property
    def fetch_tags(self) -> bool:
        """Whether tags are fetched from the remote before listing."""
        return _env_bool(ENV_FETCH_TAGS, self._fetch_tags)

    @fetch_tags.setter
    def fetch_tags(self, value: bool) -> None:
        self._fetch_tags = value

    @property
    def repository(self) -> str:
        """Get the git repository directory."""
        return os.environ.get(ENV_REPOSITORY, self._repository)

    @repository.setter
    def repository(self, value: str) -> None:
        self._repository = value

    @property
    def git_timeout_seconds(self) -> int:
        return self._git_timeout_seconds

    @git_timeout_seconds.setter
    def git_timeout_seconds(self, value: int) -> None:
        self._git_timeout_seconds = value

    @property
    def log_level(self) -> str:
        """Get the log level."""
        return os.environ.get(ENV_LOG_LEVEL, self._log_level)

    @log_level.setter
    def log_level(self, value: str) -> None:
        self._log_level = value

    @property
    def log_format(self) -> str:
        """Get the log format."""
        return os.environ.get(ENV_LOG_FORMAT, self._log_format)

    @log_format.setter
    def log_format(self, value: str) -> None:
        self._log_format = value

    @property
    def replacements(self) -> List[Dict[str, Any]]:
        """Get the raw replacement entries."""
        return self._replacements

    @replacements.setter
    def replacements(self, value: List[Dict[str, Any]]) -> None:
        self._replacements = value

    # -------------------------------------------------------------------------
    # Configuration Management
    # -------------------------------------------------------------------------

    def _load(self) -> None:
        """Load configuration from file."""
        if not self._config_path.exists():
            return

        try:
            with open(self._config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file: {e}")

        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file must contain a mapping: {self._config_path}"
            )

        self._stable_only = parse_bool(
            data.get("stable_only", DEFAULT_STABLE_ONLY), "stable_only"
        )
        self._fetch_tags = parse_bool(
            data.get("fetch_tags", DEFAULT_FETCH_TAGS), "fetch_tags"
        )
        self._repository = str(data.get("repository") or "")
        self._git_timeout_seconds = data.get(
            "git_timeout_seconds", DEFAULT_GIT_TIMEOUT
        )
        self._log_level = data.get("log_level", DEFAULT_LOG_LEVEL)
        self._log_format = data.get("log_format", DEFAULT_LOG_FORMAT)
        self._replacements = data.get("replacements") or []

    def to_dict(self) -> Dict[str, Any]:
        """Return the effective configuration (environment applied)."""
        return {
            "stable_only": self.stable_only,
            "fetch_tags": self.fetch_tags,
            "repository": self.repository,
            "git_timeout_seconds": self.git_timeout_seconds,
            "log_level": self.log_level,
            "log_format": self.log_format,
            "replacements": self.replacements,
        }

    def save(self) -> None:
        """Save configuration to file."""
        self._config_dir.mkdir(parents=True, exist_ok=True)

        data = {
            "stable_only": self._stable_only,
            "fetch_tags": self._fetch_tags,
            "repository": self._repository,
            "git_timeout_seconds": self._git_timeout_seconds,
            "log_level": self._log_level,
            "log_format": self._log_format,
            "replacements": self._replacements,
        }

        with open(self._config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)

    def set_value(self, key: str, value: str) -> None:
        """
        Set a scalar setting from its textual form.

        Does not automatically save - call save() explicitly.

        Raises:
            ConfigValidationError: If the key is unknown or the value invalid
        """
        if key not in SCALAR_KEYS:
            raise ConfigValidationError(
                f"Unknown setting: {key}. Valid settings: {', '.join(SCALAR_KEYS)}"
            )

        if key in ("stable_only", "fetch_tags"):
            setattr(self, key, parse_bool(value, key))
        elif key == "git_timeout_seconds":
            try:
                self._git_timeout_seconds = int(value)
            except ValueError:
                raise ConfigValidationError(
                    f"git_timeout_seconds must be an integer, got: {value!r}"
                )
        elif key in ("log_level", "log_format"):
            setattr(self, key, value.upper() if key == "log_level" else value.lower())
        else:
            self._repository = value

        self.validate()

    def validate(self) -> None:
        """
        Validate the current configuration.

        Raises:
            ConfigValidationError: If configuration is invalid
        """
        if str(self.log_level).upper() not in LOG_LEVELS:
            raise ConfigValidationError(
                f"Invalid log_level: {self.log_level}. "
                f"Valid levels: {', '.join(LOG_LEVELS)}"
            )

        if str(self.log_format).lower() not in LOG_FORMATS:
            raise ConfigValidationError(
                f"Invalid log_format: {self.log_format}. "
                f"Valid formats: {', '.join(LOG_FORMATS)}"
            )

        timeout = self.git_timeout_seconds
        if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
            raise ConfigValidationError(
                f"git_timeout_seconds must be a positive integer, got: {timeout!r}"
            )

        if not isinstance(self._replacements, list):
            raise ConfigValidationError("replacements must be a list")

        self.replacement_maps()

    def replacement_maps(self) -> Dict[str, List[ReplacementMap]]:
        """
        Build ReplacementMaps from the configured replacements, grouped by file.

        Each entry needs `file`, `pattern` and `replacement`; `count` is
        optional. Replacement templates are returned unrendered.

        Raises:
            ConfigValidationError: If an entry is malformed
        """
        maps: Dict[str, List[ReplacementMap]] = {}

        for index, entry in enumerate(self._replacements):
            if not isinstance(entry, dict):
                raise ConfigValidationError(
                    f"replacements[{index}] must be a mapping"
                )

            missing = [k for k in ("file", "pattern", "replacement") if k not in entry]
            if missing:
                raise ConfigValidationError(
                    f"replacements[{index}] is missing: {', '.join(missing)}"
                )

            count = entry.get("count", 0)
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise ConfigValidationError(
                    f"replacements[{index}].count must be a non-negative integer"
                )

            try:
                replacement_map = ReplacementMap.from_strings(
                    str(entry["pattern"]), str(entry["replacement"]), count
                )
            except re.error as e:
                raise ConfigValidationError(
                    f"replacements[{index}].pattern is not a valid regex: {e}"
                )

            maps.setdefault(str(entry["file"]), []).append(replacement_map)

        return maps
