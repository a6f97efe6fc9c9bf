"""
Pytest configuration and fixtures for semtag tests.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
import yaml


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep tests away from the user's configuration and SEMTAG_* variables."""
    for name in (
        "SEMTAG_STABLE_ONLY",
        "SEMTAG_FETCH_TAGS",
        "SEMTAG_REPOSITORY",
        "SEMTAG_LOG_LEVEL",
        "SEMTAG_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SEMTAG_CONFIG_PATH", str(tmp_path / "config" / "semtag.yaml"))


@pytest.fixture
def temp_config_dir(tmp_path) -> Path:
    """Create a temporary directory for configuration files."""
    config_dir = tmp_path / "semtag-config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def semtag_config() -> dict:
    """A sample configuration."""
    return {
        "stable_only": True,
        "fetch_tags": False,
        "repository": "/srv/repo",
        "git_timeout_seconds": 10,
        "log_level": "DEBUG",
        "log_format": "json",
        "replacements": [
            {
                "file": "pyproject.toml",
                "pattern": '^version = ".*"$',
                "replacement": 'version = "{version}"',
            },
        ],
    }


@pytest.fixture
def semtag_config_file(temp_config_dir: Path, semtag_config: dict) -> Path:
    """Write the sample configuration to a YAML file."""
    config_path = temp_config_dir / "semtag.yaml"
    with open(config_path, "w") as f:
        yaml.dump(semtag_config, f)
    return config_path


@pytest.fixture
def git_tags() -> str:
    """Sample `git tag` output with noise, prereleases and double digits."""
    return "\n".join([
        "v0.3.0",
        "v0.10.0",
        "v0.11.5",
        "v1.2.3",
        "v1.3.0-rc1",
        "docs-snapshot",
        "v1.2.10",
        "",
    ])


@pytest.fixture
def mock_git(git_tags):
    """
    Build a subprocess.run side effect emulating git.

    `git fetch --tags` succeeds with no output and `git tag` lists
    `git_tags`. Every call is recorded in `mock_git.calls`.
    """
    calls = []

    def mock_run(args, **kwargs):
        calls.append((args, kwargs))
        result = MagicMock()
        result.returncode = 0
        result.stdout = git_tags if "tag" in args and "fetch" not in args else ""
        return result

    mock_run.calls = calls
    return mock_run
