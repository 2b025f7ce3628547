"""Shared fixtures for config module tests."""

from pathlib import Path

import pytest

from cli_status.config import SettingsManager


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Provide a temporary, existing settings directory."""
    directory = tmp_path / "settings"
    directory.mkdir()
    return directory


@pytest.fixture
def settings_manager(config_dir: Path) -> SettingsManager:
    """Provide a SettingsManager bound to the temporary directory."""
    return SettingsManager(config_dir)


@pytest.fixture
def write_settings(config_dir: Path):
    """Write settings.conf content into the temporary directory."""

    def _write(content: str) -> Path:
        path = config_dir / "settings.conf"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
