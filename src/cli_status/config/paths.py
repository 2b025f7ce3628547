"""Path constants and utilities for cli-status configuration.

Centralizes where settings and logs live so every component resolves the
same locations, including the environment override used by tests.
"""

import os
from pathlib import Path

from cli_status.constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    ENV_CONFIG_DIR,
)


class Paths:
    """Application paths and directory structure."""

    HOME_DIR = Path.home()
    CONFIG_BASE_DIR = HOME_DIR / ".config"
    CONFIG_DIR = CONFIG_BASE_DIR / CONFIG_DIR_NAME
    LOGS_DIR = CONFIG_DIR / "logs"

    @classmethod
    def config_dir(cls) -> Path:
        """Return the settings directory, honoring CLI_STATUS_CONFIG_DIR."""
        override = os.getenv(ENV_CONFIG_DIR)
        if override:
            return cls.expand_path(override)
        return cls.CONFIG_DIR

    @classmethod
    def settings_file(cls, config_dir: Path | None = None) -> Path:
        """Return the settings.conf path inside ``config_dir``.

        Args:
            config_dir: Settings directory (defaults to config_dir())

        Returns:
            Path to settings.conf

        """
        return (config_dir or cls.config_dir()) / CONFIG_FILE_NAME

    @classmethod
    def expand_path(cls, path_str: str) -> Path:
        """Expand and resolve path with ~ and relative path support.

        Example:
            >>> Paths.expand_path("~/.config/cli-status")
            Path('/home/user/.config/cli-status')

        """
        return Path(path_str).expanduser().resolve(strict=False)
