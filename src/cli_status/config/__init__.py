"""Configuration management for cli-status.

This package provides:
- SettingsManager: settings.conf loading, validation and saving
- Settings: Validated settings record
- Paths: Path constants and utilities (from paths.py)
- Parser utilities: INI parser factory and comment manager (from parser.py)
"""

from cli_status.config.parser import ConfigCommentManager, create_parser
from cli_status.config.paths import Paths
from cli_status.config.settings import Settings, SettingsManager

__all__ = [
    "ConfigCommentManager",
    "Paths",
    "Settings",
    "SettingsManager",
    "create_parser",
]
