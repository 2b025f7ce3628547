"""Config command handler for cli-status CLI.

Prints the effective settings or writes a commented settings.conf with
the default values.
"""

from argparse import Namespace

from cli_status.logger import get_logger

from .base import BaseCommandHandler

logger = get_logger(__name__)


class ConfigHandler(BaseCommandHandler):
    """Handler for config command operations."""

    async def execute(self, args: Namespace) -> None:
        """Execute the config command."""
        if args.init:
            self._init_config()
        else:
            self._show_config()

    def _show_config(self) -> None:
        """Print effective settings in settings.conf layout."""
        source = self.settings_manager.settings_file
        if not source.exists():
            source_note = " (not found, showing defaults)"
        else:
            source_note = ""
        print(f"# {source}{source_note}")
        raw = self.settings_manager.to_raw(self.settings)
        for section, values in raw.items():
            print(f"[{section}]")
            for key, value in values.items():
                print(f"{key} = {value}")

    def _init_config(self) -> None:
        """Write default settings unless a settings file already exists."""
        settings_file = self.settings_manager.settings_file
        if settings_file.exists():
            print(f"Settings already exist: {settings_file}")
            return
        path = self.settings_manager.save_settings()
        logger.info("Created settings file %s", path)
        print(f"Created {path}")
