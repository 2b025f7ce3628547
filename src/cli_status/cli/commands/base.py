"""Base command handler for cli-status CLI commands."""

from abc import ABC, abstractmethod
from argparse import Namespace

from cli_status.config import SettingsManager


class BaseCommandHandler(ABC):
    """Abstract base class for all command handlers.

    CLIRunner creates the shared SettingsManager and injects it, so tests
    can point handlers at a temporary settings directory.
    """

    def __init__(self, settings_manager: SettingsManager) -> None:
        """Initialize the command handler.

        Args:
            settings_manager: Settings manager shared by all commands

        """
        self.settings_manager = settings_manager
        self.settings = settings_manager.load_settings()

    @abstractmethod
    async def execute(self, args: Namespace) -> None:
        """Execute the command with parsed arguments."""
