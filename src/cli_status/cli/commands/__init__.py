"""Command handlers for the cli-status CLI."""

from .base import BaseCommandHandler
from .config import ConfigHandler
from .demo import DemoHandler

__all__ = ["BaseCommandHandler", "ConfigHandler", "DemoHandler"]
