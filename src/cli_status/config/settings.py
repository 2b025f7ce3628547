"""Settings manager for the settings.conf INI file.

Values are read leniently: a missing file or key yields the default, and
an invalid value is reported with a warning and replaced by its default,
so a bad settings file never stops the status line from working.
"""

import configparser
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypedDict, TypeVar

from cli_status.config.parser import ConfigCommentManager, create_parser
from cli_status.config.paths import Paths
from cli_status.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    KEY_ANSI,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_LOG_LEVEL,
    KEY_MAX_WORK_LABEL_LENGTH,
    KEY_NOTIFICATION_DURATION,
    KEY_NOTIFICATION_SEVERITY,
    KEY_SHUTDOWN_FORCE_TIMEOUT,
    KEY_SHUTDOWN_TIMEOUT,
    KEY_TERMINAL_WIDTH,
    SECTION_LOGGING,
    SECTION_STATUS,
)
from cli_status.exceptions import ConfigurationError
from cli_status.logger import get_logger
from cli_status.status.status_types import Severity, StatusConfig

logger = get_logger(__name__)

V = TypeVar("V")

# Type alias for raw INI config dictionary: section -> key -> value
RawSettings = dict[str, dict[str, str]]

LOG_LEVEL_NAMES = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(TypedDict):
    """Validated contents of settings.conf."""

    notification_duration: float
    notification_severity: Severity
    max_work_label_length: int
    terminal_width: int
    shutdown_timeout: float
    shutdown_force_timeout: float
    ansi: bool
    log_level: str
    console_log_level: str


def _parse_bool(value: str) -> bool:
    key = value.strip().lower()
    if key not in configparser.ConfigParser.BOOLEAN_STATES:
        msg = f"Not a boolean: {value!r}"
        raise ValueError(msg)
    return configparser.ConfigParser.BOOLEAN_STATES[key]


def _parse_level(value: str) -> str:
    level = value.strip().upper()
    if level not in LOG_LEVEL_NAMES:
        msg = f"Unknown log level: {value!r}"
        raise ValueError(msg)
    return level


def _format_value(value: Any) -> str:  # noqa: ANN401
    if isinstance(value, Severity):
        return value.name
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class SettingsManager:
    """Loads and saves settings.conf."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize settings manager.

        Args:
            config_dir: Configuration directory path
                (defaults to Paths.config_dir())

        """
        self.config_dir = config_dir or Paths.config_dir()
        self.settings_file = self.config_dir / CONFIG_FILE_NAME

    @staticmethod
    def get_default_settings() -> Settings:
        """Get default settings.

        Returns:
            Settings matching StatusConfig defaults and logging defaults

        """
        defaults = StatusConfig()
        return Settings(
            notification_duration=defaults.notification_duration,
            notification_severity=defaults.notification_severity,
            max_work_label_length=defaults.max_work_label_length,
            terminal_width=defaults.terminal_width,
            shutdown_timeout=defaults.shutdown_timeout,
            shutdown_force_timeout=defaults.shutdown_force_timeout,
            ansi=defaults.ansi,
            log_level=DEFAULT_LOG_LEVEL,
            console_log_level=DEFAULT_CONSOLE_LOG_LEVEL,
        )

    def _read_parser(self) -> configparser.ConfigParser:
        """Read settings.conf into a parser, empty if unreadable."""
        parser = create_parser()
        if not self.settings_file.exists():
            return parser
        try:
            parser.read(self.settings_file, encoding="utf-8")
        except (configparser.Error, UnicodeDecodeError) as e:
            logger.warning(
                "Ignoring malformed settings file %s: %s",
                self.settings_file,
                e,
            )
            return create_parser()
        return parser

    def _get(
        self,
        parser: configparser.ConfigParser,
        section: str,
        key: str,
        convert: Callable[[str], V],
        default: V,
        valid: Callable[[V], bool] = lambda _: True,
    ) -> V:
        raw = parser.get(section, key, fallback=None)
        if raw is None or not raw.strip():
            return default
        try:
            value = convert(raw)
        except ValueError:
            pass
        else:
            if valid(value):
                return value
        logger.warning(
            "Invalid value %r for %s.%s in %s, using default %s",
            raw,
            section,
            key,
            self.settings_file,
            _format_value(default),
        )
        return default

    def load_settings(self) -> Settings:
        """Load settings from settings.conf.

        Returns:
            Validated settings; defaults fill anything missing or invalid

        """
        defaults = self.get_default_settings()
        parser = self._read_parser()

        def status(
            key: str,
            convert: Callable[[str], V],
            valid: Callable[[V], bool] = lambda _: True,
        ) -> V:
            return self._get(
                parser, SECTION_STATUS, key, convert, defaults[key], valid
            )

        def logging_level(key: str) -> str:
            return self._get(
                parser, SECTION_LOGGING, key, _parse_level, defaults[key]
            )

        return Settings(
            notification_duration=status(
                KEY_NOTIFICATION_DURATION, float, lambda v: v > 0
            ),
            notification_severity=status(
                KEY_NOTIFICATION_SEVERITY, Severity.parse
            ),
            max_work_label_length=status(
                KEY_MAX_WORK_LABEL_LENGTH, int, lambda v: v >= 0
            ),
            terminal_width=status(KEY_TERMINAL_WIDTH, int, lambda v: v >= 0),
            shutdown_timeout=status(
                KEY_SHUTDOWN_TIMEOUT, float, lambda v: v > 0
            ),
            shutdown_force_timeout=status(
                KEY_SHUTDOWN_FORCE_TIMEOUT, float, lambda v: v > 0
            ),
            ansi=status(KEY_ANSI, _parse_bool),
            log_level=logging_level(KEY_LOG_LEVEL),
            console_log_level=logging_level(KEY_CONSOLE_LOG_LEVEL),
        )

    def load_status_config(self) -> StatusConfig:
        """Load settings and build the StatusConfig for a CliStatus."""
        settings = self.load_settings()
        return StatusConfig(
            notification_duration=settings["notification_duration"],
            notification_severity=settings["notification_severity"],
            max_work_label_length=settings["max_work_label_length"],
            terminal_width=settings["terminal_width"],
            shutdown_timeout=settings["shutdown_timeout"],
            shutdown_force_timeout=settings["shutdown_force_timeout"],
            ansi=settings["ansi"],
        )

    @staticmethod
    def to_raw(settings: Settings) -> RawSettings:
        """Group settings by INI section as strings."""
        logging_keys = (KEY_LOG_LEVEL, KEY_CONSOLE_LOG_LEVEL)
        raw: RawSettings = {SECTION_STATUS: {}, SECTION_LOGGING: {}}
        for key, value in settings.items():
            if key in logging_keys:
                raw[SECTION_LOGGING][key] = _format_value(value)
            else:
                raw[SECTION_STATUS][key] = _format_value(value)
        return raw

    def save_settings(self, settings: Settings | None = None) -> Path:
        """Save settings to settings.conf with user-friendly comments.

        Args:
            settings: Settings to save (defaults to get_default_settings())

        Returns:
            Path of the written file

        Raises:
            ConfigurationError: If the file cannot be written

        """
        raw = self.to_raw(settings or self.get_default_settings())
        comment_manager = ConfigCommentManager()
        section_comments = comment_manager.get_section_comments()
        key_comments = comment_manager.get_key_comments()

        lines = [comment_manager.get_file_header()]
        for section, values in raw.items():
            lines.append(section_comments[section])
            lines.append(f"[{section}]\n")
            for key, value in values.items():
                inline_comment = key_comments[section].get(key, "")
                if inline_comment:
                    lines.append(f"{key} = {value}  {inline_comment}\n")
                else:
                    lines.append(f"{key} = {value}\n")

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            self.settings_file.write_text("".join(lines), encoding="utf-8")
        except OSError as e:
            msg = f"Failed to write settings: {e}"
            target = str(self.settings_file)
            raise ConfigurationError(msg, target=target) from e

        logger.debug("Saved settings to %s", self.settings_file)
        return self.settings_file
