"""INI parser utilities for cli-status configuration.

This module provides the parser factory used for settings.conf and the
comments written alongside saved settings.
"""

import configparser
from datetime import UTC, datetime

from cli_status.constants import (
    ISO_DATETIME_FORMAT,
    KEY_TERMINAL_WIDTH,
    SECTION_LOGGING,
    SECTION_STATUS,
)


def create_parser() -> configparser.ConfigParser:
    """Create a parser accepting inline comments and literal ``%``."""
    return configparser.ConfigParser(
        inline_comment_prefixes=("#", ";"),
        interpolation=None,
    )


class ConfigCommentManager:
    """Manages configuration file comments for user-friendly documentation."""

    @staticmethod
    def get_file_header() -> str:
        """Generate file header comment with description and timestamp.

        Returns:
            Header comment string for the configuration file

        """
        timestamp = datetime.now(tz=UTC).strftime(ISO_DATETIME_FORMAT)
        return f"""# cli-status Configuration
# Settings for the terminal status line and its logging.
# Invalid values are reported and replaced by their defaults.
#
# Last updated: {timestamp}

"""

    @staticmethod
    def get_section_comments() -> dict[str, str]:
        """Get comments for each configuration section.

        Returns:
            Dictionary mapping section names to their comment strings

        """
        return {
            SECTION_STATUS: """# ========================================
# STATUS LINE
# ========================================
# notification_duration: Seconds a notification stays visible (> 0)
# notification_severity: Default severity (TRACE, DEBUG, INFO, WARN, ERROR)
# max_work_label_length: Longest work label before middle truncation
# terminal_width: Columns available, 0 to detect from the terminal
# shutdown_timeout: Seconds close() waits for pending output (> 0)
# shutdown_force_timeout: Seconds to wait after cancelling it (> 0)
# ansi: Accent notifications with ANSI colors (true/false)

""",
            SECTION_LOGGING: """
# ========================================
# LOGGING
# ========================================
# log_level: Detail level for log files (DEBUG, INFO, WARNING, ERROR)
# console_log_level: Console output detail level (DEBUG, INFO, etc.)

""",
        }

    @staticmethod
    def get_key_comments() -> dict[str, dict[str, str]]:
        """Get inline comments for specific configuration keys.

        Returns:
            Nested dictionary mapping section -> key -> comment

        """
        return {
            SECTION_STATUS: {
                KEY_TERMINAL_WIDTH: "# 0 = auto",
            },
            SECTION_LOGGING: {},
        }
