"""Status label resolution and formatting helpers.

Pure functions: they read a StatusSnapshot and never touch the state
record, so they are safe to call from any thread.
"""

from __future__ import annotations

from cli_status.constants import (
    ANSI_BOLD,
    ANSI_RESET,
    ELLIPSIS,
    SEVERITY_COLORS,
    STATUS_SEPARATOR,
)

from .status_types import Notification, Severity, StatusSnapshot

# Elapsed time up to 999 hours, e.g. "123:45:07"
ELAPSED_WIDTH = len("000:00:00")


def truncate_middle(
    text: str, max_length: int, ellipsis: str = ELLIPSIS
) -> str:
    """Constrain text to a maximum length by eliding its middle.

    Args:
        text: Text to constrain
        max_length: Maximum length of the result
        ellipsis: Marker inserted in place of the removed middle

    Returns:
        ``text`` unchanged if it fits, otherwise a string of exactly
        ``max_length`` characters made of a head, the ellipsis and a tail.
        The head gets the extra character when the split is uneven.

    Example:
        >>> truncate_middle("abcdefghijklmno", 10)
        'abcde…lmno'

    """
    if len(text) <= max_length:
        return text
    if max_length <= 0:
        return ""
    if max_length <= len(ellipsis):
        return ellipsis[:max_length]

    available = max_length - len(ellipsis)
    head = (available + 1) // 2
    tail = available - head
    return text[:head] + ellipsis + text[len(text) - tail :]


def accent(
    text: str,
    severity: Severity,
    ansi: bool = True,  # noqa: FBT001, FBT002
) -> str:
    """Wrap text in bold ANSI color for the severity, if it has one."""
    color = SEVERITY_COLORS.get(severity.name)
    if not ansi or color is None:
        return text
    return f"{ANSI_BOLD}{color}{text}{ANSI_RESET}"


def notification_label(
    notification: Notification,
    ansi: bool = True,  # noqa: FBT001, FBT002
) -> str:
    """Return the display text for a notification."""
    return accent(notification.text, notification.severity, ansi=ansi)


def _digits(value: int) -> int:
    return len(str(value)) if value > 0 else 0


def max_work_label_length(
    snapshot: StatusSnapshot, configured: int, width: int
) -> int:
    """Compute the maximum length of the work label.

    Without a known terminal width the configured maximum applies. With
    one, the label is also kept within the room left by the layout
    ``HHH:MM:SS | CCC/TTTT | /W: label``, allowing one extra digit for
    each number in case it grows before the next render.

    Args:
        snapshot: Snapshot being rendered
        configured: Configured maximum work label length
        width: Terminal width, or 0 if unknown

    Returns:
        Maximum work label length, never negative

    """
    if width <= 0:
        return configured

    count_length = _digits(snapshot.count) + 1
    total_length = len("/") + _digits(snapshot.total) + 1
    separators = 2 * len(STATUS_SEPARATOR)
    layout = ELAPSED_WIDTH + separators + count_length + total_length
    work_prefix = len("/") + _digits(snapshot.work_count) + 1 + len(": ")
    available = width - layout - work_prefix
    return max(0, min(configured, available))


def work_label(snapshot: StatusSnapshot, max_length: int) -> str:
    """Return the label for the current work, e.g. ``/3: path/to/file``."""
    label = truncate_middle(str(snapshot.work), max_length)
    return f"/{snapshot.work_count}: {label}"


def resolve_status_label(
    snapshot: StatusSnapshot,
    max_length: int,
    ansi: bool = True,  # noqa: FBT001, FBT002
) -> str | None:
    """Resolve the label to show, by priority.

    1. An unexpired notification, accented by severity.
    2. The status message, which persists until cleared.
    3. The current work, if any work is in progress.

    Args:
        snapshot: Snapshot with lazy expiry already applied
        max_length: Maximum work label length
        ansi: Whether to accent notifications with ANSI codes

    Returns:
        The label, or None when no source applies

    """
    if snapshot.notification is not None:
        return notification_label(snapshot.notification, ansi=ansi)
    if snapshot.message is not None:
        return snapshot.message
    if snapshot.has_work:
        return work_label(snapshot, max_length)
    return None
