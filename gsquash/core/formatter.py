"""Single-line rendering of commits for the message chooser."""

from typing import Optional

from .config import SquashConfig
from .types import Commit

SECONDS_IN_HOUR = 3600
ELLIPSIS = "..."


def hours_ago(timestamp: int, now: int, width: int = 8) -> str:
    """Whole hours between timestamp and now, as a fixed-width "N h" column."""
    hours = (now - timestamp) // SECONDS_IN_HOUR
    return f"{hours} h".ljust(width)


def format_commit(commit: Commit, now: int, config: Optional[SquashConfig] = None) -> str:
    """Render a commit as "<hours> <summary>", cut to the message limit.

    A line longer than ``config.max_message_length`` is cut to exactly that
    many characters and "..." is appended.
    """
    config = config or SquashConfig()
    formatted = f"{hours_ago(commit.timestamp, now, config.hours_column_width)} {commit.summary}"
    if len(formatted) > config.max_message_length:
        formatted = formatted[:config.max_message_length] + ELLIPSIS
    return formatted


class CommitFormatter:
    """Formats commits against a fixed reference time."""

    def __init__(self, now: int, config: Optional[SquashConfig] = None):
        self.now = now
        self.config = config or SquashConfig()

    def format(self, commit: Commit) -> str:
        return format_commit(commit, self.now, self.config)
