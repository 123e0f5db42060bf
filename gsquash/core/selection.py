"""Candidate list for the message chooser and resolution of the chosen index.

Index 0 of the candidate list always stands for "type a custom message";
index ``k`` for ``1 <= k <= M`` stands for the ``k - 1``-th commit of the walk
the list was built from.
"""

import logging
from typing import Callable, List, Optional, Sequence

from .config import SquashConfig
from .formatter import format_commit
from .types import Commit, EmptyMessage, InvalidSelection, MessageTooLong

logger = logging.getLogger(__name__)

CUSTOM_MESSAGE_INDEX = 0


def validate_message(message: str, config: Optional[SquashConfig] = None) -> str:
    """Check a commit message before it is used, returning it unchanged.

    The summary line must be non-empty. Only the summary is measured, so
    reused multi-line messages keep their body.
    """
    config = config or SquashConfig()
    if not message or not message.strip():
        raise EmptyMessage("Commit message cannot be empty")

    summary = message.splitlines()[0]
    if not summary.strip():
        raise EmptyMessage("Commit message summary line cannot be empty")
    if len(summary) > config.max_message_length:
        raise MessageTooLong(
            f"Message is too long ({len(summary)} chars), max is {config.max_message_length}")
    return message


def build_candidates(commits: Sequence[Commit], now: int,
                     config: Optional[SquashConfig] = None) -> List[str]:
    """Display strings for the chooser, custom-message entry first."""
    config = config or SquashConfig()
    items = [config.custom_message_label]
    items.extend(format_commit(commit, now, config) for commit in commits)
    return items


def resolve_selection(index: int, commits: Sequence[Commit],
                      prompt_message: Callable[[], str],
                      config: Optional[SquashConfig] = None) -> str:
    """Turn a chooser index into the final commit message.

    ``commits`` must be the same sequence, in the same order, that the
    candidate list was built from.
    """
    config = config or SquashConfig()

    if index == CUSTOM_MESSAGE_INDEX:
        logger.debug("Custom message selected")
        return validate_message(prompt_message(), config)

    if 1 <= index <= len(commits):
        commit = commits[index - 1]
        logger.debug("Reusing message of %s", commit.short_hash)
        return validate_message(commit.message, config)

    raise InvalidSelection(
        f"Invalid selection {index}: expected 0..{len(commits)}")
