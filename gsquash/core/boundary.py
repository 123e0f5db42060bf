"""Locate the commit that becomes the parent of a squashed commit."""

import logging
from typing import TYPE_CHECKING

from .types import Commit, InsufficientHistory
from .walker import walk_commits

if TYPE_CHECKING:
    from ..git.operations import GitOperations

logger = logging.getLogger(__name__)


def find_boundary(git_ops: "GitOperations", amount: int) -> Commit:
    """Return the commit exactly ``amount`` steps behind HEAD.

    At least one commit has to survive as the new parent, so a history of
    ``amount`` commits or fewer raises InsufficientHistory. ``amount == 0``
    yields HEAD itself.
    """
    if amount < 0:
        raise ValueError(f"amount cannot be negative, got {amount}")

    walked = list(walk_commits(git_ops, "HEAD", amount + 1))
    if len(walked) < amount + 1:
        raise InsufficientHistory(requested=amount, available=len(walked))

    boundary = walked[-1]
    logger.debug("Boundary for %d commits is %s (%s)", amount, boundary.short_hash, boundary.summary)
    return boundary
