"""Bounded topological walk over commit ancestry."""

import logging
from typing import TYPE_CHECKING, Iterator, Optional

from .types import Commit, GitOperationError

if TYPE_CHECKING:
    from ..git.operations import GitOperations

logger = logging.getLogger(__name__)


def walk_commits(git_ops: "GitOperations", start: str = "HEAD",
                 limit: Optional[int] = None) -> Iterator[Commit]:
    """Walk commits from start, newest first, in topological order.

    ``start`` is resolved before this returns, so an unresolvable start ref
    raises GraphTraversalFailure immediately rather than on first iteration.
    The returned iterator yields at most ``limit`` commits and may yield
    fewer if the history is shorter. Commits whose objects cannot be read
    are logged and skipped.
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit cannot be negative, got {limit}")

    start_hash = git_ops.resolve_ref(start)
    logger.debug("Walking from %s (%s), limit=%s", start, start_hash[:8], limit)

    if limit == 0:
        return iter(())

    hashes = git_ops.iter_rev_list(start_hash, limit)
    return _load_commits(git_ops, hashes)


def _load_commits(git_ops: "GitOperations", hashes: Iterator[str]) -> Iterator[Commit]:
    try:
        for commit_hash in hashes:
            try:
                yield git_ops.get_commit(commit_hash)
            except (GitOperationError, ValueError) as e:
                logger.warning("Skipping unreadable commit %s: %s", commit_hash[:8], e)
    finally:
        close = getattr(hashes, "close", None)
        if close is not None:
            close()
