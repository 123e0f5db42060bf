"""Main squash tool implementation."""

import logging
import time
from typing import Callable, List, Optional, Sequence, Tuple

from .core.boundary import find_boundary
from .core.config import SquashConfig
from .core.selection import build_candidates, resolve_selection, validate_message
from .core.types import (
    Commit, CommitConstructionFailure, GitOperationError, GraphTraversalFailure,
    SquashPlan, SquashRequest, SquashResult
)
from .core.walker import walk_commits
from .git.operations import GitOperations

logger = logging.getLogger(__name__)

Chooser = Callable[[Sequence[str], int], int]


class GitSquashTool:
    """Collapses the most recent commits of HEAD into one."""

    def __init__(self, git_ops: GitOperations, config: Optional[SquashConfig] = None):
        self.git_ops = git_ops
        self.config = config or SquashConfig()

    def recent_commits(self, amount: int) -> List[Commit]:
        """The ``amount`` most recent commits, newest first."""
        return list(walk_commits(self.git_ops, "HEAD", amount))

    def candidates(self, amount: int, now: Optional[int] = None) -> Tuple[List[Commit], List[str]]:
        """Commits that would be absorbed and their chooser display strings."""
        now = int(time.time()) if now is None else now
        commits = self.recent_commits(amount)
        return commits, build_candidates(commits, now, self.config)

    def choose_message(self, amount: int, chooser: Chooser, prompt_message: Callable[[], str],
                       now: Optional[int] = None) -> str:
        """Let the user pick a message: typed, or reused from one of the commits."""
        shown, items = self.candidates(amount, now)
        index = chooser(items, 0)
        logger.debug("Chooser returned index %d of %d", index, len(items))

        # resolve against a fresh walk; it must match what was shown
        commits = self.recent_commits(amount)
        if [c.hash for c in commits] != [c.hash for c in shown]:
            raise GraphTraversalFailure("History changed while the message was being chosen")

        return resolve_selection(index, commits, prompt_message, self.config)

    def plan(self, amount: int) -> SquashPlan:
        """Describe what squashing ``amount`` commits would do, without doing it."""
        boundary = find_boundary(self.git_ops, amount)
        head = self.git_ops.resolve_ref("HEAD")
        absorbed = tuple(self.recent_commits(amount))
        return SquashPlan(
            amount=amount,
            head=head,
            boundary=boundary,
            absorbed=absorbed,
            history_length=self.git_ops.get_commit_count(head)
        )

    def squash(self, amount: int, message: str) -> SquashResult:
        """Replace the ``amount`` most recent commits with a single commit.

        Nothing is mutated until the boundary, the index tree and the
        committer identity have all been resolved. If creating the commit
        fails after the soft reset, HEAD is left on the boundary with the
        index intact, and the raised CommitConstructionFailure says how to
        finish or undo by hand.
        """
        request = SquashRequest(amount=amount, message=message)
        validate_message(request.message, self.config)
        logger.info("Squashing %d commits", request.amount)

        previous_head = self.git_ops.resolve_ref("HEAD")
        boundary = find_boundary(self.git_ops, request.amount)

        tree = self.git_ops.write_tree()
        if tree != self.git_ops.get_tree_hash(previous_head):
            logger.info("Index differs from HEAD; staged changes will be part of the squashed commit")
        identity = self.git_ops.get_identity("committer")
        logger.debug("Committing as %s", identity)

        self.git_ops.soft_reset(boundary.hash)

        try:
            new_commit = self.git_ops.create_commit(tree, [boundary.hash], request.message)
            self.git_ops.update_head(
                new_commit, expected_old=boundary.hash,
                reason=f"gsquash: squash {request.amount} commits")
        except GitOperationError as e:
            step = getattr(e, "step", "commit")
            logger.error("Squash failed after reset to %s: %s", boundary.short_hash, e)
            raise CommitConstructionFailure(
                f"{e}\nHEAD now points at {boundary.short_hash}; the index still holds the "
                f"squashed content. Run 'git commit' to finish, or "
                f"'git reset --soft {previous_head[:12]}' to undo.",
                step=step, previous_head=previous_head, boundary=boundary.hash
            ) from e

        logger.info("Created commit %s on top of %s", new_commit[:8], boundary.short_hash)
        return SquashResult(
            new_commit=new_commit,
            boundary=boundary,
            previous_head=previous_head,
            amount=request.amount
        )
