"""Type definitions for the squash tool."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Commit:
    """A single commit as read from the object store."""
    hash: str
    parents: Tuple[str, ...]
    timestamp: int  # committer time, seconds since epoch
    message: str

    @property
    def summary(self) -> str:
        """First line of the commit message."""
        lines = self.message.splitlines()
        return lines[0] if lines else ""

    @property
    def short_hash(self) -> str:
        """Get short version of commit hash."""
        return self.hash[:8]

    @property
    def is_root(self) -> bool:
        return not self.parents

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1


@dataclass
class SquashRequest:
    """Number of most recent commits to absorb and the message to use."""
    amount: int
    message: str

    def __post_init__(self):
        if not isinstance(self.amount, int) or isinstance(self.amount, bool):
            raise ValueError(f"amount must be an integer, got {type(self.amount)}")
        if self.amount < 0:
            raise ValueError(f"amount cannot be negative, got {self.amount}")


@dataclass
class SquashResult:
    """Outcome of a completed squash."""
    new_commit: str
    boundary: Commit
    previous_head: str
    amount: int

    def summary_line(self) -> str:
        return f"Squashed {self.amount} commits"


@dataclass
class SquashPlan:
    """What a squash would do, computed without touching the repository."""
    amount: int
    head: str
    boundary: Commit
    absorbed: Tuple[Commit, ...]
    history_length: int

    @property
    def new_history_delta(self) -> int:
        """Change in ancestry length the squash would cause."""
        return 1 - self.amount

    @property
    def new_history_length(self) -> int:
        return self.history_length + self.new_history_delta


class GitSquashError(Exception):
    """Base exception for squash operations."""
    pass


class RepositoryUnavailable(GitSquashError):
    """Raised when the repository cannot be opened or located."""
    pass


class GitOperationError(GitSquashError):
    """Raised when git operations fail."""
    pass


class GraphTraversalFailure(GitOperationError):
    """Raised when a walk cannot be started or its start ref is unresolved."""
    pass


class CommitConstructionFailure(GitOperationError):
    """Raised when writing the tree, reading the identity or committing fails."""

    def __init__(self, message: str, step: str, previous_head: Optional[str] = None,
                 boundary: Optional[str] = None):
        super().__init__(message)
        self.step = step
        self.previous_head = previous_head
        self.boundary = boundary

    @property
    def head_moved(self) -> bool:
        """Whether HEAD was already reset to the boundary when this failed."""
        return self.boundary is not None


class InsufficientHistory(GitSquashError):
    """Raised when fewer than amount + 1 commits exist."""

    def __init__(self, requested: int, available: int):
        super().__init__(
            f"Cannot squash {requested} commits: need {requested + 1} commits in history, "
            f"found {available}")
        self.requested = requested
        self.available = available


class InvalidSelection(GitSquashError):
    """Raised when a selection index is outside the candidate list."""
    pass


class MessageError(GitSquashError):
    """Raised when a commit message is rejected."""
    pass


class MessageTooLong(MessageError):
    pass


class EmptyMessage(MessageError):
    pass


class PromptAborted(GitSquashError):
    """Raised when the user aborts an interactive prompt."""
    pass
