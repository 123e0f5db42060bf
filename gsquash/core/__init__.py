"""Core functionality for the squash tool."""

from .config import SquashConfig
from .types import (
    Commit, SquashRequest, SquashResult, SquashPlan,
    GitSquashError, RepositoryUnavailable, GitOperationError, GraphTraversalFailure,
    InsufficientHistory, InvalidSelection, MessageError, MessageTooLong, EmptyMessage,
    CommitConstructionFailure, PromptAborted
)
from .formatter import CommitFormatter, format_commit, hours_ago
from .walker import walk_commits
from .boundary import find_boundary
from .selection import build_candidates, resolve_selection, validate_message

__all__ = [
    "SquashConfig",
    "Commit", "SquashRequest", "SquashResult", "SquashPlan",
    "GitSquashError", "RepositoryUnavailable", "GitOperationError", "GraphTraversalFailure",
    "InsufficientHistory", "InvalidSelection", "MessageError", "MessageTooLong", "EmptyMessage",
    "CommitConstructionFailure", "PromptAborted",
    "CommitFormatter", "format_commit", "hours_ago",
    "walk_commits", "find_boundary",
    "build_candidates", "resolve_selection", "validate_message"
]
