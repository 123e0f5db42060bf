"""Git plumbing used by the squash tool."""

from .operations import GitOperations

__all__ = ["GitOperations"]
