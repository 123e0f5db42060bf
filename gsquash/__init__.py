"""
gsquash - squash the most recent commits of a git branch into one.

The new commit's message is typed by hand or reused from one of the
commits being absorbed.
"""

__version__ = "0.3.0"

from .core.config import SquashConfig
from .core.types import Commit, SquashRequest, SquashResult, GitSquashError
from .git.operations import GitOperations
from .tool import GitSquashTool

__all__ = [
    "SquashConfig",
    "Commit",
    "SquashRequest",
    "SquashResult",
    "GitSquashError",
    "GitOperations",
    "GitSquashTool"
]
