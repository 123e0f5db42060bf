"""Git operations for the squash tool."""

import logging
import subprocess
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Union

from ..core.config import SquashConfig
from ..core.types import (
    Commit, CommitConstructionFailure, GitOperationError,
    GraphTraversalFailure, RepositoryUnavailable
)

logger = logging.getLogger(__name__)


class GitOperations:
    """Handles all git operations for the squash tool."""

    def __init__(self, repo_path: Optional[Union[str, Path]] = None,
                 config: Optional[SquashConfig] = None):
        self.repo_path = Path(repo_path) if repo_path is not None else Path.cwd()
        self.config = config or SquashConfig()
        self._validate_git_repository()

    def _run_git_command(self, cmd: List[str], check: bool = True,
                         input: Optional[str] = None,
                         errors: str = "replace") -> subprocess.CompletedProcess:
        """Run a git command and return the result."""
        full_cmd = ["git"] + cmd
        logger.debug("Running git command: %s", " ".join(full_cmd))

        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_path,
                input=input,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors=errors,
                check=check
            )
            return result
        except subprocess.CalledProcessError as e:
            logger.error("Git command failed: %s\nStderr: %s", " ".join(full_cmd), e.stderr)
            raise GitOperationError(f"Git command failed: {e.stderr.strip()}") from e
        except UnicodeDecodeError as e:
            raise GitOperationError(
                f"Git output is not valid UTF-8: {' '.join(full_cmd)}") from e
        except OSError as e:
            raise RepositoryUnavailable(
                f"Cannot run git in {self.repo_path}: {e}") from e

    def _validate_git_repository(self) -> None:
        """Validate that repo_path is inside a git repository."""
        if not self.repo_path.is_dir():
            raise RepositoryUnavailable(f"Repository path does not exist: {self.repo_path}")
        try:
            result = self._run_git_command(["rev-parse", "--git-dir"], check=True)
            logger.debug("Git repository found at: %s", result.stdout.strip())
        except GitOperationError as e:
            raise RepositoryUnavailable(
                f"Not in a git repository: {self.repo_path}. "
                "Please run this command from within a git repository."
            ) from e

    def resolve_ref(self, ref: str = "HEAD") -> str:
        """Resolve a ref to the full hash of the commit it points at."""
        result = self._run_git_command(
            ["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], check=False)
        if result.returncode != 0:
            raise GraphTraversalFailure(f"Cannot resolve '{ref}' to a commit")
        return result.stdout.strip()

    def iter_rev_list(self, start: str, limit: Optional[int] = None) -> Iterator[str]:
        """Stream commit hashes reachable from start in topological order.

        The underlying ``git rev-list`` process is terminated as soon as the
        consumer stops iterating, so a small limit never walks the whole
        history.
        """
        cmd = ["git", "rev-list", "--topo-order"]
        if limit is not None:
            cmd.append(f"--max-count={limit}")
        cmd.append(start)
        logger.debug("Streaming git command: %s", " ".join(cmd))

        try:
            proc = subprocess.Popen(
                cmd,
                cwd=self.repo_path,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace"
            )
        except OSError as e:
            raise GraphTraversalFailure(f"Cannot start history walk from {start}: {e}") from e

        return self._stream_hashes(proc, start)

    def _stream_hashes(self, proc: subprocess.Popen, start: str) -> Iterator[str]:
        finished = False
        yielded = 0
        try:
            for line in proc.stdout:
                line = line.strip()
                if line:
                    yielded += 1
                    yield line
            finished = True
        finally:
            if not finished:
                proc.kill()
            stderr = proc.stderr.read() if finished else ""
            returncode = proc.wait()
            proc.stdout.close()
            proc.stderr.close()

        if returncode != 0:
            if not yielded:
                raise GraphTraversalFailure(
                    f"History walk from {start[:8]} failed: {stderr.strip()}")
            logger.warning("History walk from %s ended early: %s", start[:8], stderr.strip())

    def get_commit(self, commit_hash: str) -> Commit:
        """Read a commit, with its message re-encoded to UTF-8 by git.

        Raises GitOperationError if the message cannot be converted, so a
        walk skips the commit instead of carrying a mangled message.
        """
        result = self._run_git_command(
            ["show", "-s", "--no-show-signature", "--encoding=UTF-8",
             "--format=%P%x00%ct%x00%B", commit_hash],
            errors="strict"
        )
        return self._parse_commit(commit_hash, result.stdout)

    @staticmethod
    def _parse_commit(commit_hash: str, output: str) -> Commit:
        # "<parents>\0<committer seconds>\0<raw body>"
        fields = output.split("\x00", 2)
        if len(fields) != 3:
            raise GitOperationError(f"Unexpected output reading commit {commit_hash[:8]}")
        parents, timestamp, message = fields

        return Commit(
            hash=commit_hash,
            parents=tuple(parents.split()),
            timestamp=int(timestamp),
            message=message.rstrip("\n")
        )

    def soft_reset(self, commit_hash: str) -> None:
        """Move HEAD to a commit, leaving index and working tree untouched."""
        logger.info("Resetting to commit %s (--soft)", commit_hash[:8])
        self._run_git_command(["reset", "--soft", commit_hash])

    def write_tree(self) -> str:
        """Write the current index as a tree object."""
        try:
            result = self._run_git_command(["write-tree"])
        except GitOperationError as e:
            raise CommitConstructionFailure(f"Failed to write tree: {e}", step="write-tree") from e
        return result.stdout.strip()

    def get_tree_hash(self, commit_hash: str) -> str:
        """Get the tree hash for a commit."""
        result = self._run_git_command(["rev-parse", f"{commit_hash}^{{tree}}"])
        return result.stdout.strip()

    def get_identity(self, kind: str = "author") -> str:
        """Read the configured author or committer identity."""
        variable = {"author": "GIT_AUTHOR_IDENT", "committer": "GIT_COMMITTER_IDENT"}[kind]
        try:
            result = self._run_git_command(["var", variable])
        except GitOperationError as e:
            raise CommitConstructionFailure(
                f"Failed to get signature: {e}", step="signature") from e
        return result.stdout.strip()

    def create_commit(self, tree_hash: str, parents: Sequence[str], message: str) -> str:
        """Create a commit object; identity comes from the git environment."""
        logger.debug("Creating commit with tree %s, parents %s",
                     tree_hash[:8], ", ".join(p[:8] for p in parents) or "none")

        cmd = ["commit-tree", tree_hash]
        for parent in parents:
            cmd.extend(["-p", parent])

        # message goes through stdin so it is stored verbatim
        try:
            result = self._run_git_command(cmd, input=message)
        except GitOperationError as e:
            raise CommitConstructionFailure(f"Could not commit: {e}", step="commit") from e
        return result.stdout.strip()

    def update_head(self, commit_hash: str, expected_old: str, reason: str = "gsquash") -> None:
        """Point HEAD (and the branch it names) at a commit.

        Fails instead of overwriting if HEAD no longer points at expected_old.
        """
        logger.debug("Updating HEAD to %s (expected %s)", commit_hash[:8], expected_old[:8])
        try:
            self._run_git_command(["update-ref", "-m", reason, "HEAD", commit_hash, expected_old])
        except GitOperationError as e:
            raise CommitConstructionFailure(
                f"Failed to update HEAD: {e}", step="update-ref") from e

    def get_commit_count(self, ref: str = "HEAD") -> int:
        """Get the number of commits in a ref."""
        result = self._run_git_command(["rev-list", "--count", ref])
        return int(result.stdout.strip())
