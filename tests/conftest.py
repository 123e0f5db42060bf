"""Shared fixtures: throwaway git repositories built with the git CLI."""

import os
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

import pytest

from gsquash import GitOperations, GitSquashTool, SquashConfig


class GitTestRepository:
    """Helper for managing test git repositories."""

    def __init__(self, repo_path: Path):
        self.repo_path = repo_path
        self.repo_path.mkdir(exist_ok=True)

    def run_git(self, *args, env=None, check=True, input=None):
        """Execute a git command."""
        cmd = ["git"] + list(args)
        result = subprocess.run(
            cmd,
            cwd=self.repo_path,
            capture_output=True,
            text=True,
            check=check,
            input=input,
            env=env or os.environ
        )
        return result

    def init_repo(self):
        """Initialize repository."""
        self.run_git("init")
        self.run_git("config", "user.name", "Test User")
        self.run_git("config", "user.email", "test@example.com")
        self.run_git("config", "commit.gpgsign", "false")

    def write_file(self, path: str, content: str) -> None:
        file_path = self.repo_path / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content)

    def commit_file(self, path: str, content: str, message: str,
                    commit_date: Optional[str] = None) -> str:
        """Write, stage and commit a single file; returns the new hash."""
        self.write_file(path, content)
        self.run_git("add", path)

        env = None
        if commit_date:
            env = os.environ.copy()
            env['GIT_AUTHOR_DATE'] = commit_date
            env['GIT_COMMITTER_DATE'] = commit_date

        self.run_git("commit", "-m", message, env=env)
        return self.head()

    def commit_encoded(self, path: str, content: str, message: bytes, encoding: str) -> str:
        """Commit with message bytes stored as-is under i18n.commitEncoding."""
        self.write_file(path, content)
        self.run_git("add", path)
        subprocess.run(
            ["git", "-c", f"i18n.commitEncoding={encoding}", "commit", "-F", "-"],
            cwd=self.repo_path,
            input=message,
            capture_output=True,
            check=True
        )
        return self.head()

    def add_numbered_commits(self, count: int, start: int = 0) -> List[str]:
        """Commit files n.txt containing n, with messages "Commit n"."""
        return [
            self.commit_file(f"{n}.txt", f"{n}", f"Commit {n}")
            for n in range(start, start + count)
        ]

    def head(self) -> str:
        return self.run_git("rev-parse", "HEAD").stdout.strip()

    def tree(self, ref: str = "HEAD") -> str:
        return self.run_git("rev-parse", f"{ref}^{{tree}}").stdout.strip()

    def index_tree(self) -> str:
        return self.run_git("write-tree").stdout.strip()

    def get_commit_count(self, ref: str = "HEAD") -> int:
        """Get commit count."""
        return int(self.run_git("rev-list", "--count", ref).stdout.strip())

    def messages(self) -> List[str]:
        """Full commit messages, newest first."""
        result = self.run_git("log", "--topo-order", "--format=%B%x00")
        return [m.strip() for m in result.stdout.split("\x00") if m.strip()]

    def parents(self, ref: str = "HEAD") -> List[str]:
        line = self.run_git("rev-list", "--parents", "-n", "1", ref).stdout.split()
        return line[1:]

    def all_objects(self) -> List[str]:
        result = self.run_git("cat-file", "--batch-all-objects", "--batch-check=%(objectname)")
        return sorted(result.stdout.split())

    def diff_trees(self, old: str, new: str) -> str:
        return self.run_git("diff", old, new).stdout

    def status(self) -> str:
        return self.run_git("status", "--porcelain").stdout

    def file_exists(self, path: str) -> bool:
        """Check if file exists."""
        return (self.repo_path / path).exists()


@pytest.fixture
def git_repo():
    """Create a temporary, empty git repository."""
    with tempfile.TemporaryDirectory() as temp_dir:
        repo = GitTestRepository(Path(temp_dir) / "test_repo")
        repo.init_repo()
        yield repo


@pytest.fixture
def git_ops(git_repo: GitTestRepository):
    """GitOperations bound to the temporary repository."""
    return GitOperations(repo_path=git_repo.repo_path)


@pytest.fixture
def squash_tool(git_ops: GitOperations):
    """Create GitSquashTool instance."""
    return GitSquashTool(git_ops, SquashConfig())
