"""Tests for CLI functionality."""

from unittest.mock import patch

import pytest

from gsquash.cli import create_argument_parser, main


class TestArgumentParser:
    """Test CLI argument parsing."""

    def test_default_arguments(self):
        args = create_argument_parser().parse_args(["3"])

        assert args.amount == 3
        assert args.message is None
        assert args.max_length == 80
        assert args.repo is None
        assert args.dry_run is False
        assert args.verbose is False

    def test_message_argument(self):
        args = create_argument_parser().parse_args(["2", "-m", "Squashed"])
        assert args.message == "Squashed"

    def test_zero_amount_is_accepted(self):
        assert create_argument_parser().parse_args(["0"]).amount == 0

    @pytest.mark.parametrize("value", ["-1", "three", "1.5"])
    def test_invalid_amount(self, value):
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args([value])

    def test_amount_required(self):
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args([])


class TestMain:
    """Run the CLI end to end against a temporary repository."""

    def test_squash_with_message(self, git_repo, capsys):
        git_repo.add_numbered_commits(4)

        code = main(["3", "-m", "From the CLI", "-C", str(git_repo.repo_path)])

        assert code == 0
        assert capsys.readouterr().out.strip() == "Squashed 3 commits"
        assert git_repo.get_commit_count() == 2
        assert git_repo.messages()[0] == "From the CLI"

    def test_interactive_reuse(self, git_repo, capsys):
        git_repo.add_numbered_commits(4)

        with patch("gsquash.cli.choose", return_value=2) as mock_choose:
            code = main(["3", "-C", str(git_repo.repo_path)])

        assert code == 0
        items = mock_choose.call_args.args[0]
        assert len(items) == 4
        assert git_repo.messages()[0] == "Commit 2"

    def test_interactive_custom_message(self, git_repo):
        git_repo.add_numbered_commits(3)

        with patch("gsquash.cli.choose", return_value=0), \
                patch("gsquash.cli.ask_message", return_value="Typed in"):
            code = main(["2", "-C", str(git_repo.repo_path)])

        assert code == 0
        assert git_repo.messages()[0] == "Typed in"

    def test_insufficient_history(self, git_repo, capsys):
        git_repo.add_numbered_commits(2)
        head = git_repo.head()

        code = main(["2", "-m", "Too many", "-C", str(git_repo.repo_path)])

        assert code == 1
        assert "Cannot squash 2 commits" in capsys.readouterr().err
        assert git_repo.head() == head

    def test_message_too_long(self, git_repo, capsys):
        git_repo.add_numbered_commits(3)

        code = main(["2", "-m", "x" * 81, "-C", str(git_repo.repo_path)])

        assert code == 1
        assert "too long" in capsys.readouterr().err

    def test_blank_summary_line(self, git_repo, capsys):
        git_repo.add_numbered_commits(3)
        head = git_repo.head()

        code = main(["2", "-m", "\nSubject", "-C", str(git_repo.repo_path)])

        assert code == 1
        assert "summary line cannot be empty" in capsys.readouterr().err
        assert git_repo.head() == head

    def test_not_a_repository(self, tmp_path, capsys):
        code = main(["1", "-m", "m", "-C", str(tmp_path / "nowhere")])

        assert code == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_aborted_chooser(self, git_repo, capsys):
        from gsquash.core.types import PromptAborted
        git_repo.add_numbered_commits(3)
        head = git_repo.head()

        with patch("gsquash.cli.choose", side_effect=PromptAborted("Selection aborted")):
            code = main(["2", "-C", str(git_repo.repo_path)])

        assert code == 130
        assert "Aborted" in capsys.readouterr().err
        assert git_repo.head() == head

    def test_dry_run(self, git_repo, capsys):
        git_repo.add_numbered_commits(4)
        head = git_repo.head()

        code = main(["2", "--dry-run", "-C", str(git_repo.repo_path)])

        out = capsys.readouterr().out
        assert code == 0
        assert "Commit 1" in out
        assert "Commit 3" in out
        assert "Nothing was changed" in out
        assert "History: 4 -> 3 commits" in out
        assert git_repo.head() == head

    def test_invalid_max_length(self, git_repo, capsys):
        git_repo.add_numbered_commits(2)

        code = main(["1", "-m", "m", "--max-length", "0", "-C", str(git_repo.repo_path)])

        assert code == 1
        assert "max_message_length" in capsys.readouterr().err
