"""Command line interface for gsquash."""

from pathlib import Path
from typing import Optional
import argparse
import logging
import os
import sys

from .core.config import SquashConfig
from .core.types import GitSquashError, PromptAborted, SquashPlan
from .git.operations import GitOperations
from .tool import GitSquashTool
from .ui.prompts import ask_message, choose, get_console

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def non_negative_int(value: str) -> int:
    """argparse type for the commit count."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"amount cannot be negative: {number}")
    return number


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the command line argument parser."""
    parser = argparse.ArgumentParser(
        prog='gsquash',
        description='Squash the most recent commits into a single commit',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s 3                      # Pick a message, squash last 3 commits
  %(prog)s 3 -m "Add parser"      # Squash with the given message
  %(prog)s 3 --dry-run            # Show what would be squashed

Environment Variables:
  GSQUASH_VERBOSE   Set to enable debug logging
        """
    )

    parser.add_argument(
        'amount',
        type=non_negative_int,
        help='Number of most recent commits to squash'
    )

    parser.add_argument(
        '--message', '-m',
        help='Commit message to use instead of choosing one interactively',
        metavar='MESSAGE'
    )

    parser.add_argument(
        '--max-length',
        type=int,
        default=SquashConfig.max_message_length,
        help='Maximum commit summary length in characters (default: %(default)s)',
        metavar='CHARS'
    )

    parser.add_argument(
        '--repo', '-C',
        type=Path,
        default=None,
        help='Path to the repository (default: current directory)',
        metavar='PATH'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show the commits that would be squashed without changing anything'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser


def display_plan(plan: SquashPlan) -> None:
    """Display what a squash would do."""
    print(f"New parent: {plan.boundary.short_hash} {plan.boundary.summary}")
    print(f"Commits to squash ({len(plan.absorbed)}):")
    for commit in plan.absorbed:
        print(f"  {commit.short_hash} {commit.summary}")
    print(f"History: {plan.history_length} -> {plan.new_history_length} commits")


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_argument_parser()
    parsed_args = parser.parse_args(args)

    env_verbose = bool(os.environ.get('GSQUASH_VERBOSE', ""))
    setup_logging(parsed_args.verbose or env_verbose)

    try:
        config = SquashConfig.from_cli_args(parsed_args)
        logger.debug("Configuration: %s", config)

        git_ops = GitOperations(repo_path=parsed_args.repo, config=config)
        tool = GitSquashTool(git_ops, config)

        if parsed_args.dry_run:
            display_plan(tool.plan(parsed_args.amount))
            print("\nDry run complete. Nothing was changed.")
            return 0

        if parsed_args.message is not None:
            message = parsed_args.message
        else:
            console = get_console()
            message = tool.choose_message(
                parsed_args.amount,
                chooser=lambda items, default: choose(items, default, console=console, config=config),
                prompt_message=lambda: ask_message(console=console, config=config)
            )

        result = tool.squash(parsed_args.amount, message)
        print(result.summary_line())
        return 0

    except PromptAborted as e:
        print(f"\nAborted: {e}", file=sys.stderr)
        return 130

    except GitSquashError as e:
        logger.debug("Squash error: %s", e, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user.", file=sys.stderr)
        return 130

    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
