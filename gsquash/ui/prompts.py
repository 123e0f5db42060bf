"""Interactive prompts rendered with Rich.

Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import IntPrompt, Prompt

from ..core.config import SquashConfig
from ..core.selection import validate_message
from ..core.types import MessageError, PromptAborted


def get_console() -> Console:
    """Create a Rich Console for prompts; prompts go to stderr so stdout stays clean."""
    return Console(stderr=True)


def choose(items: Sequence[str], default: int = 0, console: Optional[Console] = None,
           config: Optional[SquashConfig] = None) -> int:
    """Show a numbered list and return the zero-based index the user picks."""
    config = config or SquashConfig()
    console = console or get_console()

    console.print(f"[bold]{escape(config.select_prompt)}[/bold]")
    for i, item in enumerate(items):
        marker = "[cyan]>[/cyan]" if i == default else " "
        console.print(f"{marker} [yellow]{i:>2}[/yellow]  {escape(item)}")

    try:
        return IntPrompt.ask(
            "Choice",
            console=console,
            default=default,
            choices=[str(i) for i in range(len(items))],
            show_choices=False,
        )
    except (KeyboardInterrupt, EOFError) as e:
        raise PromptAborted("Selection aborted") from e


def ask_message(console: Optional[Console] = None, config: Optional[SquashConfig] = None) -> str:
    """Ask for a commit message until one passes validation."""
    config = config or SquashConfig()
    console = console or get_console()

    while True:
        try:
            message = Prompt.ask(config.message_prompt, console=console)
        except (KeyboardInterrupt, EOFError) as e:
            raise PromptAborted("Message prompt aborted") from e
        try:
            return validate_message(message, config)
        except MessageError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
