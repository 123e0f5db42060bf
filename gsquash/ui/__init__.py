"""Terminal prompts for choosing the squashed commit's message."""

from .prompts import ask_message, choose, get_console

__all__ = ["ask_message", "choose", "get_console"]
