"""Configuration management for the squash tool."""

from dataclasses import dataclass


@dataclass
class SquashConfig:
    """Configuration for squash operations."""

    # Message limits
    max_message_length: int = 80

    # Candidate rendering
    hours_column_width: int = 8
    custom_message_label: str = "➜ [Enter] Custom commit message"

    # Prompts
    select_prompt: str = "Select a commit message"
    message_prompt: str = "Message"

    def __post_init__(self):
        """Validate configuration parameters after initialization."""
        if self.max_message_length <= 0:
            raise ValueError(
                f"max_message_length must be positive, got {self.max_message_length}")
        if self.hours_column_width <= 0:
            raise ValueError(
                f"hours_column_width must be positive, got {self.hours_column_width}")

        for name in ("custom_message_label", "select_prompt", "message_prompt"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {type(value)}")
            if not value.strip():
                raise ValueError(f"{name} cannot be empty")

    @classmethod
    def from_cli_args(cls, args) -> 'SquashConfig':
        """Create config from command line arguments."""
        try:
            return cls(
                max_message_length=getattr(
                    args, 'max_length', cls.max_message_length),
            )
        except ValueError as e:
            raise ValueError(
                f"Invalid configuration from command line arguments: {e}") from e

    def with_overrides(self, **kwargs) -> 'SquashConfig':
        """Create a new config with specific overrides."""
        fields = {field.name: getattr(self, field.name)
                  for field in self.__dataclass_fields__.values()}
        fields.update(kwargs)
        return SquashConfig(**fields)
