"""ContextVar-based format configuration for chatmark.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per MessageFormatter call, read by the classifier,
the media helpers and the renderer in the same context.

The tokenizer itself takes no configuration: its rule order and grammar
are fixed, so the same message always yields the same tokens.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from chatmark.config import FormatConfig, format_config_context

    with format_config_context(FormatConfig(max_mega_emoji=3)):
        is_emoji_only("🎉🎉🎉🎉")  # False here

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FormatConfig:
    """Immutable format configuration.

    Attributes:
        max_mega_emoji: Largest emoji count that still renders in mega mode
        emoji_cdn_host: Host serving custom emoji images
        highlight: Syntax-highlight code blocks when rendering
        open_links_in_new_tab: Add target="_blank" to rendered links

    """

    max_mega_emoji: int = 5
    emoji_cdn_host: str = "cdn.discordapp.com"
    highlight: bool = False
    open_links_in_new_tab: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict) -> "FormatConfig":
        """Create FormatConfig from dictionary.

        Only includes keys that are valid FormatConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = FormatConfig.from_dict({"highlight": True, "theme": "x"})
            >>> config.highlight
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: FormatConfig = FormatConfig()

_format_config: ContextVar[FormatConfig] = ContextVar(
    "format_config",
    default=_DEFAULT_CONFIG,
)


def get_format_config() -> FormatConfig:
    """Get current format configuration (thread-local)."""
    return _format_config.get()


def set_format_config(config: FormatConfig) -> None:
    """Set format configuration for current context.

    Args:
        config: FormatConfig instance to use for this context.

    """
    _format_config.set(config)


def reset_format_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.
    """
    _format_config.set(_DEFAULT_CONFIG)


@contextmanager
def format_config_context(config: FormatConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: FormatConfig to use within the context.

    Example:
        >>> with format_config_context(FormatConfig(highlight=True)):
        ...     get_format_config().highlight
        True

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _format_config.get()
    _format_config.set(config)
    try:
        yield
    finally:
        _format_config.set(previous)


__all__ = [
    "FormatConfig",
    "get_format_config",
    "set_format_config",
    "reset_format_config",
    "format_config_context",
]
