"""Shared exceptions and callback aliases for the haven core."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable


class ConfigError(ValueError):
    """Raised when game configuration is missing or malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Configuration error: {message}")


class CorruptSaveError(Exception):
    """Raised when a saved game cannot be decoded."""

    def __init__(self, record_id: str, message: str) -> None:
        self.record_id = record_id
        super().__init__(f"Save {record_id!r} is corrupt: {message}")


if TYPE_CHECKING:
    from haven.state import GameState

Listener = Callable[["GameState"], None]
