"""haven - Survival world simulation: game state, clock, and persistence."""

from haven.clock import DayClock, format_time
from haven.config import GameConfig, load_config
from haven.log import setup_logging
from haven.persistence import (
    InMemorySaveBackend,
    JsonDirectorySaveBackend,
    PersistenceGateway,
    SaveBackend,
    SavedGame,
    record_id,
    to_record,
)
from haven.session import Session
from haven.state import GameState, Player, PlayerStats, Weather
from haven.store import (
    GameStateStore,
    advance_time,
    apply_harvest,
    move_player,
    new_game_state,
)
from haven.types import ConfigError, CorruptSaveError

__all__ = [
    "ConfigError",
    "CorruptSaveError",
    "DayClock",
    "GameConfig",
    "GameState",
    "GameStateStore",
    "InMemorySaveBackend",
    "JsonDirectorySaveBackend",
    "PersistenceGateway",
    "Player",
    "PlayerStats",
    "SaveBackend",
    "SavedGame",
    "Session",
    "Weather",
    "advance_time",
    "apply_harvest",
    "format_time",
    "load_config",
    "move_player",
    "new_game_state",
    "record_id",
    "setup_logging",
    "to_record",
]
