"""Tests for GameConfig and config loading."""
from __future__ import annotations

import json

import pytest
from haven import ConfigError, GameConfig, load_config
from haven_resource import StackPolicy


class TestDefaults:
    def test_balance_constants(self) -> None:
        config = GameConfig()
        assert config.day_duration_ms == 1_200_000
        assert config.night_start == 18
        assert config.night_end == 6
        assert config.starting_inventory_slots == 20
        assert config.harvest_delay_ms == 2000
        assert config.harvest_damage == 10
        assert config.harvest_experience == 5
        assert config.spawn_position == (10, 7)
        assert config.stack_policy is StackPolicy.UNBOUNDED

    def test_frozen(self) -> None:
        config = GameConfig()
        with pytest.raises(AttributeError):
            config.tick_ms = 5  # type: ignore[misc]


class TestValidation:
    def test_nonpositive_day_duration(self) -> None:
        with pytest.raises(ConfigError, match="day_duration_ms"):
            GameConfig(day_duration_ms=0)

    def test_night_window_order(self) -> None:
        with pytest.raises(ConfigError, match="night_end < night_start"):
            GameConfig(night_start=5, night_end=6)

    def test_negative_harvest_damage(self) -> None:
        with pytest.raises(ConfigError, match="harvest_damage"):
            GameConfig(harvest_damage=-1)

    def test_config_error_message_prefix(self) -> None:
        with pytest.raises(ConfigError, match="^Configuration error: "):
            GameConfig(tick_ms=0)


class TestFromMapping:
    def test_overrides(self) -> None:
        config = GameConfig.from_mapping({
            "day_duration_ms": 60_000,
            "stack_policy": "clamped",
            "spawn_position": [3, 4],
        })
        assert config.day_duration_ms == 60_000
        assert config.stack_policy is StackPolicy.CLAMPED
        assert config.spawn_position == (3, 4)

    def test_unknown_keys(self) -> None:
        with pytest.raises(ConfigError, match="unknown keys: bogus"):
            GameConfig.from_mapping({"bogus": 1})

    def test_bad_policy(self) -> None:
        with pytest.raises(ConfigError):
            GameConfig.from_mapping({"stack_policy": "sometimes"})


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path) -> None:
        assert load_config(tmp_path / "nope.json") == GameConfig()

    def test_reads_file(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"harvest_delay_ms": 500}), encoding="utf-8")
        assert load_config(path).harvest_delay_ms == 500

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_non_object(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_config(path)
