"""Tests for GameStateStore."""
from __future__ import annotations

import logging
from dataclasses import replace

import pytest
from haven import (
    CorruptSaveError,
    GameConfig,
    GameStateStore,
    InMemorySaveBackend,
    PersistenceGateway,
    SavedGame,
    new_game_state,
    to_record,
)
from haven.persistence import decode_player_data
from haven_resource import InventoryHelper, default_catalog
from haven_world import Position, WorldObject, default_templates


class ScriptedRandom:
    """Returns a fixed sequence of values from random()."""

    def __init__(self, *values: float) -> None:
        self._values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self._values[self.calls]
        self.calls += 1
        return value


def _saved_with(*objects: WorldObject, **state_fields) -> SavedGame:
    state = new_game_state(GameConfig(), default_catalog(), "p1", "Ada")
    return to_record(replace(state, world_objects=objects, **state_fields))


def _bush() -> WorldObject:
    return WorldObject.from_template("bush_0", default_templates()["bush"], Position(4, 4))


def _tree() -> WorldObject:
    return WorldObject.from_template("tree_0", default_templates()["tree"], Position(1, 1))


def _store(rng=None, config=None, sleeps=None, now=1000):
    backend = InMemorySaveBackend()
    sleeps = sleeps if sleeps is not None else []
    store = GameStateStore(
        config=config,
        persistence=PersistenceGateway(backend),
        seed=42,
        rng=rng,
        sleep=sleeps.append,
        now_ms=lambda: now,
    )
    return store, backend


class TestInitialize:
    def test_fresh_game_generates_world_and_saves(self) -> None:
        store, backend = _store()
        state = store.initialize("p1", name="Ada")
        assert len(state.world_objects) == 36
        assert state.player.name == "Ada"
        assert state.time_of_day == 8.0
        assert backend.load("p1") is not None
        assert store.state is state

    def test_default_name(self) -> None:
        store, _ = _store()
        assert store.initialize("p1").player.name == "Survivor"

    def test_same_seed_same_world(self) -> None:
        a, _ = _store()
        b, _ = _store()
        assert a.initialize("p1").world_objects == b.initialize("p1").world_objects

    def test_loaded_game_keeps_objects(self) -> None:
        store, backend = _store()
        saved = _saved_with(_bush(), time_of_day=20.5, day_count=3)
        state = store.initialize("p1", saved, "Ada")
        assert [o.id for o in state.world_objects] == ["bush_0"]
        assert state.time_of_day == 20.5
        assert state.day_count == 3
        # nothing to generate, so nothing is written
        assert backend.records() == {}

    def test_loaded_game_without_objects_regenerates(self) -> None:
        store, backend = _store()
        state = store.initialize("p1", _saved_with(), "Ada")
        assert len(state.world_objects) == 36
        assert backend.load("p1") is not None

    def test_missing_fields_use_defaults(self) -> None:
        store, _ = _store()
        saved = SavedGame(id="game_p1", user_id="p1", player_data="{}")
        state = store.initialize("p1", saved, "Ada")
        assert state.day_count == 1
        assert state.time_of_day == 8.0
        assert InventoryHelper.count(state.player.inventory, "wood") == 10

    def test_zero_values_are_kept(self) -> None:
        store, _ = _store()
        saved = SavedGame(
            id="game_p1",
            user_id="p1",
            world_objects=_saved_with(_bush()).world_objects,
            player_data='{"experience": 0, "stats": {"hunger": 0}}',
            time_of_day=0.0,
        )
        state = store.initialize("p1", saved, "Ada")
        assert state.time_of_day == 0.0
        assert state.player.stats.hunger == 0

    def test_null_progress_fields_use_defaults(self) -> None:
        store, _ = _store()
        saved = SavedGame(
            id="game_p1",
            user_id="p1",
            world_objects=_saved_with(_bush()).world_objects,
            player_data='{"experience": null, "level": null}',
        )
        state = store.initialize("p1", saved, "Ada")
        assert state.player.experience == 0
        assert state.player.level == 1

    def test_saved_name_wins_over_default(self) -> None:
        store, backend = _store()
        backend.create(_saved_with(_bush()))
        assert store.load("p1").player.name == "Ada"
        assert store.load("p1", "Robin").player.name == "Ada"

    def test_unreadable_backend_starts_fresh_without_overwriting(self) -> None:
        class UnreadableBackend(InMemorySaveBackend):
            def load(self, player_id):
                raise OSError("permission denied")

        backend = UnreadableBackend()
        store = GameStateStore(
            persistence=PersistenceGateway(backend),
            seed=42,
            rng=ScriptedRandom(0.05, 0.5, 0.5),
            sleep=lambda s: None,
            now_ms=lambda: 1000,
        )
        state = store.load("p1", "Ada")
        assert len(state.world_objects) == 36
        bush = next(o for o in state.world_objects if o.type == "bush")
        store.harvest(bush.id)
        assert not store.save()
        assert backend.records() == {}

    def test_corrupt_player_data(self) -> None:
        store, _ = _store()
        saved = SavedGame(id="game_p1", user_id="p1", player_data="{not json")
        with pytest.raises(CorruptSaveError, match="game_p1"):
            store.initialize("p1", saved)

    def test_corrupt_world_objects(self) -> None:
        store, _ = _store()
        saved = SavedGame(id="game_p1", user_id="p1", world_objects='{"id": 1}')
        with pytest.raises(CorruptSaveError):
            store.initialize("p1", saved)

    def test_load_reads_backend(self) -> None:
        store, backend = _store()
        backend.create(_saved_with(_bush(), day_count=5))
        state = store.load("p1", "Ada")
        assert state.day_count == 5

    def test_operations_before_initialize(self) -> None:
        store, _ = _store()
        with pytest.raises(RuntimeError, match="initialize"):
            store.harvest("bush_0")


class TestMovePlayer:
    def test_moves(self) -> None:
        store, _ = _store()
        store.initialize("p1", _saved_with(_bush()))
        state = store.move_player(Position(4, 4))
        assert state.player.position == Position(4, 4)
        assert store.state is state


class TestHarvest:
    def test_berry_bush(self) -> None:
        sleeps: list[float] = []
        store, backend = _store(rng=ScriptedRandom(0.05, 0.5, 0.5), sleeps=sleeps)
        store.initialize("p1", _saved_with(_bush()))
        state = store.harvest("bush_0")
        assert sleeps == [2.0]
        assert InventoryHelper.count(state.player.inventory, "food") == 5
        assert not InventoryHelper.has(state.player.inventory, "fiber")
        assert state.player.experience == 5
        bush = state.object_by_id("bush_0")
        assert bush is not None
        assert bush.health == 0
        assert bush.last_harvested == 1000

    def test_progress_is_persisted(self) -> None:
        store, backend = _store(rng=ScriptedRandom(0.05, 0.5, 0.5))
        saved = _saved_with(_bush())
        backend.create(saved)
        store.initialize("p1", saved)
        store.harvest("bush_0")
        record = backend.load("p1")
        assert record is not None
        food = [s for s in decode_player_data(record.player_data)["inventory"] if s["type"] == "food"]
        assert food[0]["quantity"] == 5

    def test_missing_tool_returns_same_snapshot(self) -> None:
        sleeps: list[float] = []
        store, _ = _store(rng=ScriptedRandom(), sleeps=sleeps)
        before = store.initialize("p1", _saved_with(_tree()))
        assert store.harvest("tree_0") is before
        assert sleeps == []

    def test_unknown_object(self) -> None:
        store, _ = _store()
        before = store.initialize("p1", _saved_with(_bush()))
        assert store.harvest("nope") is before

    def test_depleted_object_rejected(self) -> None:
        store, _ = _store(rng=ScriptedRandom(0.05, 0.5, 0.5))
        store.initialize("p1", _saved_with(_bush()))
        after = store.harvest("bush_0")
        assert store.harvest("bush_0") is after

    def test_second_harvest_refused_while_busy(self) -> None:
        results = []
        store_ref: list[GameStateStore] = []

        def sleep(seconds: float) -> None:
            store = store_ref[0]
            assert store.busy
            results.append(store.harvest("bush_1"))

        store = GameStateStore(
            persistence=PersistenceGateway(InMemorySaveBackend()),
            rng=ScriptedRandom(0.05, 0.5, 0.5),
            sleep=sleep,
            now_ms=lambda: 1000,
        )
        store_ref.append(store)
        bush_1 = replace(_bush(), id="bush_1", position=Position(6, 6))
        before = store.initialize("p1", _saved_with(_bush(), bush_1))
        after = store.harvest("bush_0")
        assert results == [before]
        assert not store.busy
        assert after.object_by_id("bush_1") == bush_1

    def test_busy_cleared_after_error(self) -> None:
        def sleep(seconds: float) -> None:
            raise RuntimeError("interrupted")

        store = GameStateStore(
            persistence=PersistenceGateway(InMemorySaveBackend()),
            sleep=sleep,
        )
        store.initialize("p1", _saved_with(_bush()))
        with pytest.raises(RuntimeError, match="interrupted"):
            store.harvest("bush_0")
        assert not store.busy

    def test_with_equipped_axe(self) -> None:
        store, _ = _store(rng=ScriptedRandom(0.0, 0.0, 0.9))
        store.initialize("p1", _saved_with(_tree()))
        store.equip_tool("axe")
        state = store.harvest("tree_0")
        assert InventoryHelper.count(state.player.inventory, "wood") == 13
        tree = state.object_by_id("tree_0")
        assert tree is not None
        assert tree.health == 20

    def test_full_inventory_logs_dropped(self, caplog) -> None:
        store, _ = _store(rng=ScriptedRandom(0.05, 0.5, 0.1, 0.0))
        catalog = default_catalog()
        state = new_game_state(GameConfig(), catalog, "p1", "Ada")
        inventory = InventoryHelper.apply_gain(
            state.player.inventory,
            [(f"junk_{i}", 1) for i in range(17)],
            catalog,
        )
        assert InventoryHelper.is_full(inventory)
        state = replace(
            state,
            player=replace(state.player, inventory=inventory),
            world_objects=(_bush(),),
        )
        store.initialize("p1", to_record(state))
        with caplog.at_level(logging.WARNING, logger="haven.store"):
            state = store.harvest("bush_0")
        assert InventoryHelper.count(state.player.inventory, "food") == 5
        assert not InventoryHelper.has(state.player.inventory, "fiber")
        assert "dropped 1 fiber" in caplog.text


class TestTick:
    def test_suspended_until_started(self) -> None:
        store, _ = _store()
        before = store.initialize("p1", _saved_with(_bush()))
        assert store.tick(60_000) is before

    def test_advances_after_start(self) -> None:
        store, _ = _store()
        store.initialize("p1", _saved_with(_bush()))
        store.start()
        state = store.tick(1000)
        assert state.time_of_day == pytest.approx(8.02)

    def test_partial_ticks_carry(self) -> None:
        store, _ = _store()
        before = store.initialize("p1", _saved_with(_bush()))
        store.start()
        assert store.tick(600) is before
        state = store.tick(600)
        assert state.time_of_day == pytest.approx(8.02)

    def test_stop_suspends(self) -> None:
        store, _ = _store()
        store.initialize("p1", _saved_with(_bush()))
        store.start()
        store.stop()
        assert not store.started
        assert store.tick(5000).time_of_day == 8.0

    def test_day_rollover(self, caplog) -> None:
        store, _ = _store(config=GameConfig(day_duration_ms=24_000))
        store.initialize("p1", _saved_with(_bush()))
        store.start()
        with caplog.at_level(logging.INFO, logger="haven.store"):
            state = store.tick(16_000)
        assert state.time_of_day == 0.0
        assert state.day_count == 2
        assert "Day 2 begins" in caplog.text
        assert not store.is_daytime

    def test_negative_elapsed(self) -> None:
        store, _ = _store()
        store.initialize("p1", _saved_with(_bush()))
        store.start()
        with pytest.raises(ValueError):
            store.tick(-1)


class TestEquipAndSave:
    def test_equip_tool(self) -> None:
        store, _ = _store()
        store.initialize("p1", _saved_with(_bush()))
        tool = store.equip_tool("pickaxe").player.equipped_tool
        assert tool is not None
        assert tool.type == "pickaxe"
        assert tool.durability == tool.max_durability == 80

    def test_unknown_tool(self) -> None:
        store, _ = _store()
        store.initialize("p1", _saved_with(_bush()))
        with pytest.raises(KeyError):
            store.equip_tool("lightsaber")

    def test_save(self) -> None:
        store, backend = _store()
        store.initialize("p1", _saved_with(_bush(), day_count=6))
        assert store.save()
        record = backend.load("p1")
        assert record is not None
        assert record.day_count == 6


class TestSubscribers:
    def test_listener_sees_each_new_snapshot(self) -> None:
        store, _ = _store()
        seen = []
        store.subscribe(seen.append)
        initial = store.initialize("p1", _saved_with(_bush()))
        moved = store.move_player(Position(0, 0))
        assert seen == [initial, moved]

    def test_rejections_do_not_publish(self) -> None:
        store, _ = _store()
        store.initialize("p1", _saved_with(_tree()))
        seen = []
        store.subscribe(seen.append)
        store.harvest("tree_0")
        store.tick(1000)
        assert seen == []

    def test_unsubscribe(self) -> None:
        store, _ = _store()
        seen = []
        store.subscribe(seen.append)
        store.unsubscribe(seen.append)
        store.initialize("p1", _saved_with(_bush()))
        assert seen == []
