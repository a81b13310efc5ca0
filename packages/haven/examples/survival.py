"""A short headless survival session.

Demonstrates:
- Starting a new game with a seeded world
- Walking to a berry bush and harvesting it
- Being refused at a tree until an axe is equipped
- Letting the day clock run and saving to a directory of JSON files

Run: python -m examples.survival
"""

import tempfile

from haven import (
    GameConfig,
    GameState,
    GameStateStore,
    JsonDirectorySaveBackend,
    PersistenceGateway,
    Session,
    format_time,
    setup_logging,
)


def describe(state: GameState) -> str:
    items = ", ".join(f"{s.resource_type}:{s.quantity}" for s in state.player.inventory.stacks)
    return (
        f"day {state.day_count} {format_time(state.time_of_day)}  |  "
        f"xp={state.player.experience}  |  {items}"
    )


def main() -> None:
    print("=== Survival ===\n")
    setup_logging()

    save_dir = tempfile.mkdtemp(prefix="haven-")
    # Five minute days, harvests take no real time.
    store = GameStateStore(
        config=GameConfig(day_duration_ms=300_000, harvest_delay_ms=0),
        persistence=PersistenceGateway(JsonDirectorySaveBackend(save_dir)),
        seed=42,
    )
    state = store.load("demo", "Robin")
    print(f"World has {len(state.world_objects)} objects")
    print(f"  {describe(state)}\n")

    bush = next(o for o in state.world_objects if o.type == "bush")
    store.move_player(bush.position)
    state = store.harvest(bush.id)
    print(f"Harvested {bush.name} at ({bush.position.x}, {bush.position.y})")
    print(f"  {describe(state)}\n")

    tree = next(o for o in state.world_objects if o.type == "tree")
    if store.harvest(tree.id) is state:
        print(f"{tree.name} needs an axe")
    store.equip_tool("axe")
    state = store.harvest(tree.id)
    print(f"Chopped {tree.name} with the axe")
    print(f"  {describe(state)}\n")

    # An hour of game time at this day length.
    session = Session(store)
    session.run(round(1 / store.clock.increment))
    store.save()
    print(f"After {session.ticks} ticks: {describe(store.state)}")
    print(f"Daytime: {store.is_daytime}")
    print(f"\nSaved to {save_dir}")


if __name__ == "__main__":
    main()
