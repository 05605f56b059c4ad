import itertools
from typing import Iterator

import esper
import pytest

_test_worlds = itertools.count(1)

@pytest.fixture(autouse=True)
def isolated_esper_world() -> Iterator[str]:
    """Runs every test in its own esper world context and drops all contexts afterwards."""
    name = f"test-{next(_test_worlds)}"
    esper.switch_world(name)
    yield name
    esper.switch_world("default")
    for world_name in esper.list_worlds():
        if world_name != "default":
            esper.delete_world(world_name)
    esper.clear_database()


@pytest.fixture
def make_world() -> Iterator:
    """Factory for set-up TankWorlds that are closed when the test ends."""
    from tankfield.config import SimConfig
    from tankfield.world.world import TankWorld

    worlds = []

    def _make(**config_kwargs) -> TankWorld:
        world = TankWorld(SimConfig(**config_kwargs))
        world.setup()
        worlds.append(world)
        return world

    yield _make
    for world in worlds:
        world.close()
