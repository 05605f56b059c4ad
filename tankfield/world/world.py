import itertools
import logging
from typing import Tuple

import esper

from tankfield.agents.components import AiTank, Camera, Cannonball, PlayerTank, Transform
from tankfield.config import SimConfig
from tankfield.core.commands import CommandBuffer
from tankfield.core.systems import (
    AI_TANK_PRIORITY,
    CAMERA_PRIORITY,
    CANNONBALL_PRIORITY,
    COMMAND_FLUSH_PRIORITY,
    AiTankSystem,
    CameraSystem,
    CannonballSystem,
    CommandFlushSystem,
)
from tankfield.world.noise_field import NoiseField

logger = logging.getLogger(__name__)

PLAYER_COLOR_ID = 0 # Colour slot of the player tank, AI ids start at 1
HUE_SLOTS = 20 # Colours repeat after this many ids
HUE_STEP = 18.0 # Degrees between neighbouring slots

_world_ids = itertools.count(1)


def tank_color(tank_id: int) -> Tuple[float, float, float]:
    """Maps a tank id onto a fully saturated RGB colour around the hue wheel.

    The colour is the opaque visual handed to the renderer for the tank and
    its cannonballs.
    """
    hue = (tank_id % HUE_SLOTS) * HUE_STEP
    x = 1.0 - abs((hue / 60.0) % 2.0 - 1.0)

    if hue < 60.0:
        return (1.0, x, 0.0)
    elif hue < 120.0:
        return (x, 1.0, 0.0)
    elif hue < 180.0:
        return (0.0, 1.0, x)
    elif hue < 240.0:
        return (0.0, x, 1.0)
    elif hue < 300.0:
        return (x, 0.0, 1.0)
    return (1.0, 0.0, x)


class TankWorld:
    """
    Owns one esper world context: its entities, the shared noise field and the tick pipeline.

    Args:
        config: The simulation configuration object.
    """
    def __init__(self, config: SimConfig) -> None:
        self.config = config
        self.name = f"tankfield-{next(_world_ids)}"
        self.noise_field = NoiseField(seed=config.seed)
        self.commands = CommandBuffer()
        self.tick_count = 0

        self.cannonball_system = CannonballSystem(self.commands, workers=config.projectile_workers)

        esper.switch_world(self.name)
        esper.add_processor(AiTankSystem(self.noise_field, self.commands), priority=AI_TANK_PRIORITY)
        esper.add_processor(self.cannonball_system, priority=CANNONBALL_PRIORITY)
        esper.add_processor(CameraSystem(), priority=CAMERA_PRIORITY)
        esper.add_processor(CommandFlushSystem(self.commands), priority=COMMAND_FLUSH_PRIORITY)

    def activate(self) -> None:
        """Makes this world the current esper context."""
        esper.switch_world(self.name)

    def setup(self) -> None:
        """Spawns the camera, the player tank and the AI tanks."""
        self.activate()
        esper.create_entity(Camera(), Transform())
        esper.create_entity(PlayerTank(visual=tank_color(PLAYER_COLOR_ID)), Transform())
        for tank_id in range(1, self.config.ai_tank_count + 1):
            esper.create_entity(AiTank(id=tank_id, visual=tank_color(tank_id)), Transform())
        logger.info(
            "World %s ready: 1 camera, 1 player tank, %d AI tanks (seed %d)",
            self.name, self.config.ai_tank_count, self.config.seed,
        )

    def tick(self, dt: float) -> None:
        """Runs one full simulation step: tanks, cannonballs, camera, then deferred commands."""
        self.activate()
        esper.process(dt)
        self.tick_count += 1

    @property
    def tank_count(self) -> int:
        self.activate()
        return len(esper.get_component(AiTank))

    @property
    def cannonball_count(self) -> int:
        self.activate()
        return len(esper.get_component(Cannonball))

    @property
    def entity_count(self) -> int:
        self.activate()
        return len(esper.get_component(Transform))

    def close(self) -> None:
        """Stops worker threads and discards this world's esper context."""
        self.cannonball_system.shutdown()
        if self.name in esper.list_worlds():
            esper.switch_world("default")
            esper.delete_world(self.name)
