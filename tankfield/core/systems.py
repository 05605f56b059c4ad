import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional, Sequence, Tuple, Type

import esper

from tankfield.agents.components import AiTank, Camera, Cannonball, PlayerTank, Transform, Velocity
from tankfield.core.commands import CommandBuffer
from tankfield.core.math3d import UP, quat_from_axis_angle
from tankfield.ui.camera import camera_transform
from tankfield.world.ballistics import integrate_cannonball, spawn_cannonball
from tankfield.world.noise_field import NoiseField, heading_direction, heading_for

logger = logging.getLogger(__name__)

TANK_SPEED = 5.0 # Units per second

# Processor priorities, higher runs first within a tick
AI_TANK_PRIORITY = 30
CANNONBALL_PRIORITY = 20
CAMERA_PRIORITY = 10
COMMAND_FLUSH_PRIORITY = 0

class SingletonQueryError(RuntimeError):
    """Raised when a query that must match exactly one entity does not."""

    def __init__(self, component_type: Type[Any], count: int) -> None:
        super().__init__(f"Expected exactly one entity with {component_type.__name__}, found {count}")
        self.component_type = component_type
        self.count = count


def single(component_type: Type[Any]) -> Tuple[int, Transform]:
    """Looks up the only entity carrying `component_type` and returns its Transform."""
    matches = esper.get_components(component_type, Transform)
    if len(matches) != 1:
        raise SingletonQueryError(component_type, len(matches))
    ent, (_, transform) = matches[0]
    return ent, transform


class System(esper.Processor):
    """Base class for all systems in the ECS.

    The esper module functions (e.g., esper.get_components) should be used directly
    by importing esper in the system's file. `process` receives the elapsed
    seconds since the previous tick.
    """

    def __init__(self) -> None:
        super().__init__()


class AiTankSystem(System):
    """Steers every AI tank along the noise field and fires one cannonball per tank per tick."""

    def __init__(self, noise_field: NoiseField, commands: CommandBuffer) -> None:
        super().__init__()
        self.noise_field = noise_field
        self.commands = commands

    def process(self, dt: float) -> None:
        for ent, (tank, transform) in esper.get_components(AiTank, Transform):
            # Heading comes from the position before this tick's move.
            angle = heading_for(self.noise_field, tank.id, transform.translation)

            transform.translation = transform.translation + heading_direction(angle) * TANK_SPEED * dt
            transform.rotation = quat_from_axis_angle(UP, angle)

            ball_transform, velocity = spawn_cannonball(transform)
            self.commands.spawn(ball_transform, velocity, Cannonball(visual=tank.visual))


def _integrate_chunk(balls: Sequence[Tuple[int, Any]], dt: float) -> List[int]:
    dead = []
    for ent, (_, transform, velocity) in balls:
        if integrate_cannonball(transform, velocity, dt):
            dead.append(ent)
    return dead


class CannonballSystem(System):
    """Integrates cannonball physics and queues despawns for balls that came to rest.

    With workers > 1 the balls are split into chunks integrated on a thread
    pool. Every ball only touches its own components, so chunks never
    interfere; despawns are collected and queued after all chunks finish.
    """

    def __init__(self, commands: CommandBuffer, workers: int = 1) -> None:
        super().__init__()
        self.commands = commands
        self.workers = workers
        self._executor: Optional[ThreadPoolExecutor] = None
        if workers > 1:
            self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="cannonball")

    def process(self, dt: float) -> None:
        balls = esper.get_components(Cannonball, Transform, Velocity)
        if not balls:
            return

        if self._executor is None or len(balls) < self.workers:
            dead = _integrate_chunk(balls, dt)
        else:
            chunk_size = -(-len(balls) // self.workers)
            chunks = [balls[i:i + chunk_size] for i in range(0, len(balls), chunk_size)]
            dead = []
            for chunk_dead in self._executor.map(lambda chunk: _integrate_chunk(chunk, dt), chunks):
                dead.extend(chunk_dead)

        self.commands.despawn_many(dead)

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None


class CameraSystem(System):
    """Places the chase camera behind the player tank every tick."""

    def process(self, dt: float) -> None:
        _, tank_transform = single(PlayerTank)
        _, cam = single(Camera)

        pose = camera_transform(tank_transform)
        cam.translation = pose.translation
        cam.rotation = pose.rotation


class CommandFlushSystem(System):
    """Applies the tick's deferred spawns and despawns after every other system ran."""

    def __init__(self, commands: CommandBuffer) -> None:
        super().__init__()
        self.commands = commands

    def process(self, dt: float) -> None:
        self.commands.apply()
