import logging
import time
from typing import Optional

import pyglet

from tankfield.config import SimConfig
from tankfield.core.systems import SingletonQueryError
from tankfield.world.world import TankWorld

logger = logging.getLogger(__name__)

TARGET_FPS = 60.0
TARGET_SPF = 1.0 / TARGET_FPS  # Seconds per frame

class Engine:
    """Drives the tank world from a pyglet clock and reports frame diagnostics."""

    def __init__(self, config: Optional[SimConfig] = None) -> None:
        self.config = config if config is not None else SimConfig()
        self.clock = pyglet.clock.Clock()
        self.stop_requested = False

        self.frame_count = 0
        self.fps_update_interval = self.config.diagnostics_interval
        self.time_since_last_fps_update = 0.0
        self.current_fps = 0.0
        self.mean_frame_time_ms = 0.0

        self.world: Optional[TankWorld] = None
        self.initialize_world()

        # Schedule the main update function
        self.clock.schedule_interval(self.update, 1 / self.config.target_fps)

    def initialize_world(self) -> None:
        self.world = TankWorld(self.config)
        self.world.setup()

    def update(self, dt: float) -> None:
        if self.stop_requested:
            return

        try:
            self.world.tick(dt)
        except SingletonQueryError:
            logger.exception("World invariant violated on tick %d, stopping", self.world.tick_count + 1)
            self.stop_requested = True
            raise

        # FPS calculation
        self.frame_count += 1
        self.time_since_last_fps_update += dt
        if self.time_since_last_fps_update >= self.fps_update_interval:
            self.current_fps = self.frame_count / self.time_since_last_fps_update
            self.mean_frame_time_ms = 1000.0 * self.time_since_last_fps_update / self.frame_count
            logger.info(
                "FPS: %.1f, frame time: %.2f ms, tanks: %d, cannonballs: %d",
                self.current_fps, self.mean_frame_time_ms,
                self.world.tank_count, self.world.cannonball_count,
            )
            self.frame_count = 0
            self.time_since_last_fps_update = 0.0

        if self.config.max_ticks is not None and self.world.tick_count >= self.config.max_ticks:
            logger.info("Reached max_ticks=%d", self.config.max_ticks)
            self.stop_requested = True

    def run(self) -> None:
        logger.info("Starting engine loop at %.1f ticks per second", self.config.target_fps)
        try:
            while not self.stop_requested:
                self.clock.tick()
                sleep_time = self.clock.get_sleep_time(True)
                if sleep_time:
                    time.sleep(sleep_time)
        finally:
            self.clock.unschedule(self.update)
        logger.info("Engine loop stopped after %d ticks.", self.world.tick_count)

    def shutdown(self) -> None:
        logger.info("Shutting down tankfield engine...")
        self.stop_requested = True
        if self.world is not None:
            self.world.close()
            self.world = None
