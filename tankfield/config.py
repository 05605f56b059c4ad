import os
from dataclasses import dataclass
from typing import Optional

from tankfield.world.noise_field import MAX_SEED

@dataclass
class SimConfig:
    """Configuration settings for the tankfield simulation engine."""
    seed: int = 0 # Base seed for the shared noise field
    ai_tank_count: int = 19 # AI tanks get ids 1..ai_tank_count, 0 is the player colour

    target_fps: float = 60.0
    max_ticks: Optional[int] = None # None runs until shutdown() is called

    projectile_workers: int = 1 # >1 integrates cannonballs on a thread pool
    diagnostics_interval: float = 1.0 # Seconds between FPS / entity count log lines
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not 0 <= self.seed <= MAX_SEED:
            raise ValueError(f"seed must be within 0..{MAX_SEED}, got {self.seed}")
        if self.target_fps <= 0:
            raise ValueError(f"target_fps must be positive, got {self.target_fps}")
        if self.ai_tank_count < 0:
            raise ValueError(f"ai_tank_count must not be negative, got {self.ai_tank_count}")
        if self.projectile_workers < 1:
            raise ValueError(f"projectile_workers must be at least 1, got {self.projectile_workers}")

    @classmethod
    def from_env(cls) -> "SimConfig":
        """Builds a config from TANKFIELD_* environment variables, falling back to defaults."""
        max_ticks = os.environ.get("TANKFIELD_MAX_TICKS")
        return cls(
            seed=int(os.environ.get("TANKFIELD_SEED", cls.seed)),
            ai_tank_count=int(os.environ.get("TANKFIELD_AI_TANKS", cls.ai_tank_count)),
            max_ticks=int(max_ticks) if max_ticks else None,
            projectile_workers=int(os.environ.get("TANKFIELD_WORKERS", cls.projectile_workers)),
            log_level=os.environ.get("TANKFIELD_LOG_LEVEL", cls.log_level),
        )
