"""Obstacle spawning and score-gated difficulty.

Difficulty rises in discrete tiers of ``score_per_tier`` points. Each
tier raises obstacle speed and tightens the spawn cadence, and both are
bounded: speed caps at ``base_speed + max_speed_bonus`` and the minimum
spawn interval floors at ``min_spawn_interval_ms``. The two limits are
tuned independently.
"""

from dataclasses import dataclass
import logging
import random
from typing import Optional, Sequence

from retro_runner.config.settings import GameSettings
from retro_runner.game.obstacles import Obstacle, ObstacleType, spawn_obstacle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DifficultyCurve:
    """Maps a score to obstacle speed and spawn cadence."""

    base_speed: float = 6.0
    speed_step: float = 0.5
    max_speed_bonus: float = 4.0
    score_per_tier: int = 500
    base_spawn_interval_ms: float = 2000.0
    spawn_interval_step_ms: float = 200.0
    min_spawn_interval_ms: float = 1200.0
    spawn_jitter_ms: float = 800.0

    @classmethod
    def from_settings(cls, settings: GameSettings) -> "DifficultyCurve":
        return cls(
            base_speed=settings.base_speed,
            speed_step=settings.speed_step,
            max_speed_bonus=settings.max_speed_bonus,
            score_per_tier=settings.score_per_tier,
            base_spawn_interval_ms=settings.base_spawn_interval_ms,
            spawn_interval_step_ms=settings.spawn_interval_step_ms,
            min_spawn_interval_ms=settings.min_spawn_interval_ms,
            spawn_jitter_ms=settings.spawn_jitter_ms,
        )

    def tier(self, score: int) -> int:
        return max(0, score) // self.score_per_tier

    def speed(self, score: int) -> float:
        return self.base_speed + min(self.tier(score) * self.speed_step, self.max_speed_bonus)

    def min_spawn_interval(self, score: int) -> float:
        return max(
            self.min_spawn_interval_ms,
            self.base_spawn_interval_ms - self.tier(score) * self.spawn_interval_step_ms,
        )

    def next_threshold(self, score: int, rng: random.Random) -> float:
        """Randomized wait before the next spawn, within the tier's band."""
        return self.min_spawn_interval(score) + rng.random() * self.spawn_jitter_ms


@dataclass
class SpawnTimer:
    """Time since the last spawn and the wait until the next one."""

    accumulated: float = 0.0
    threshold: float = 2000.0

    def reset(self, threshold: float) -> None:
        self.accumulated = 0.0
        self.threshold = threshold


class SpawnController:
    """Drops a new obstacle at the right edge whenever the timer runs out."""

    def __init__(
        self,
        curve: DifficultyCurve,
        obstacle_types: Sequence[ObstacleType],
        viewport_width: float,
        ground_line: float,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not obstacle_types:
            raise ValueError("At least one obstacle type must be enabled")

        self.curve = curve
        self.obstacle_types = list(obstacle_types)
        self.viewport_width = viewport_width
        self.ground_line = ground_line
        self._rng = rng or random.Random()
        self.timer = SpawnTimer(threshold=curve.base_spawn_interval_ms)

    def reset(self) -> None:
        """Start over with the opening interval."""
        self.timer.reset(self.curve.base_spawn_interval_ms)

    def update(self, delta_ms: float, score: int, speed: float) -> Optional[Obstacle]:
        """Advance the timer; return the obstacle spawned this frame, if any.

        Args:
            delta_ms: Time since last frame in milliseconds
            score: Current score, used to redraw the next threshold
            speed: Current game speed, baked into the new obstacle
        """
        self.timer.accumulated += delta_ms
        if self.timer.accumulated < self.timer.threshold:
            return None

        obstacle_type = self._rng.choice(self.obstacle_types)
        obstacle = spawn_obstacle(obstacle_type, self.viewport_width, self.ground_line, speed)

        self.timer.reset(self.curve.next_threshold(score, self._rng))
        logger.debug(
            f"Spawned {obstacle_type.name} at speed {speed}, "
            f"next in {self.timer.threshold:.0f}ms"
        )
        return obstacle
