"""Parallax scroll state for the countryside backdrop."""

from dataclasses import dataclass
import random
from typing import List, Optional

MOUNTAIN_PATTERN_WIDTH = 1600
GROUND_PATTERN_WIDTH = 100


@dataclass
class Mountain:
    x: float
    width: float
    height: float
    shade: int  # 0 or 1, alternating colors


class ParallaxBackground:
    """Two scrolling layers: distant mountains and ground stripes.

    Mountains move at 0.3x game speed, the ground at 1x, and both wrap
    so the pattern repeats seamlessly.
    """

    MOUNTAIN_SPEED = 0.3
    GROUND_SPEED = 1.0

    def __init__(self, rng: Optional[random.Random] = None, count: int = 8):
        self._rng = rng or random.Random()
        self.mountain_offset = 0.0
        self.ground_offset = 0.0
        self.mountains: List[Mountain] = self._generate_mountains(count)

    def _generate_mountains(self, count: int) -> List[Mountain]:
        spacing = MOUNTAIN_PATTERN_WIDTH / count
        return [
            Mountain(
                x=spacing * i + self._rng.random() * 100,
                width=100 + self._rng.random() * 100,
                height=80 + self._rng.random() * 60,
                shade=i % 2,
            )
            for i in range(count)
        ]

    def update(self, speed: float) -> None:
        self.mountain_offset -= speed * self.MOUNTAIN_SPEED
        if self.mountain_offset <= -MOUNTAIN_PATTERN_WIDTH:
            self.mountain_offset += MOUNTAIN_PATTERN_WIDTH

        self.ground_offset -= speed * self.GROUND_SPEED
        if self.ground_offset <= -GROUND_PATTERN_WIDTH:
            self.ground_offset += GROUND_PATTERN_WIDTH

    def reset(self) -> None:
        self.mountain_offset = 0.0
        self.ground_offset = 0.0
