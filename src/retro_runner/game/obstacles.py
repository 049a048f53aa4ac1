"""Obstacles the player has to clear."""

from dataclasses import dataclass
from enum import Enum


class ObstacleType(Enum):
    """Obstacle tags with their fixed (width, height) in layout units."""

    TREE = (60, 80)
    BUSH = (50, 40)
    ROCK = (45, 45)
    FENCE = (50, 60)
    RIVER = (80, 30)

    @property
    def width(self) -> int:
        return self.value[0]

    @property
    def height(self) -> int:
        return self.value[1]

    @classmethod
    def from_name(cls, name: str) -> "ObstacleType":
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown obstacle type: {name!r}") from None


@dataclass
class Obstacle:
    type: ObstacleType
    x: float
    y: float
    width: float
    height: float
    speed: float  # Captured at spawn; later speed changes do not apply


def spawn_obstacle(
    obstacle_type: ObstacleType,
    x: float,
    ground_line: float,
    speed: float,
) -> Obstacle:
    """Create an obstacle resting on the ground line."""
    return Obstacle(
        type=obstacle_type,
        x=x,
        y=ground_line - obstacle_type.height,
        width=obstacle_type.width,
        height=obstacle_type.height,
        speed=speed,
    )


def update(obstacle: Obstacle) -> None:
    obstacle.x -= obstacle.speed


def is_off_screen(obstacle: Obstacle) -> bool:
    """True once the right edge has fully passed the left side."""
    return obstacle.x + obstacle.width < 0


def advance_obstacles(obstacles: list[Obstacle]) -> int:
    """Move every obstacle one frame and drop the ones that left the screen.

    The list is modified in place and keeps spawn order.

    Returns:
        Number of obstacles removed.
    """
    for obstacle in obstacles:
        update(obstacle)

    before = len(obstacles)
    obstacles[:] = [o for o in obstacles if not is_off_screen(o)]
    return before - len(obstacles)
