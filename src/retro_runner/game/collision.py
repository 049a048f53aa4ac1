"""Axis-aligned collision checks over forgiving hitboxes."""

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from retro_runner.game.obstacles import Obstacle

# Inset applied to each side before testing (10% => 80% box)
DEFAULT_HITBOX_MARGIN = 0.1


class Boxed(Protocol):
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in canvas coordinates."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, px: float, py: float) -> bool:
        """Point test with inclusive edges (used for pointer hit-tests)."""
        return self.x <= px <= self.right and self.y <= py <= self.bottom

    def shrink(self, margin: float) -> "Rect":
        """Inset every side by ``margin`` of the matching dimension."""
        inset_x = self.width * margin
        inset_y = self.height * margin
        return Rect(
            x=self.x + inset_x,
            y=self.y + inset_y,
            width=self.width - 2 * inset_x,
            height=self.height - 2 * inset_y,
        )


def bounds_of(entity: Boxed) -> Rect:
    return Rect(entity.x, entity.y, entity.width, entity.height)


def hitbox_of(entity: Boxed, margin: float = DEFAULT_HITBOX_MARGIN) -> Rect:
    """Shrunk hitbox for an entity. Recomputed on every call."""
    return bounds_of(entity).shrink(margin)


def intersects(a: Rect, b: Rect) -> bool:
    """Strict AABB overlap; touching edges do not count."""
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


def find_collision(
    player: Boxed,
    obstacles: Iterable[Obstacle],
    margin: float = DEFAULT_HITBOX_MARGIN,
) -> Optional[Obstacle]:
    """Return the first obstacle (in spawn order) whose hitbox overlaps the player's."""
    player_box = hitbox_of(player, margin)
    for obstacle in obstacles:
        if intersects(player_box, hitbox_of(obstacle, margin)):
            return obstacle
    return None
