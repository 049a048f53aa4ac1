"""Shared jump physics for player characters.

All characters run on the same integration: gravity pulls velocity
down every frame, the ground line is a one-sided clamp, and the run
cycle only advances while the feet are on the ground. Units are
layout units per frame, matching obstacle speeds.
"""

import math
from dataclasses import dataclass


# Run cycle has two poses; the phase counts up to this and restarts
RUN_CYCLE_LENGTH = 2.0


@dataclass
class PlayerCharacter:
    """Physics state of the player.

    ``y`` is the top edge in canvas coordinates (down is positive), so
    ``ground_y`` is the largest value ``y`` may ever hold.
    """

    kind: str
    x: float
    y: float
    width: float
    height: float
    ground_y: float
    gravity: float
    jump_impulse: float  # Negative = upward
    animation_rate: float
    velocity_y: float = 0.0
    airborne: bool = False
    was_airborne: bool = False  # Airborne at the end of the previous frame
    animation_phase: float = 0.0


def apply_physics(player: PlayerCharacter) -> bool:
    """Advance the player by one frame.

    Returns:
        True on the frame the player touches down after being airborne.
    """
    player.velocity_y += player.gravity
    player.y += player.velocity_y

    if player.y >= player.ground_y:
        player.y = player.ground_y
        player.velocity_y = 0.0
        player.airborne = False
    else:
        player.airborne = True

    landed = player.was_airborne and not player.airborne
    player.was_airborne = player.airborne

    if not player.airborne:
        player.animation_phase += player.animation_rate
        if player.animation_phase >= RUN_CYCLE_LENGTH:
            player.animation_phase = 0.0

    return landed


def jump(player: PlayerCharacter) -> bool:
    """Start a jump if grounded. No double jumps, no buffering."""
    if player.airborne:
        return False
    player.velocity_y = player.jump_impulse
    player.airborne = True
    return True


def reset(player: PlayerCharacter) -> None:
    """Put the player back on the ground, at rest."""
    player.y = player.ground_y
    player.velocity_y = 0.0
    player.airborne = False
    player.was_airborne = False
    player.animation_phase = 0.0


def pose(player: PlayerCharacter) -> int:
    """Discrete run-cycle pose (0 or 1) for the current phase."""
    return int(math.floor(player.animation_phase))
