"""Playable character variants.

Variants are plain parameter records over the shared physics in
:mod:`retro_runner.game.physics`; the renderer picks the sprite from
the ``kind`` tag.
"""

from dataclasses import dataclass
import logging

from retro_runner.game.physics import PlayerCharacter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CharacterConfig:
    """Tunable parameters of one character."""

    name: str
    display_name: str
    tagline: str
    width: float
    height: float
    gravity: float
    jump_impulse: float
    animation_rate: float
    ground_offset: float  # Sprite top sits this far above the ground line


KANGAROO = CharacterConfig(
    name="kangaroo",
    display_name="KANGAROO",
    tagline="High Jump",
    width=40,
    height=50,
    gravity=0.6,
    jump_impulse=-12.0,
    animation_rate=0.15,
    ground_offset=50,
)

KOALA = CharacterConfig(
    name="koala",
    display_name="KOALA",
    tagline="Steady Runner",
    width=40,
    height=45,
    gravity=0.6,
    jump_impulse=-11.5,  # Slightly lower jump than the kangaroo
    animation_rate=0.12,
    ground_offset=45,
)

CHARACTERS: dict[str, CharacterConfig] = {
    KANGAROO.name: KANGAROO,
    KOALA.name: KOALA,
}


def get_character(name: str) -> CharacterConfig:
    """Look up a character config by name."""
    try:
        return CHARACTERS[name]
    except KeyError:
        raise ValueError(f"Unknown character: {name!r}") from None


def create_character(name: str, x: float, ground_line: float) -> PlayerCharacter:
    """Build a grounded player for the named character."""
    config = get_character(name)
    ground_y = ground_line - config.ground_offset
    logger.debug(f"Creating {name} at x={x}, ground_y={ground_y}")
    return PlayerCharacter(
        kind=config.name,
        x=x,
        y=ground_y,
        width=config.width,
        height=config.height,
        ground_y=ground_y,
        gravity=config.gravity,
        jump_impulse=config.jump_impulse,
        animation_rate=config.animation_rate,
    )
