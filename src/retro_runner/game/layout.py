"""Fixed screen regions used for pointer hit-testing."""

from typing import Optional

from retro_runner.game.collision import Rect

# Character selection cards, by character name
SELECTION_AREAS: dict[str, Rect] = {
    "kangaroo": Rect(200, 120, 120, 150),
    "koala": Rect(450, 120, 120, 150),
}


def selection_areas(characters: list[str], width: float) -> dict[str, Rect]:
    """Selection cards for the offered characters.

    Known characters keep their fixed cards; any others are laid out in
    evenly spaced slots across the canvas.
    """
    if all(name in SELECTION_AREAS for name in characters):
        return {name: SELECTION_AREAS[name] for name in characters}

    card_w, card_h = 120, 150
    slot = width / (len(characters) + 1)
    return {
        name: Rect(slot * (i + 1) - card_w / 2, 120, card_w, card_h)
        for i, name in enumerate(characters)
    }


def change_character_area(width: float, height: float) -> Rect:
    """The "change character" line on the game-over screen."""
    return Rect(width / 2 - 150, height / 2 + 90, 300, 25)


def restart_area(width: float, height: float) -> Rect:
    """The restart button on the game-over screen."""
    return Rect(width / 2 - 90, height / 2 + 125, 180, 30)


def hit_test(areas: dict[str, Rect], x: float, y: float) -> Optional[str]:
    """Name of the first area containing the point, if any."""
    for name, rect in areas.items():
        if rect.contains(x, y):
            return name
    return None
