"""Rasterises a draw list into a numpy frame buffer.

Text is not drawn here; the window overlays TextLine entries with its
own fonts after blitting the buffer.
"""

from typing import Callable, Dict, List
import logging

from retro_runner.game.collision import Rect
from retro_runner.graphics.background import (
    GROUND_PATTERN_WIDTH,
    MOUNTAIN_PATTERN_WIDTH,
    ParallaxBackground,
)
from retro_runner.graphics.draw_list import DrawCommand, DrawLayer
from retro_runner.graphics.primitives import (
    Buffer,
    Color,
    blend_rect,
    draw_circle,
    draw_ellipse,
    draw_rect,
    draw_triangle,
    new_buffer,
    vertical_gradient,
)

logger = logging.getLogger(__name__)

# Palette
SKY_TOP = (135, 206, 235)
SKY_HORIZON = (255, 229, 180)
MOUNTAIN_COLORS = ((74, 111, 165), (90, 127, 181))
GRASS = (124, 179, 66)
GRASS_LINE = (85, 139, 47)
GRASS_BLADE = (139, 195, 74)
TRUNK = (107, 68, 35)
LEAVES = (34, 139, 34)
BUSH = (46, 125, 50)
ROCK = (120, 120, 120)
FENCE = (160, 110, 60)
WATER = (52, 152, 219)
WATER_LIGHT = (133, 193, 233)
FLASH = (231, 76, 60)
CARD = (149, 165, 166)
CARD_HIGHLIGHT = (46, 204, 113)
BUTTON = (52, 152, 219)


class Renderer:
    """Draws background, obstacles, player and overlays into one buffer."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.buffer = new_buffer(width, height)

        self._obstacle_painters: Dict[str, Callable[[Buffer, Rect], None]] = {
            "TREE": _paint_tree,
            "BUSH": _paint_bush,
            "ROCK": _paint_rock,
            "FENCE": _paint_fence,
            "RIVER": _paint_river,
        }
        self._player_painters: Dict[str, Callable[[Buffer, Rect, dict], None]] = {
            "kangaroo": _paint_kangaroo,
            "koala": _paint_koala,
        }

    def render(self, commands: List[DrawCommand]) -> Buffer:
        """Render the draw list in order and return the buffer."""
        for command in commands:
            if command.layer == DrawLayer.BACKGROUND:
                self._paint_background(command)
            elif command.layer == DrawLayer.OBSTACLE:
                painter = self._obstacle_painters.get(command.kind)
                if painter is None:
                    draw_rect(self.buffer, *_xywh(command.rect), (200, 0, 200))
                else:
                    painter(self.buffer, command.rect)
            elif command.layer == DrawLayer.PLAYER:
                painter = self._player_painters.get(command.kind, _paint_kangaroo)
                painter(self.buffer, command.rect, command.data)
            elif command.layer == DrawLayer.FLASH:
                blend_rect(self.buffer, *_xywh(command.rect), FLASH, command.data.get("alpha", 0.0))
            elif command.layer == DrawLayer.UI:
                self._paint_ui(command)
        return self.buffer

    def _paint_background(self, command: DrawCommand) -> None:
        ground = int(command.data["ground_line"])
        background: ParallaxBackground | None = command.data.get("background")
        buf = self.buffer

        vertical_gradient(buf, SKY_TOP, SKY_HORIZON, ground)
        draw_rect(buf, 0, ground, self.width, self.height - ground, GRASS)

        if background is not None:
            base_y = ground - 120
            for repeat in range(2):
                offset = background.mountain_offset + repeat * MOUNTAIN_PATTERN_WIDTH
                for mountain in background.mountains:
                    x = mountain.x + offset
                    if x + mountain.width < -100 or x > self.width + 100:
                        continue
                    draw_triangle(
                        buf,
                        (x + mountain.width / 2, base_y - mountain.height),
                        (x, base_y),
                        (x + mountain.width, base_y),
                        MOUNTAIN_COLORS[mountain.shade],
                    )
            ground_offset = background.ground_offset
        else:
            ground_offset = 0.0

        draw_rect(buf, 0, ground - 1, self.width, 3, GRASS_LINE)
        for repeat in range(2):
            offset = ground_offset + repeat * GROUND_PATTERN_WIDTH
            for i in range(self.width // 10):
                x = i * 10 + offset
                if -10 < x < self.width + 10:
                    draw_rect(buf, x, ground + 3, 2, 6, GRASS_BLADE)

    def _paint_ui(self, command: DrawCommand) -> None:
        data = command.data
        if data.get("dim"):
            blend_rect(self.buffer, 0, 0, self.width, self.height, (0, 0, 0), data["dim"])

        for card in data.get("cards", []):
            color = CARD_HIGHLIGHT if card["highlighted"] else CARD
            rect: Rect = card["rect"]
            draw_rect(self.buffer, *_xywh(rect), color, filled=False, thickness=4)
            preview = Rect(rect.x + 40, rect.y + 60, 40, 50)
            painter = self._player_painters.get(card["name"], _paint_kangaroo)
            painter(self.buffer, preview, {"pose": 0, "airborne": False, "rising": False})

        restart = data.get("restart_area")
        if restart is not None:
            draw_rect(self.buffer, *_xywh(restart), BUTTON)


def _xywh(rect: Rect) -> tuple:
    return rect.x, rect.y, rect.width, rect.height


# Obstacles
def _paint_tree(buf: Buffer, r: Rect) -> None:
    trunk_w, trunk_h = 20, 40
    draw_rect(buf, r.x + (r.width - trunk_w) / 2, r.bottom - trunk_h, trunk_w, trunk_h, TRUNK)
    draw_triangle(buf, (r.x + r.width / 2, r.y), (r.x, r.y + 50), (r.right, r.y + 50), LEAVES)


def _paint_bush(buf: Buffer, r: Rect) -> None:
    radius = r.height / 2
    draw_circle(buf, r.x + radius, r.y + radius, radius, BUSH)
    draw_circle(buf, r.right - radius, r.y + radius, radius, BUSH)
    draw_rect(buf, r.x + radius, r.y, r.width - 2 * radius, r.height, BUSH)


def _paint_rock(buf: Buffer, r: Rect) -> None:
    draw_ellipse(buf, r.x + r.width / 2, r.y + r.height / 2, r.width / 2, r.height / 2, ROCK)


def _paint_fence(buf: Buffer, r: Rect) -> None:
    for post_x in (r.x + 4, r.x + r.width / 2 - 3, r.right - 10):
        draw_rect(buf, post_x, r.y, 6, r.height, FENCE)
    draw_rect(buf, r.x, r.y + r.height * 0.25, r.width, 6, FENCE)
    draw_rect(buf, r.x, r.y + r.height * 0.6, r.width, 6, FENCE)


def _paint_river(buf: Buffer, r: Rect) -> None:
    draw_rect(buf, r.x, r.y, r.width, r.height, WATER)
    for i in range(3):
        draw_rect(buf, r.x + 8 + i * 24, r.y + 8 + (i % 2) * 8, 14, 3, WATER_LIGHT)


# Characters
def _paint_legs(buf: Buffer, r: Rect, data: dict, color: Color, spread: int) -> None:
    offset = 0 if data.get("airborne") else data.get("pose", 0) * spread
    draw_ellipse(buf, r.x + r.width * 0.28, r.bottom - 10 + offset, 5, 8, color)
    draw_ellipse(buf, r.x + r.width * 0.68, r.bottom - 10 - offset, 5, 8, color)


def _paint_kangaroo(buf: Buffer, r: Rect, data: dict) -> None:
    body, chest, dark = (193, 120, 23), (232, 180, 86), (160, 99, 31)
    _paint_legs(buf, r, data, dark, 3)
    draw_ellipse(buf, r.x + 20, r.y + 25, 15, 20, body)
    draw_ellipse(buf, r.x + 20, r.y + 28, 10, 15, chest)
    draw_ellipse(buf, r.x + 22, r.y + 5, 10, 12, body)
    draw_ellipse(buf, r.x + 17, r.y - 5, 3, 8, dark)
    draw_ellipse(buf, r.x + 27, r.y - 5, 3, 8, dark)
    draw_circle(buf, r.x + 26, r.y + 4, 2, (0, 0, 0))


def _paint_koala(buf: Buffer, r: Rect, data: dict) -> None:
    body, chest, dark = (122, 122, 122), (208, 208, 208), (106, 106, 106)
    _paint_legs(buf, r, data, dark, 2)
    draw_ellipse(buf, r.x + 20, r.y + 25, 16, 18, body)
    draw_ellipse(buf, r.x + 20, r.y + 28, 11, 14, chest)
    draw_ellipse(buf, r.x + 20, r.y + 8, 12, 11, body)
    draw_circle(buf, r.x + 10, r.y - 2, 7, dark)
    draw_circle(buf, r.x + 30, r.y - 2, 7, dark)
    draw_ellipse(buf, r.x + 20, r.y + 11, 3, 2.5, (0, 0, 0))
    draw_circle(buf, r.x + 16, r.y + 6, 2, (0, 0, 0))
    draw_circle(buf, r.x + 24, r.y + 6, 2, (0, 0, 0))
