"""Graphics: draw-list contract, parallax state and the numpy renderer."""

from retro_runner.graphics.background import ParallaxBackground
from retro_runner.graphics.draw_list import DrawCommand, DrawLayer, TextLine, build_draw_list
from retro_runner.graphics.renderer import Renderer

__all__ = [
    "ParallaxBackground",
    "DrawCommand",
    "DrawLayer",
    "TextLine",
    "build_draw_list",
    "Renderer",
]
