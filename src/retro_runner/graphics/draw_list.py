"""Render contract: the ordered list of things to draw each frame.

The draw list is plain data built from a GameSession. It carries
geometry and semantic tags only; colours, fonts and sprites belong to
whoever consumes it (the numpy Renderer and the pygame window).

Order: background, obstacles (spawn order), player, particles, flash
overlay, UI overlay for the current state.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
import math
from typing import Any, Dict, List, Optional

from retro_runner.core.state import GameState
from retro_runner.game.characters import get_character
from retro_runner.game.collision import Rect, bounds_of
from retro_runner.game.physics import pose
from retro_runner.graphics.background import ParallaxBackground

# Flash overlay reaches full strength at this many ms remaining
FLASH_FADE_MS = 300.0
FLASH_MAX_ALPHA = 0.4


class DrawLayer(Enum):
    BACKGROUND = auto()
    OBSTACLE = auto()
    PLAYER = auto()
    PARTICLES = auto()
    FLASH = auto()
    UI = auto()


@dataclass
class DrawCommand:
    layer: DrawLayer
    kind: str
    rect: Optional[Rect] = None
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TextLine:
    """One line of overlay text, centred on ``x`` unless aligned otherwise."""

    text: str
    x: float
    y: float
    size: int
    style: str = "info"  # title, info, accent, muted, warning, link, hud
    align: str = "center"
    scale: float = 1.0


def build_draw_list(session, background: Optional[ParallaxBackground] = None) -> List[DrawCommand]:
    """Build the frame's draw list from session state."""
    commands: List[DrawCommand] = [
        DrawCommand(
            DrawLayer.BACKGROUND,
            "countryside",
            Rect(0, 0, session.width, session.height),
            {"ground_line": session.ground_line, "background": background},
        )
    ]

    for obstacle in session.obstacles:
        commands.append(DrawCommand(DrawLayer.OBSTACLE, obstacle.type.name, bounds_of(obstacle)))

    player = session.player
    if player is not None:
        commands.append(DrawCommand(
            DrawLayer.PLAYER,
            player.kind,
            bounds_of(player),
            {
                "pose": pose(player),
                "airborne": player.airborne,
                "rising": player.airborne and player.velocity_y < 0,
            },
        ))

    if session.collision_flash_ms > 0:
        alpha = min(session.collision_flash_ms / FLASH_FADE_MS, FLASH_MAX_ALPHA)
        commands.append(DrawCommand(
            DrawLayer.FLASH,
            "collision",
            Rect(0, 0, session.width, session.height),
            {"alpha": alpha},
        ))

    commands.append(_ui_overlay(session))
    return commands


def _ui_overlay(session) -> DrawCommand:
    w, h = session.width, session.height
    cx, cy = w / 2, h / 2
    state = session.state
    data: Dict[str, Any] = {"state": state.name, "dim": 0.0}
    lines: List[TextLine] = []

    if state == GameState.SELECTING:
        data["dim"] = 0.6
        lines.append(TextLine("CHOOSE YOUR CHARACTER", cx, 80, 48, "title"))
        cards = []
        for name, rect in session.selection_areas.items():
            config = get_character(name)
            cards.append({"name": name, "rect": rect, "highlighted": name == session.preselected})
            lines.append(TextLine(config.display_name, rect.x + rect.width / 2, rect.bottom + 30, 24))
            lines.append(TextLine(config.tagline, rect.x + rect.width / 2, rect.bottom + 55, 16, "muted"))
        data["cards"] = cards
        lines.append(TextLine("Click or tap a character to select", cx, h - 30, 20))

    elif state == GameState.READY:
        data["dim"] = 0.5
        lines.append(TextLine("RETRO RUNNER", cx, cy - 60, 56, "title"))
        if session.selected_character:
            config = get_character(session.selected_character)
            lines.append(TextLine(f"Playing as: {config.display_name}", cx, cy - 20, 24, "accent"))
        lines.append(TextLine("Press SPACE to Jump and Start!", cx, cy + 20, 28))
        if session.high_score > 0:
            lines.append(TextLine(f"HIGH SCORE: {session.high_score}", cx, cy + 60, 20, "title"))
        lines.append(TextLine("Jump over the obstacles!", cx, h - 40, 16, "muted"))

    elif state == GameState.RUNNING:
        lines.append(TextLine(f"SCORE: {session.score}", w - 20, 40, 28, "hud", align="right"))
        if session.high_score > 0:
            lines.append(TextLine(f"HIGH: {session.high_score}", w - 20, 65, 20, "title", align="right"))

    elif state == GameState.ENDED:
        data["dim"] = 0.7
        lines.append(TextLine("GAME OVER", cx, cy - 60, 56, "warning"))
        lines.append(TextLine(f"SCORE: {session.score}", cx, cy, 32))
        if session.is_new_high_score:
            pulse = abs(math.sin(session.high_score_pulse_ms / 200)) * 0.3 + 1
            lines.append(TextLine("* NEW HIGH SCORE! *", cx, cy + 40, 24, "title", scale=pulse))
        elif session.high_score > 0:
            lines.append(TextLine(f"High Score: {session.high_score}", cx, cy + 40, 24, "muted"))
        lines.append(TextLine("Press R or click RESTART to play again", cx, cy + 80, 18, "muted"))
        if len(session.characters) > 1:
            lines.append(TextLine("or click here to change character", cx, cy + 105, 16, "link"))
            data["change_character_area"] = session.change_character_area
        data["restart_area"] = session.restart_area
        restart = session.restart_area
        lines.append(TextLine("RESTART", cx, restart.y + restart.height / 2 + 7, 20))

    data["lines"] = lines
    return DrawCommand(DrawLayer.UI, state.name.lower(), Rect(0, 0, w, h), data)
