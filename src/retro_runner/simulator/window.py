"""
Desktop game window using pygame.

Maps keyboard and mouse input onto game events, drives the frame loop
and presents the rendered buffer with a text overlay.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass
from typing import List

from ..core.events import Event, EventBus, EventType, INPUT_EVENTS, jump_event, pointer_event
from ..core.state import GameState
from ..game.frame import FrameDriver
from ..game.session import GameSession
from ..graphics.background import ParallaxBackground
from ..graphics.draw_list import DrawLayer, TextLine, build_draw_list
from ..graphics.renderer import Renderer

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Game window configuration."""
    width: int = 800
    height: int = 400
    scale: int = 1
    title: str = "Retro Runner"
    fps: int = 60
    font_name: str = "Courier New"


TEXT_COLORS: dict[str, tuple[int, int, int]] = {
    "title": (243, 156, 18),
    "info": (255, 255, 255),
    "accent": (46, 204, 113),
    "muted": (189, 195, 199),
    "warning": (231, 76, 60),
    "link": (52, 152, 219),
    "hud": (44, 62, 80),
}


class GameWindow:
    """
    Main game window.

    Keyboard Mapping:
        SPACE / UP: Jump (also starts the run)
        R / ENTER: Restart after game over
        C: Change character after game over
        Mouse click: Jump, character selection, game-over buttons
        ESC / Q: Quit
    """

    def __init__(
        self,
        session: GameSession,
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = config or WindowConfig()
        self.session = session
        self.event_bus = event_bus or EventBus()

        self.driver = FrameDriver(session, on_events=self._on_game_events)
        self.renderer = Renderer(self.config.width, self.config.height)
        self.background = ParallaxBackground()

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._fonts: dict[tuple[int, bool], pygame.font.Font] = {}
        self._running = False
        self._frame_count = 0

        self._unsubscribers = [
            self.event_bus.subscribe(event_type, self.session.handle_input)
            for event_type in INPUT_EVENTS
        ]

        logger.info("GameWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)
        self._screen = pygame.display.set_mode(
            (self.config.width * self.config.scale, self.config.height * self.config.scale),
            pygame.DOUBLEBUF,
        )
        self._clock = pygame.time.Clock()
        pygame.font.init()
        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _font(self, size: int, bold: bool = False) -> pygame.font.Font:
        key = (size, bold)
        if key not in self._fonts:
            self._fonts[key] = pygame.font.SysFont(self.config.font_name, size, bold=bold)
        return self._fonts[key]

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                x, y = event.pos
                scale = self.config.scale
                self.event_bus.emit(pointer_event(x / scale, y / scale, source="mouse"))

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key in (pygame.K_SPACE, pygame.K_UP):
            self.event_bus.emit(jump_event(source="keyboard"))
        elif key in (pygame.K_r, pygame.K_RETURN):
            self.event_bus.emit(Event(EventType.RESTART_REQUESTED, source="keyboard"))
        elif key == pygame.K_c:
            self.event_bus.emit(Event(EventType.CHANGE_CHARACTER_REQUESTED, source="keyboard"))

    def _on_game_events(self, events: List[Event]) -> None:
        for event in events:
            if event.type == EventType.STATE_CHANGED and event.data.get("to") == GameState.READY.name:
                self.background.reset()
            elif event.type == EventType.NEW_HIGH_SCORE:
                logger.info(f"High score pulse for {event.data.get('score')}")

    def _render(self) -> None:
        """Render the current frame."""
        if not self._screen:
            return

        commands = build_draw_list(self.session, self.background)
        buffer = self.renderer.render(commands)

        surface = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))
        if self.config.scale != 1:
            surface = pygame.transform.scale(surface, self._screen.get_size())
        self._screen.blit(surface, (0, 0))

        for command in commands:
            if command.layer == DrawLayer.UI:
                for line in command.data.get("lines", []):
                    self._draw_text(line)

        pygame.display.flip()

    def _draw_text(self, line: TextLine) -> None:
        """Draw one overlay line; ``line.y`` is the text baseline."""
        scale = self.config.scale
        size = max(1, int(line.size * line.scale * scale))
        font = self._font(size, bold=line.style in ("title", "warning", "hud"))
        color = TEXT_COLORS.get(line.style, TEXT_COLORS["info"])
        text = font.render(line.text, True, color)

        x = line.x * scale
        y = line.y * scale - font.get_ascent()
        if line.align == "center":
            x -= text.get_width() / 2
        elif line.align == "right":
            x -= text.get_width()
        self._screen.blit(text, (int(x), int(y)))

    async def run(self) -> None:
        """Main game loop."""
        self._init_pygame()
        self._running = True

        logger.info("Game loop started")

        while self._running:
            # Handle input
            self._handle_events()

            # Advance the game
            self.driver.on_frame(pygame.time.get_ticks())
            if self.session.is_running:
                self.background.update(self.session.speed)

            # Render
            self._render()

            # Frame timing
            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.driver.stop()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        pygame.quit()
        logger.info("Game window closed")

    def stop(self) -> None:
        """Stop the game loop."""
        self._running = False
