"""Game session: screen flow, per-frame update, score and high score.

A GameSession holds all mutable game state; there are no module-level
globals, so a session can be driven frame by frame in tests without a
window. Commands (jump, restart, ...) are silent no-ops in states that
do not accept them.

Per-frame pipeline while RUNNING:
    1. Accumulate elapsed time, derive score
    2. Recompute speed and spawn cadence from the score
    3. Player physics
    4. Move obstacles, drop off-screen ones
    5. Spawn controller
    6. Collision check -> ENDED, high score bookkeeping
"""

import logging
import math
import random
from typing import List, Optional

from retro_runner.config.settings import Settings, get_settings
from retro_runner.core.events import Event, EventBus, EventType
from retro_runner.core.state import GameState, StateMachine
from retro_runner.game import layout
from retro_runner.game import physics
from retro_runner.game.characters import create_character, get_character
from retro_runner.game.collision import find_collision
from retro_runner.game.difficulty import DifficultyCurve, SpawnController
from retro_runner.game.obstacles import Obstacle, ObstacleType, advance_obstacles
from retro_runner.game.physics import PlayerCharacter
from retro_runner.storage.store import (
    HIGH_SCORE_KEY,
    SELECTED_CHARACTER_KEY,
    KeyValueStore,
    MemoryStore,
)

logger = logging.getLogger(__name__)


class GameSession:
    """Owns the player, the obstacles, the spawn timer and the score."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[KeyValueStore] = None,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.store = store or MemoryStore()
        self.event_bus = event_bus
        self._rng = rng or random.Random()

        game = self.settings.game
        self.width = self.settings.display.width
        self.height = self.settings.display.height
        self.ground_line = game.ground_line

        if not game.characters:
            raise ValueError("At least one character must be offered")
        for name in game.characters:
            get_character(name)
        self.characters: List[str] = list(game.characters)

        self.curve = DifficultyCurve.from_settings(game)
        self.spawner = SpawnController(
            self.curve,
            [ObstacleType.from_name(name) for name in game.obstacle_types],
            viewport_width=self.width,
            ground_line=self.ground_line,
            rng=self._rng,
        )
        self.selection_areas = layout.selection_areas(self.characters, self.width)
        self.change_character_area = layout.change_character_area(self.width, self.height)
        self.restart_area = layout.restart_area(self.width, self.height)

        # Entities
        self.player: Optional[PlayerCharacter] = None
        self.obstacles: List[Obstacle] = []
        self.selected_character: Optional[str] = None

        # Run state
        self.elapsed_ms = 0.0
        self.score = 0
        self.speed = self.curve.speed(0)
        self.min_spawn_interval = self.curve.min_spawn_interval(0)
        self.frame = 0

        # Presentation timers, driven by core events
        self.is_new_high_score = False
        self.collision_flash_ms = 0.0
        self.high_score_pulse_ms = 0.0

        self._pending: List[Event] = []

        # Persisted values
        self.high_score = self._load_high_score()
        self.preselected = self._load_selected_character()

        if len(self.characters) == 1:
            initial = GameState.READY
            self._create_player(self.characters[0])
        else:
            initial = GameState.SELECTING

        self.state_machine = StateMachine(initial)
        self.state_machine.add_listener(self._on_state_changed)

        logger.info(
            f"GameSession ready: state={initial.name}, high_score={self.high_score}, "
            f"characters={self.characters}"
        )

    # Properties
    @property
    def state(self) -> GameState:
        return self.state_machine.state

    @property
    def is_running(self) -> bool:
        return self.state == GameState.RUNNING

    # Commands
    def select_character(self, name: str) -> bool:
        """Pick a character on the selection screen and move to READY."""
        if self.state != GameState.SELECTING or name not in self.characters:
            return False

        self._create_player(name)
        self.preselected = name
        self.store.set(SELECTED_CHARACTER_KEY, name)
        logger.info(f"Character selected: {name}")

        self._signal(EventType.CHARACTER_SELECTED, character=name)
        return self.state_machine.transition(GameState.READY)

    def jump(self) -> bool:
        """Jump; the first jump from READY also starts the run."""
        if self.player is None:
            return False

        if self.state == GameState.READY:
            self.state_machine.transition(GameState.RUNNING)
            physics.jump(self.player)
            return True

        if self.state == GameState.RUNNING:
            return physics.jump(self.player)

        return False

    def restart(self) -> bool:
        """Play again with the same character."""
        if self.state != GameState.ENDED or self.player is None:
            return False

        self._reset_run()
        physics.reset(self.player)
        return self.state_machine.transition(GameState.READY)

    def change_character(self) -> bool:
        """Go back to the selection screen."""
        if self.state != GameState.ENDED or len(self.characters) < 2:
            return False

        self._reset_run()
        self.player = None
        self.selected_character = None
        return self.state_machine.transition(GameState.SELECTING)

    def pointer_clicked(self, x: float, y: float) -> bool:
        """Hit-test a click (canvas coordinates) against the screen regions.

        Anywhere on the canvas counts as a jump while READY or RUNNING.
        """
        if self.state in (GameState.READY, GameState.RUNNING):
            return self.jump()

        if self.state == GameState.SELECTING:
            name = layout.hit_test(self.selection_areas, x, y)
            return name is not None and self.select_character(name)

        if self.state == GameState.ENDED:
            if self.change_character_area.contains(x, y):
                return self.change_character()
            if self.restart_area.contains(x, y):
                return self.restart()

        return False

    def handle_input(self, event: Event) -> bool:
        """Route an input event to the matching command.

        Returns:
            True if the event changed the session
        """
        if event.type == EventType.JUMP_REQUESTED:
            return self.jump()
        if event.type == EventType.POINTER_CLICKED:
            return self.pointer_clicked(event.data.get("x", -1), event.data.get("y", -1))
        if event.type == EventType.RESTART_REQUESTED:
            return self.restart()
        if event.type == EventType.CHANGE_CHARACTER_REQUESTED:
            return self.change_character()
        if event.type == EventType.CHARACTER_CHOSEN:
            return self.select_character(event.data.get("character", ""))
        return False

    # Frame update
    def update(self, delta_ms: float) -> List[Event]:
        """Advance one frame.

        Args:
            delta_ms: Time since last frame in milliseconds. Negative or
                non-finite values are treated as 0.

        Returns:
            Events produced since the previous update, commands included.
        """
        delta = delta_ms if math.isfinite(delta_ms) and delta_ms > 0 else 0.0
        self.frame += 1

        self.collision_flash_ms = max(0.0, self.collision_flash_ms - delta)
        self.high_score_pulse_ms = max(0.0, self.high_score_pulse_ms - delta)

        if self.state == GameState.RUNNING:
            self._step(delta)

        events, self._pending = self._pending, []
        return events

    def _step(self, delta: float) -> None:
        player = self.player
        game = self.settings.game

        self.elapsed_ms += delta
        self.score = math.floor(self.elapsed_ms / game.ms_per_point)

        self.speed = self.curve.speed(self.score)
        self.min_spawn_interval = self.curve.min_spawn_interval(self.score)

        if physics.apply_physics(player):
            logger.debug(f"Landed at frame {self.frame}")
            self._signal(EventType.LANDED, x=player.x, y=player.y + player.height)

        advance_obstacles(self.obstacles)

        obstacle = self.spawner.update(delta, self.score, self.speed)
        if obstacle is not None:
            self.obstacles.append(obstacle)
            self._signal(EventType.OBSTACLE_SPAWNED, type=obstacle.type.name, speed=obstacle.speed)

        hit = find_collision(player, self.obstacles, game.hitbox_margin)
        if hit is not None:
            self._end_run(hit)

    def _end_run(self, hit: Obstacle) -> None:
        game = self.settings.game
        self.state_machine.transition(GameState.ENDED)
        self.collision_flash_ms = game.collision_flash_ms
        logger.info(f"Hit {hit.type.name} with score {self.score}")

        if self.score > self.high_score:
            self.high_score = self.score
            self.is_new_high_score = True
            self.high_score_pulse_ms = game.high_score_pulse_ms
            self.store.set(HIGH_SCORE_KEY, self.high_score)
            logger.info(f"New high score: {self.high_score}")
            self._signal(
                EventType.NEW_HIGH_SCORE,
                score=self.score,
                pulse_ms=game.high_score_pulse_ms,
            )

        self._signal(
            EventType.COLLISION,
            score=self.score,
            obstacle=hit.type.name,
            flash_ms=game.collision_flash_ms,
        )

    # Helpers
    def _create_player(self, name: str) -> None:
        self.player = create_character(name, self.settings.game.player_x, self.ground_line)
        self.selected_character = name

    def _reset_run(self) -> None:
        self.obstacles.clear()
        self.spawner.reset()
        self.elapsed_ms = 0.0
        self.score = 0
        self.speed = self.curve.speed(0)
        self.min_spawn_interval = self.curve.min_spawn_interval(0)
        self.is_new_high_score = False
        self.collision_flash_ms = 0.0
        self.high_score_pulse_ms = 0.0

    def _load_high_score(self) -> int:
        value = self.store.get(HIGH_SCORE_KEY, 0)
        try:
            return max(0, int(value))
        except (TypeError, ValueError, OverflowError):
            logger.warning(f"Ignoring unreadable high score: {value!r}")
            return 0

    def _load_selected_character(self) -> Optional[str]:
        value = self.store.get(SELECTED_CHARACTER_KEY)
        return value if value in self.characters else None

    def _on_state_changed(self, old_state: GameState, new_state: GameState) -> None:
        self._signal(EventType.STATE_CHANGED, **{"from": old_state.name, "to": new_state.name})

    def _signal(self, event_type: EventType, **data) -> None:
        event = Event(event_type, data=data, source="session")
        self._pending.append(event)
        if self.event_bus is not None:
            self.event_bus.emit(event)
