"""
State machine for the Retro Runner screen flow.

States:
    SELECTING: Choosing a character (only when more than one is offered)
    READY: Character chosen, waiting for the first jump
    RUNNING: Game in progress
    ENDED: Player collided; waiting for restart or character change
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Game screen states."""
    SELECTING = auto()
    READY = auto()
    RUNNING = auto()
    ENDED = auto()


StateListener = Callable[[GameState, GameState], None]


class StateMachine:
    """
    Manages game state and transitions.

    Only transitions listed in VALID_TRANSITIONS are accepted; anything
    else is refused and leaves the current state untouched. ENDED never
    leaves on its own, it waits for an explicit command.
    """

    VALID_TRANSITIONS: list[tuple[GameState, GameState]] = [
        # From SELECTING
        (GameState.SELECTING, GameState.READY),

        # From READY
        (GameState.READY, GameState.RUNNING),  # First jump

        # From RUNNING
        (GameState.RUNNING, GameState.ENDED),  # Collision

        # From ENDED
        (GameState.ENDED, GameState.READY),  # Restart, same character
        (GameState.ENDED, GameState.SELECTING),  # Change character
    ]

    def __init__(self, initial_state: GameState = GameState.SELECTING) -> None:
        self._state = initial_state
        self._listeners: list[StateListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> GameState:
        """Get current state."""
        return self._state

    def can_transition(self, to_state: GameState) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: GameState) -> bool:
        """
        Attempt to transition to a new state.

        Args:
            to_state: Target state

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state
        logger.info(f"State transition: {old_state.name} -> {to_state.name}")

        self._notify(old_state, to_state)
        return True

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def _notify(self, old_state: GameState, new_state: GameState) -> None:
        for listener in self._listeners:
            try:
                listener(old_state, new_state)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")
