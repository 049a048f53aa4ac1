"""
Event bus system for Retro Runner.

Provides pub/sub messaging between the game core and the presentation
layer. The core never calls into presentation code; it produces events
and whoever cares subscribes.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events
    JUMP_REQUESTED = auto()
    POINTER_CLICKED = auto()
    RESTART_REQUESTED = auto()
    CHANGE_CHARACTER_REQUESTED = auto()
    CHARACTER_CHOSEN = auto()

    # Game signals
    STATE_CHANGED = auto()
    CHARACTER_SELECTED = auto()
    OBSTACLE_SPAWNED = auto()
    LANDED = auto()
    COLLISION = auto()
    NEW_HIGH_SCORE = auto()


INPUT_EVENTS = frozenset({
    EventType.JUMP_REQUESTED,
    EventType.POINTER_CLICKED,
    EventType.RESTART_REQUESTED,
    EventType.CHANGE_CHARACTER_REQUESTED,
    EventType.CHARACTER_CHOSEN,
})


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: Monotonic time when event was created
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for component communication.

    ``emit`` delivers to every subscriber of the event's type right away,
    so input reaches the session within the same frame. A failing handler
    is logged and the remaining handlers still run.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            handlers = self._handlers[event_type]
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Deliver an event to its subscribers now."""
        for handler in list(self._handlers.get(event.type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in handler for {event.type}: {e}")


# Convenience functions for creating common events
def jump_event(source: str = "keyboard") -> Event:
    """Create a jump request event."""
    return Event(EventType.JUMP_REQUESTED, source=source)


def pointer_event(x: float, y: float, source: str = "pointer") -> Event:
    """Create a pointer click event in canvas coordinates."""
    return Event(EventType.POINTER_CLICKED, data={"x": x, "y": y}, source=source)
