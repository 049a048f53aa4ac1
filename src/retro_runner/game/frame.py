"""Frame driver: turns host timestamps into clamped deltas."""

import logging
from typing import Callable, List, Optional

from retro_runner.core.events import Event
from retro_runner.game.session import GameSession

logger = logging.getLogger(__name__)


class FrameDriver:
    """Calls ``session.update`` once per display frame.

    The host supplies monotonically increasing timestamps in milliseconds.
    The first frame and any backwards step produce a zero delta. Once
    stopped, frames are ignored, and the session is left as it was after
    the last complete update.
    """

    def __init__(
        self,
        session: GameSession,
        on_events: Optional[Callable[[List[Event]], None]] = None,
    ) -> None:
        self.session = session
        self._on_events = on_events
        self._last_timestamp: Optional[float] = None
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    def on_frame(self, timestamp_ms: float) -> List[Event]:
        if not self._running:
            return []

        if self._last_timestamp is None:
            delta = 0.0
        else:
            delta = max(0.0, timestamp_ms - self._last_timestamp)
        self._last_timestamp = timestamp_ms

        events = self.session.update(delta)
        if events and self._on_events is not None:
            self._on_events(events)
        return events

    def stop(self) -> None:
        if self._running:
            self._running = False
            logger.info("Frame driver stopped")
