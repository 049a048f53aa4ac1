"""Shared fixtures for the Retro Runner test suite."""

import random

import pytest

from retro_runner.config.settings import GameSettings, Settings
from retro_runner.game.session import GameSession
from retro_runner.storage.store import MemoryStore


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_session(settings, store, rng):
    """Factory for sessions; defaults to the shared test store."""

    def _make(characters=None, event_bus=None, store_override=None) -> GameSession:
        session_settings = settings
        if characters is not None:
            session_settings = settings.model_copy(
                update={"game": GameSettings(characters=characters)}
            )
        return GameSession(
            settings=session_settings,
            store=store_override if store_override is not None else store,
            rng=rng,
            event_bus=event_bus,
        )

    return _make


@pytest.fixture
def session(make_session) -> GameSession:
    return make_session()


@pytest.fixture
def running_session(session) -> GameSession:
    """A kangaroo session that has just started running (player mid-jump)."""
    session.select_character("kangaroo")
    session.jump()
    return session
