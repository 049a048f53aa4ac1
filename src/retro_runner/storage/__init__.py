"""Persistence for Retro Runner."""

from .store import (
    HIGH_SCORE_KEY,
    SELECTED_CHARACTER_KEY,
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
)

__all__ = [
    "KeyValueStore",
    "JsonFileStore",
    "MemoryStore",
    "HIGH_SCORE_KEY",
    "SELECTED_CHARACTER_KEY",
]
