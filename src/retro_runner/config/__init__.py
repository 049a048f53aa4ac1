"""Configuration for Retro Runner."""

from .settings import DisplaySettings, GameSettings, Settings, StorageSettings, get_settings

__all__ = ["Settings", "DisplaySettings", "GameSettings", "StorageSettings", "get_settings"]
