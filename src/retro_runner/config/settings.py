"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Every gameplay constant defaults to the tuned value the game ships with.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplaySettings(BaseModel):
    """Canvas and window settings."""

    # Canvas in layout units
    width: int = 800
    height: int = 400

    # Rendering
    fps: int = 60
    scale: int = Field(default=1, ge=1, le=4)


class GameSettings(BaseModel):
    """Gameplay tuning."""

    # World geometry
    ground_line: int = 320  # 80% of canvas height
    player_x: int = 100

    # Speed scaling (per-frame units)
    base_speed: float = 6.0
    speed_step: float = 0.5
    max_speed_bonus: float = 4.0  # Caps speed at 10
    score_per_tier: int = 500

    # Spawn cadence (ms)
    base_spawn_interval_ms: float = 2000.0
    spawn_interval_step_ms: float = 200.0
    min_spawn_interval_ms: float = 1200.0
    spawn_jitter_ms: float = 800.0

    # Scoring
    ms_per_point: float = 100.0

    # Collision forgiveness, inset per side
    hitbox_margin: float = Field(default=0.1, ge=0.0, lt=0.5)

    # Content
    obstacle_types: list[str] = Field(
        default=["TREE", "BUSH", "ROCK", "FENCE", "RIVER"]
    )
    characters: list[str] = Field(default=["kangaroo", "koala"])

    # Presentation timers driven by core events (ms)
    collision_flash_ms: float = 500.0
    high_score_pulse_ms: float = 3000.0


class StorageSettings(BaseModel):
    """Persistence settings."""

    path: Path = Field(
        default_factory=lambda: Path.home() / ".retro_runner" / "storage.json"
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="RUNNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    log_file: Path | None = None

    # Nested settings
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    game: GameSettings = Field(default_factory=GameSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
