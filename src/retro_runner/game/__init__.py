"""Game core: physics, obstacles, collisions, difficulty and the session."""

from retro_runner.game.characters import CHARACTERS, CharacterConfig, create_character
from retro_runner.game.collision import Rect, find_collision, hitbox_of, intersects
from retro_runner.game.difficulty import DifficultyCurve, SpawnController, SpawnTimer
from retro_runner.game.frame import FrameDriver
from retro_runner.game.obstacles import Obstacle, ObstacleType, spawn_obstacle
from retro_runner.game.physics import PlayerCharacter, apply_physics, jump, reset
from retro_runner.game.session import GameSession

__all__ = [
    "CHARACTERS",
    "CharacterConfig",
    "create_character",
    "Rect",
    "find_collision",
    "hitbox_of",
    "intersects",
    "DifficultyCurve",
    "SpawnController",
    "SpawnTimer",
    "FrameDriver",
    "Obstacle",
    "ObstacleType",
    "spawn_obstacle",
    "PlayerCharacter",
    "apply_physics",
    "jump",
    "reset",
    "GameSession",
]
