"""Grace Snake — single-player snake core with a forgiveness window."""

from grace_snake.config import GameConfig
from grace_snake.engine import GameEngine
from grace_snake.grid import Cell, Direction, Occupancy
from grace_snake.presentation import Key, Scene
from grace_snake.scheduler import TickScheduler
from grace_snake.snake import Body, DirectionQueue, Segment
from grace_snake.state import Phase, SnakeState

__all__ = [
    "Body",
    "Cell",
    "Direction",
    "DirectionQueue",
    "GameConfig",
    "GameEngine",
    "Key",
    "Occupancy",
    "Phase",
    "Scene",
    "Segment",
    "SnakeState",
    "TickScheduler",
]
