from .board import Cell, MinesweeperGrid
from .exceptions import InsufficientPlacementAttempts, InvalidCoordinate
from .game import GameConfig, GameEngine, GameResult, GameStatus

__all__ = [
    'Cell',
    'MinesweeperGrid',
    'GameConfig',
    'GameEngine',
    'GameResult',
    'GameStatus',
    'InvalidCoordinate',
    'InsufficientPlacementAttempts',
]
