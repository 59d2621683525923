# settings/store.py

import logging
import os
from enum import Enum

import yaml

from engine.game import GameConfig, GameResult

logger = logging.getLogger(__name__)

GRID_SIZE_RANGE = (10, 60)
MIN_MINES = 10
MAX_MINES = 500
CELL_SIZE_RANGE = (15, 40)


class Difficulty(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    EXPERT = "Expert"
    CUSTOM = "Custom"


DIFFICULTY_PRESETS = {
    Difficulty.BEGINNER: (16, 40),
    Difficulty.INTERMEDIATE: (32, 200),
    Difficulty.EXPERT: (48, 480),
}


def _clamp(value, low, high, name):
    clamped = min(max(value, low), high)
    if clamped != value:
        logger.warning("%s %s out of range [%s, %s], using %s", name, value, low, high, clamped)
    return clamped


def max_mines_for(grid_size: int) -> int:
    return min(MAX_MINES, grid_size * grid_size // 4)


def parse_difficulty(value) -> Difficulty:
    if isinstance(value, Difficulty):
        return value
    for difficulty in Difficulty:
        if str(value).lower() in (difficulty.value.lower(), difficulty.name.lower()):
            return difficulty
    raise ValueError(f"Unknown difficulty: {value!r}")


class GameSettings:
    """
    Player-facing settings and cumulative statistics.

    Picking a preset difficulty overwrites grid size and mine count;
    Custom keeps whatever values are set. Grid size and mine count are
    clamped to the ranges the settings form allows.
    """

    def __init__(self, difficulty=Difficulty.EXPERT, grid_size=None, mine_count=None, cell_size=25):
        self._grid_size = 48
        self._mine_count = 480
        self._cell_size = 25
        self.difficulty = parse_difficulty(difficulty)

        if grid_size is not None or mine_count is not None:
            # Explicit dimensions override any preset.
            self._difficulty = Difficulty.CUSTOM
        if grid_size is not None:
            self.grid_size = grid_size
        if mine_count is not None:
            self.mine_count = mine_count
        self.cell_size = cell_size

        self.games_played = 0
        self.games_won = 0
        self.best_time = 0  # 0 means no win recorded yet

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @difficulty.setter
    def difficulty(self, value):
        self._difficulty = parse_difficulty(value)
        if self._difficulty in DIFFICULTY_PRESETS:
            self._grid_size, self._mine_count = DIFFICULTY_PRESETS[self._difficulty]

    @property
    def grid_size(self) -> int:
        return self._grid_size

    @grid_size.setter
    def grid_size(self, value: int):
        self._grid_size = _clamp(int(value), *GRID_SIZE_RANGE, "grid_size")
        # Shrinking the grid may push the mine count above its new maximum.
        self._mine_count = _clamp(self._mine_count, MIN_MINES, max_mines_for(self._grid_size), "mine_count")

    @property
    def mine_count(self) -> int:
        return self._mine_count

    @mine_count.setter
    def mine_count(self, value: int):
        self._mine_count = _clamp(int(value), MIN_MINES, max_mines_for(self._grid_size), "mine_count")

    @property
    def cell_size(self) -> int:
        return self._cell_size

    @cell_size.setter
    def cell_size(self, value):
        self._cell_size = _clamp(value, *CELL_SIZE_RANGE, "cell_size")

    @property
    def win_rate(self) -> str:
        if self.games_played == 0:
            return "0%"
        return f"{self.games_won / self.games_played * 100:.1f}%"

    def to_config(self) -> GameConfig:
        return GameConfig(grid_size=self.grid_size, mine_count=self.mine_count)

    def record_game(self, won: bool, time: int):
        self.games_played += 1
        if won:
            self.games_won += 1
            if self.best_time == 0 or time < self.best_time:
                self.best_time = time

    def record_result(self, result: GameResult):
        self.record_game(result.won, result.time_elapsed)

    def attach(self, engine):
        """
        Record every finished game of `engine` in these statistics.
        """
        engine.add_result_listener(self.record_result)

    def reset_stats(self):
        self.games_played = 0
        self.games_won = 0
        self.best_time = 0

    def as_dict(self) -> dict:
        return {
            "difficulty": self.difficulty.value,
            "grid_size": self.grid_size,
            "mine_count": self.mine_count,
            "cell_size": self.cell_size,
            "games_played": self.games_played,
            "games_won": self.games_won,
            "win_rate": self.win_rate,
            "best_time": self.best_time
        }


def load_settings(path: str) -> GameSettings:
    """
    Build GameSettings from a YAML file. A missing file yields the defaults.

    Example:
        settings:
          difficulty: custom
          grid_size: 20
          mine_count: 60
          cell_size: 30
    """
    data = {}
    if os.path.exists(path):
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    else:
        logger.debug("Settings file %s not found, using defaults", path)

    section = (data.get("settings") or data) if isinstance(data, dict) else data
    if not isinstance(section, dict):
        raise ValueError(f"Settings in {path} must be a mapping.")

    return GameSettings(
        difficulty=section.get("difficulty", Difficulty.EXPERT),
        grid_size=section.get("grid_size"),
        mine_count=section.get("mine_count"),
        cell_size=section.get("cell_size", 25)
    )
