# engine/game.py

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

import numpy as np

from .board import MinesweeperGrid
from .utils import format_board_debug

logger = logging.getLogger(__name__)


class GameStatus(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class GameConfig:
    grid_size: int = 48
    mine_count: int = 480


@dataclass(frozen=True)
class GameResult:
    won: bool
    time_elapsed: int


class GameEngine:
    """
    Owns one Minesweeper grid and the game state machine around it:
    status, mines-remaining counter, elapsed time and flag mode.

    Time only advances through tick(), which an external scheduler calls
    about once per second.
    """

    def __init__(
        self,
        config: GameConfig = None,
        seed: int = None,
        rng=None,
        mine_positions: Optional[list[tuple[int, int]]] = None,
        placement: str = "shuffle",
        open_safe_region: bool = True
    ):
        self.config = config if config is not None else GameConfig()
        self.rng = rng if rng is not None else random.Random(seed)
        self.mine_positions = mine_positions
        self.placement = placement
        self.open_safe_region = open_safe_region
        self._result_listeners: List[Callable[[GameResult], None]] = []

        self.reset()

    @property
    def grid_size(self) -> int:
        return self.config.grid_size

    @property
    def total_mines(self) -> int:
        return self.grid.num_mines

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------

    def configure(self, grid_size: int, mine_count: int):
        self.apply_config(GameConfig(grid_size=grid_size, mine_count=mine_count))

    def apply_config(self, config: GameConfig):
        """
        Switch to a new grid size / mine count and start a fresh game.
        Explicit mine positions only apply to the configuration they were given with.
        """
        self._start(config, None)

    def reset(self):
        """
        Discard the current grid and start a new game with the current configuration.
        """
        self._start(self.config, self.mine_positions)

    def _start(self, config: GameConfig, mine_positions):
        # Nothing is committed until the new grid has been built.
        grid = MinesweeperGrid(
            config.grid_size,
            config.mine_count,
            rng=self.rng,
            mine_positions=mine_positions,
            placement=self.placement
        )
        self.config = config
        self.mine_positions = mine_positions
        self.grid = grid
        self.status = GameStatus.PLAYING
        self.mine_count = self.grid.num_mines
        self.time_elapsed = 0
        self.is_flag_mode = False
        self.result: Optional[GameResult] = None
        self._clock_running = False

        logger.debug("New game: %dx%d grid with %d mines", self.grid_size, self.grid_size, self.total_mines)

        if self.open_safe_region:
            if self.grid.open_safe_region():
                self._lose()
            else:
                self._check_win()

        if self.status is GameStatus.PLAYING:
            self._clock_running = True

    # ------------------------------------------------------------------
    # player actions
    # ------------------------------------------------------------------

    def reveal(self, row: int, col: int):
        self.grid.check_coord(row, col)
        if self.status is not GameStatus.PLAYING:
            return

        cell = self.grid.cells[row][col]
        if cell.is_revealed or cell.is_flagged:
            return

        if self.grid.reveal(row, col):
            self._lose()
        else:
            self._check_win()

    def toggle_flag(self, row: int, col: int):
        self.grid.check_coord(row, col)
        if self.status is not GameStatus.PLAYING:
            return

        if self.grid.flag(row, col):
            self.mine_count += -1 if self.grid.cells[row][col].is_flagged else 1

    def toggle_flag_mode(self):
        self.is_flag_mode = not self.is_flag_mode

    def cell_action(self, row: int, col: int):
        """
        Dispatch a generic tap from the presentation layer according to flag mode.
        """
        if self.is_flag_mode:
            self.toggle_flag(row, col)
        else:
            self.reveal(row, col)

    def tick(self):
        if self.status is not GameStatus.PLAYING or not self._clock_running:
            return
        self.time_elapsed += 1

    # ------------------------------------------------------------------
    # results
    # ------------------------------------------------------------------

    def add_result_listener(self, listener: Callable[[GameResult], None]):
        """
        Register a callback receiving a GameResult on every win or loss.
        """
        self._result_listeners.append(listener)

    def remove_result_listener(self, listener: Callable[[GameResult], None]):
        self._result_listeners.remove(listener)

    def _check_win(self):
        if self.grid.is_complete():
            self._finish(GameStatus.WON)

    def _lose(self):
        self.grid.reveal_all_mines()
        self._finish(GameStatus.LOST)

    def _finish(self, status: GameStatus):
        self.status = status
        self._clock_running = False
        self.result = GameResult(won=status is GameStatus.WON, time_elapsed=self.time_elapsed)

        logger.info("Game %s after %d seconds", status.value, self.time_elapsed)
        for listener in list(self._result_listeners):
            listener(self.result)

    # ------------------------------------------------------------------
    # views
    # ------------------------------------------------------------------

    def is_game_over(self) -> bool:
        return self.status is not GameStatus.PLAYING

    def is_win(self) -> bool:
        return self.status is GameStatus.WON

    def snapshot(self) -> dict:
        """
        Return a read-only copy of the grid and game status.
        Nothing in the returned dict aliases engine state.
        """
        game_over = self.is_game_over()
        return {
            "cells": self.grid.copy_cells(),
            "board": self.grid.get_visible_state(game_over_flag=game_over, game_won_flag=self.is_win()),
            "status": self.status,
            "mines_remaining": self.mine_count,
            "time_elapsed": self.time_elapsed,
            "flag_mode": self.is_flag_mode,
            "grid_size": self.grid_size,
            "total_mines": self.total_mines
        }

    def get_encoded_board(self) -> np.ndarray:
        """
        Encode the visible board as integers:
            -3 for unrevealed cells
            -2 for flagged cells
            -1 for mines (shown after a loss)
            -4 for incorrectly flagged non-mines (shown after a loss)
            0-8 for no. of adjacent mines in revealed cells
        """
        board = self.snapshot()["board"]
        encoded_board = []

        for row in board:
            encoded_row = []
            for cell in row:
                if cell is None:
                    encoded_row.append(-3)
                elif cell == "F":
                    encoded_row.append(-2)
                elif cell in ("*", "M"):
                    encoded_row.append(-1)
                elif cell == "X":
                    encoded_row.append(-4)
                else:
                    encoded_row.append(cell)
            encoded_board.append(encoded_row)

        return np.array(encoded_board, dtype=int)

    def __str__(self):
        return format_board_debug(self.snapshot()["board"])
