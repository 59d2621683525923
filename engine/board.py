# engine/board.py

import logging
import numbers
import random
from dataclasses import dataclass, replace

from .exceptions import InsufficientPlacementAttempts, InvalidCoordinate
from .utils import generate_random_positions, get_neighbors, safe_region

logger = logging.getLogger(__name__)


@dataclass
class Cell:
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    adjacent_mines: int = 0  # only meaningful when is_mine is False

    def copy(self) -> "Cell":
        return replace(self)


class MinesweeperGrid:
    PLACEMENT_STRATEGIES = ("shuffle", "rejection")
    ATTEMPTS_PER_MINE = 10

    def __init__(
        self,
        size,
        num_mines,
        seed=None,
        rng=None,
        mine_positions=None,
        placement="shuffle"
    ):
        """
        size:
            Side length N of the square grid. Must be at least 2 so the
            2x2 safe region at the centre fits.

        num_mines:
            Number of mines to place, 0 <= num_mines <= N*N - 4. Ignored
            when mine_positions is given.

        seed / rng:
            Source of randomness. An explicit rng (anything with sample()
            and randrange()) wins over seed.

        mine_positions:
            Optional explicit list of (row, col) mines, e.g. for tests or
            replays. Must avoid the safe region.

        placement:
            "shuffle" (default) samples the exact number of mines from
            every non-safe cell in one pass. "rejection" draws random
            cells until num_mines are placed or 10 * num_mines attempts
            are used up, raising InsufficientPlacementAttempts if short.
        """
        if size < 2:
            raise ValueError(f"Grid size must be at least 2, got {size}.")
        if placement not in self.PLACEMENT_STRATEGIES:
            raise ValueError(f"Unknown placement strategy: {placement!r}")

        self.size = size
        self.num_mines = num_mines if mine_positions is None else len(mine_positions)
        self.placement = placement
        self.rng = rng if rng is not None else random.Random(seed)
        self.safe_cells = safe_region(size)
        self.exploded = None  # (row, col) of the mine that ended the game

        self.cells = [[Cell() for _ in range(self.size)] for _ in range(self.size)]

        if mine_positions is not None:
            self._place_explicit_mines(mine_positions)
        else:
            self._place_mines()
        self._compute_adjacent_counts()

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------

    def _place_mines(self):
        max_mines = self.size * self.size - len(self.safe_cells)
        if not 0 <= self.num_mines <= max_mines:
            raise ValueError(
                f"Mine count must be between 0 and {max_mines} "
                f"for a {self.size}x{self.size} grid, got {self.num_mines}."
            )

        if self.placement == "rejection":
            self._place_mines_by_rejection()
        else:
            for r, c in generate_random_positions(self.size, self.num_mines, exclude=self.safe_cells, rng=self.rng):
                self.cells[r][c].is_mine = True

        logger.debug("Placed %d mines on %dx%d grid (%s)", self.num_mines, self.size, self.size, self.placement)

    def _place_mines_by_rejection(self):
        avoid = set(self.safe_cells)
        max_attempts = self.num_mines * self.ATTEMPTS_PER_MINE
        placed = 0
        attempts = 0

        while placed < self.num_mines and attempts < max_attempts:
            row = self.rng.randrange(self.size)
            col = self.rng.randrange(self.size)
            attempts += 1

            if (row, col) in avoid or self.cells[row][col].is_mine:
                continue

            self.cells[row][col].is_mine = True
            placed += 1

        if placed < self.num_mines:
            raise InsufficientPlacementAttempts(placed, self.num_mines, attempts)

    def _place_explicit_mines(self, mine_positions):
        avoid = set(self.safe_cells)
        seen = set()
        for row, col in mine_positions:
            if not self.is_valid_coord(row, col):
                raise InvalidCoordinate(row, col, self.size)
            if (row, col) in avoid:
                raise ValueError(f"Mine at ({row}, {col}) falls inside the safe region.")
            if (row, col) in seen:
                raise ValueError(f"Duplicate mine position ({row}, {col}).")
            seen.add((row, col))
            self.cells[row][col].is_mine = True

    def _compute_adjacent_counts(self):
        for r in range(self.size):
            for c in range(self.size):
                cell = self.cells[r][c]
                if cell.is_mine:
                    continue
                cell.adjacent_mines = sum(
                    1 for nr, nc in get_neighbors(r, c, self.size) if self.cells[nr][nc].is_mine
                )

    # ------------------------------------------------------------------
    # coordinates
    # ------------------------------------------------------------------

    def is_valid_coord(self, row, col):
        if isinstance(row, bool) or isinstance(col, bool):
            return False
        if not isinstance(row, numbers.Integral) or not isinstance(col, numbers.Integral):
            return False
        return 0 <= row < self.size and 0 <= col < self.size

    def check_coord(self, row, col):
        if not self.is_valid_coord(row, col):
            raise InvalidCoordinate(row, col, self.size)

    # ------------------------------------------------------------------
    # reveal / flag
    # ------------------------------------------------------------------

    def open_safe_region(self) -> bool:
        """
        Force-reveal the 2x2 safe region and cascade from any of its cells
        with no adjacent mines. Returns True if a mine was uncovered, which
        cannot happen on a well-formed grid.
        """
        hit_mine = False
        for row, col in self.safe_cells:
            self.cells[row][col].is_revealed = True
            if self.cells[row][col].adjacent_mines == 0:
                hit_mine = self._flood_from(row, col) or hit_mine
        return hit_mine

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal behavior:
        - already revealed or flagged cells are left alone
        - hitting a mine -> return True
        - 0 -> flood fill over the connected zero region and its numbered border
        - number -> reveal only this cell
        Returns True if *any* mine gets revealed by this action (including flood fill).
        """
        self.check_coord(row, col)
        cell = self.cells[row][col]
        if cell.is_revealed or cell.is_flagged:
            return False

        cell.is_revealed = True
        if cell.is_mine:
            self.exploded = (row, col)
            return True

        if cell.adjacent_mines == 0:
            return self._flood_from(row, col)
        return False

    def _flood_from(self, row, col) -> bool:
        # Cells are marked revealed when pushed, so each is visited once.
        hit_mine = False
        stack = [(row, col)]
        while stack:
            r, c = stack.pop()
            for nr, nc in get_neighbors(r, c, self.size):
                neighbor = self.cells[nr][nc]
                if neighbor.is_revealed or neighbor.is_flagged:
                    continue
                neighbor.is_revealed = True
                if neighbor.is_mine:
                    # Only reachable if adjacency counts are inconsistent.
                    if self.exploded is None:
                        self.exploded = (nr, nc)
                    hit_mine = True
                elif neighbor.adjacent_mines == 0:
                    stack.append((nr, nc))
        return hit_mine

    def reveal_all_mines(self):
        for row in self.cells:
            for cell in row:
                if cell.is_mine:
                    cell.is_revealed = True

    def flag(self, row, col) -> bool:
        """
        Toggle the flag on an unrevealed cell. Returns True if the flag changed.
        """
        self.check_coord(row, col)
        cell = self.cells[row][col]
        if cell.is_revealed:
            return False
        cell.is_flagged = not cell.is_flagged
        return True

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def mine_positions(self):
        return [
            (r, c)
            for r in range(self.size)
            for c in range(self.size)
            if self.cells[r][c].is_mine
        ]

    def count_revealed_safe(self):
        return sum(1 for row in self.cells for cell in row if cell.is_revealed and not cell.is_mine)

    def count_flags(self):
        return sum(1 for row in self.cells for cell in row if cell.is_flagged)

    def is_complete(self):
        return self.count_revealed_safe() == self.size * self.size - self.num_mines

    def copy_cells(self):
        return [[cell.copy() for cell in row] for row in self.cells]

    def get_visible_state(self, game_over_flag=False, game_won_flag=False):
        state = []
        for r in range(self.size):
            row_cells = []
            for c in range(self.size):
                cell = self.cells[r][c]

                if cell.is_flagged:
                    if game_over_flag and not game_won_flag and not cell.is_mine:
                        # Incorrectly flagged non-mine
                        row_cells.append("X")
                    else:
                        row_cells.append("F")
                elif cell.is_mine and game_over_flag:
                    if game_won_flag:
                        # Game won, all mines are effectively "flagged"
                        row_cells.append("F")
                    elif (r, c) == self.exploded:
                        row_cells.append("*")
                    else:
                        row_cells.append("M")
                elif not cell.is_revealed:
                    row_cells.append(None)
                else:
                    row_cells.append(cell.adjacent_mines)
            state.append(row_cells)
        return state
