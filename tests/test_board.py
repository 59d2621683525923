# tests/test_board.py

import unittest
from engine.board import MinesweeperGrid
from engine.exceptions import InsufficientPlacementAttempts, InvalidCoordinate
from engine.utils import get_neighbors, safe_region


class AlwaysZeroRng:
    """Rng stub that keeps drawing the top-left cell."""

    def randrange(self, stop):
        return 0

    def sample(self, population, k):
        return list(population)[:k]


class TestMinesweeperGrid(unittest.TestCase):

    def test_grid_dimensions(self):
        grid = MinesweeperGrid(size=5, num_mines=3)
        self.assertEqual(len(grid.cells), 5)
        self.assertEqual(len(grid.cells[0]), 5)

    def test_mine_count(self):
        for size, mines in [(5, 5), (10, 10), (10, 96), (48, 480), (60, 500)]:
            grid = MinesweeperGrid(size=size, num_mines=mines, seed=size)
            self.assertEqual(len(grid.mine_positions()), mines)

    def test_safe_region_never_mined(self):
        for size in [2, 3, 4, 5, 10, 11, 60]:
            mines = size * size - 4
            grid = MinesweeperGrid(size=size, num_mines=mines, seed=1)
            for row, col in safe_region(size):
                self.assertFalse(grid.cells[row][col].is_mine)
            self.assertEqual(len(grid.mine_positions()), mines)

    def test_safe_region_is_centered(self):
        self.assertEqual(safe_region(10), [(4, 4), (4, 5), (5, 4), (5, 5)])
        self.assertEqual(safe_region(3), [(0, 0), (0, 1), (1, 0), (1, 1)])

    def test_adjacent_counts(self):
        grid = MinesweeperGrid(size=12, num_mines=30, seed=3)
        for r in range(12):
            for c in range(12):
                cell = grid.cells[r][c]
                if cell.is_mine:
                    continue
                expected = sum(1 for nr, nc in get_neighbors(r, c, 12) if grid.cells[nr][nc].is_mine)
                self.assertEqual(cell.adjacent_mines, expected)

    def test_corner_neighbors_are_clipped(self):
        self.assertEqual(sorted(get_neighbors(0, 0, 4)), [(0, 1), (1, 0), (1, 1)])
        self.assertEqual(len(get_neighbors(0, 2, 4)), 5)
        self.assertEqual(len(get_neighbors(2, 2, 4)), 8)

    def test_invalid_configurations(self):
        with self.assertRaises(ValueError):
            MinesweeperGrid(size=1, num_mines=0)
        with self.assertRaises(ValueError):
            MinesweeperGrid(size=4, num_mines=13)
        with self.assertRaises(ValueError):
            MinesweeperGrid(size=4, num_mines=-1)
        with self.assertRaises(ValueError):
            MinesweeperGrid(size=4, num_mines=2, placement="spiral")

    def test_explicit_mines_must_avoid_safe_region(self):
        with self.assertRaises(ValueError):
            MinesweeperGrid(size=4, num_mines=0, mine_positions=[(1, 1)])
        with self.assertRaises(ValueError):
            MinesweeperGrid(size=4, num_mines=0, mine_positions=[(0, 0), (0, 0)])
        with self.assertRaises(InvalidCoordinate):
            MinesweeperGrid(size=4, num_mines=0, mine_positions=[(4, 0)])

    def test_explicit_mines_set_mine_count(self):
        grid = MinesweeperGrid(size=4, num_mines=99, mine_positions=[(0, 0), (3, 3)])
        self.assertEqual(grid.num_mines, 2)
        self.assertEqual(grid.mine_positions(), [(0, 0), (3, 3)])

    def test_rejection_placement(self):
        grid = MinesweeperGrid(size=10, num_mines=10, seed=5, placement="rejection")
        self.assertEqual(len(grid.mine_positions()), 10)

    def test_rejection_placement_reports_exhausted_budget(self):
        with self.assertRaises(InsufficientPlacementAttempts) as ctx:
            MinesweeperGrid(size=4, num_mines=2, rng=AlwaysZeroRng(), placement="rejection")
        self.assertEqual(ctx.exception.placed, 1)
        self.assertEqual(ctx.exception.requested, 2)
        self.assertEqual(ctx.exception.attempts, 20)

    def test_reveal_non_mine(self):
        grid = MinesweeperGrid(size=3, num_mines=0)
        hit_mine = grid.reveal(0, 0)
        self.assertFalse(hit_mine)
        self.assertTrue(all(cell.is_revealed for row in grid.cells for cell in row))

    def test_reveal_mine(self):
        grid = MinesweeperGrid(size=4, num_mines=0, mine_positions=[(3, 3)])
        self.assertTrue(grid.reveal(3, 3))
        self.assertEqual(grid.exploded, (3, 3))

    def test_cascade_reveals_zero_region_and_border(self):
        grid = MinesweeperGrid(size=5, num_mines=0, mine_positions=[(0, 4), (4, 0)])
        grid.reveal(2, 2)

        for r in range(5):
            for c in range(5):
                cell = grid.cells[r][c]
                self.assertEqual(cell.is_revealed, not cell.is_mine)
                if cell.is_revealed and cell.adjacent_mines == 0:
                    for nr, nc in get_neighbors(r, c, 5):
                        self.assertTrue(grid.cells[nr][nc].is_revealed)

    def test_cascade_stops_at_numbers(self):
        # Column of mines splits the board; the right side stays hidden.
        grid = MinesweeperGrid(size=6, num_mines=0, mine_positions=[(r, 4) for r in range(6)])
        grid.reveal(0, 0)
        for r in range(6):
            self.assertTrue(grid.cells[r][3].is_revealed)
            self.assertEqual(grid.cells[r][3].adjacent_mines, 3 if 0 < r < 5 else 2)
            self.assertFalse(grid.cells[r][4].is_revealed)
            self.assertFalse(grid.cells[r][5].is_revealed)

    def test_cascade_skips_flagged_cells(self):
        grid = MinesweeperGrid(size=5, num_mines=0, mine_positions=[(0, 4)])
        grid.flag(4, 4)
        grid.reveal(2, 2)
        self.assertFalse(grid.cells[4][4].is_revealed)
        self.assertTrue(grid.cells[4][4].is_flagged)

    def test_reveal_flagged_or_revealed_cell_is_noop(self):
        grid = MinesweeperGrid(size=4, num_mines=0, mine_positions=[(0, 0)])
        grid.flag(0, 0)
        self.assertFalse(grid.reveal(0, 0))
        self.assertFalse(grid.cells[0][0].is_revealed)

        grid.reveal(3, 3)
        self.assertFalse(grid.flag(3, 3))
        self.assertFalse(grid.cells[3][3].is_flagged)

    def test_open_safe_region(self):
        grid = MinesweeperGrid(size=10, num_mines=20, seed=11)
        self.assertFalse(grid.open_safe_region())
        for row, col in grid.safe_cells:
            self.assertTrue(grid.cells[row][col].is_revealed)

    def test_invalid_coordinates(self):
        grid = MinesweeperGrid(size=4, num_mines=2, seed=0)
        for row, col in [(-1, 0), (0, 4), (4, 4), ("1", 1), (True, 0), (1.0, 1)]:
            with self.assertRaises(InvalidCoordinate):
                grid.reveal(row, col)
            with self.assertRaises(InvalidCoordinate):
                grid.flag(row, col)

    def test_visible_state_after_loss(self):
        grid = MinesweeperGrid(size=4, num_mines=0, mine_positions=[(0, 0), (3, 3)])
        grid.flag(0, 3)
        grid.flag(3, 3)
        grid.reveal(0, 0)
        grid.reveal_all_mines()

        state = grid.get_visible_state(game_over_flag=True)
        self.assertEqual(state[0][0], "*")
        self.assertEqual(state[3][3], "F")
        self.assertEqual(state[0][3], "X")
        self.assertIsNone(state[1][1])

    def test_copy_cells_is_independent(self):
        grid = MinesweeperGrid(size=4, num_mines=2, seed=0)
        copied = grid.copy_cells()
        copied[0][0].is_revealed = True
        self.assertFalse(grid.cells[0][0].is_revealed)


if __name__ == "__main__":
    unittest.main()
