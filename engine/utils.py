# engine/utils.py

import random
from typing import Iterable, List, Tuple


def generate_random_positions(size: int, count: int, exclude: Iterable[Tuple[int, int]] = (), rng: random.Random = None) -> List[Tuple[int, int]]:
    """
    Pick `count` unique (row, col) positions on a size x size grid.
    Positions in `exclude` are never chosen (e.g., the safe starting region).
    """
    exclude_set = set(exclude)
    all_coords = [
        (r, c)
        for r in range(size)
        for c in range(size)
        if (r, c) not in exclude_set
    ]

    if count > len(all_coords):
        raise ValueError(
            f"Cannot place {count} mines: only {len(all_coords)} "
            f"available cells after excluding the safe region."
        )

    rng = rng if rng is not None else random.Random()
    return rng.sample(all_coords, count)


def get_neighbors(row: int, col: int, size: int) -> List[Tuple[int, int]]:
    """
    Return a list of valid neighboring coordinates (8-way) for (row, col).
    """
    neighbors = []
    for dr in [-1, 0, 1]:
        for dc in [-1, 0, 1]:
            nr, nc = row + dr, col + dc
            if (dr != 0 or dc != 0) and 0 <= nr < size and 0 <= nc < size:
                neighbors.append((nr, nc))
    return neighbors


def safe_region(size: int) -> List[Tuple[int, int]]:
    """
    The 2x2 block at the centre of the grid that never holds a mine.
    """
    center = size // 2
    return [
        (center - 1, center - 1),
        (center - 1, center),
        (center, center - 1),
        (center, center),
    ]


def format_board_debug(visible_state: List[list]) -> str:
    """
    Render a visible board state as text, one row per line.
    Hidden cells are '.', empty revealed cells are ' '.
    """
    lines = []
    for row in visible_state:
        row_str = ""
        for cell in row:
            if cell is None:
                row_str += " . "
            elif cell == 0:
                row_str += "   "
            else:
                row_str += f" {cell} "
        lines.append(row_str)
    return "\n".join(lines)
