# engine/exceptions.py


class InvalidCoordinate(IndexError):
    """
    Raised when a caller addresses a cell outside the grid.
    """

    def __init__(self, row, col, size):
        super().__init__(f"Cell ({row}, {col}) is outside the {size}x{size} grid.")
        self.row = row
        self.col = col
        self.size = size


class InsufficientPlacementAttempts(RuntimeError):
    """
    Raised by rejection-sampling placement when the attempt budget runs out
    before every mine has been placed.
    """

    def __init__(self, placed, requested, attempts):
        super().__init__(
            f"Placed only {placed} of {requested} mines after {attempts} attempts."
        )
        self.placed = placed
        self.requested = requested
        self.attempts = attempts
