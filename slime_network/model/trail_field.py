"""Chemical trail field for the slime mold simulation."""

import numpy as np
from typing import Optional, Tuple
from scipy.ndimage import convolve


class TrailField:
    """
    Scalar chemoattractant grid that agents deposit into and sense from.

    Coordinate convention: continuous (x, y) for API, [row, col] for array
    indexing. Each cell covers cell_size x cell_size continuous units.
    All values stay within [0, 1].
    """

    # 3x3 diffusion kernel (weights sum to exactly 1.0)
    DIFFUSION_KERNEL = np.array([
        [0.05, 0.1, 0.05],
        [0.1,  0.4, 0.1],
        [0.05, 0.1, 0.05]
    ], dtype=np.float64)

    def __init__(self, width: float, height: float, cell_size: float,
                 decay_rate: float):
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.decay_rate = decay_rate  # multiplicative, in (0, 1)

        self.cols = int(width // cell_size)
        self.rows = int(height // cell_size)
        self.field = np.zeros((self.rows, self.cols), dtype=np.float64)

    def cell_of(self, x: float, y: float) -> Optional[Tuple[int, int]]:
        """Return (col, row) of the cell containing (x, y), or None if outside."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        col = int(np.floor(x / self.cell_size))
        row = int(np.floor(y / self.cell_size))
        if 0 <= col < self.cols and 0 <= row < self.rows:
            return col, row
        return None

    def cell_indices(self, xs: np.ndarray, ys: np.ndarray):
        """Vectorised cell_of: returns (cols, rows, inside_mask)."""
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        cols = np.floor(xs / self.cell_size).astype(np.int64)
        rows = np.floor(ys / self.cell_size).astype(np.int64)
        inside = ((xs >= 0) & (xs < self.width) &
                  (ys >= 0) & (ys < self.height) &
                  (cols >= 0) & (cols < self.cols) &
                  (rows >= 0) & (rows < self.rows))
        return cols, rows, inside

    def deposit(self, x: float, y: float, amount: float) -> None:
        """Add chemical at position, saturating at 1.0."""
        cell = self.cell_of(x, y)
        if cell is None:
            return
        col, row = cell
        self.field[row, col] = min(1.0, self.field[row, col] + amount)

    def deposit_many(self, xs: np.ndarray, ys: np.ndarray,
                     amount: float) -> None:
        """
        Deposit for a whole population in one pass.

        Agents sharing a cell are accumulated with np.add.at before the
        clamp, which matches applying the clamped additions one by one
        for non-negative amounts.
        """
        cols, rows, inside = self.cell_indices(xs, ys)
        if not np.any(inside):
            return
        np.add.at(self.field, (rows[inside], cols[inside]), amount)
        np.minimum(self.field, 1.0, out=self.field)

    def sample(self, x: float, y: float) -> float:
        """Return chemical concentration at position, 0.0 outside the grid."""
        cell = self.cell_of(x, y)
        if cell is None:
            return 0.0
        col, row = cell
        return float(self.field[row, col])

    def sample_many(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Vectorised sample; out-of-grid positions read 0.0."""
        cols, rows, inside = self.cell_indices(xs, ys)
        values = np.zeros(cols.shape, dtype=np.float64)
        values[inside] = self.field[rows[inside], cols[inside]]
        return values

    def diffuse_and_decay(self) -> None:
        """
        Apply the 3x3 diffusion kernel and multiplicative decay.

        The convolution reads the previous grid in full and writes a new
        array. Border rows and columns of the new grid are left at zero.
        """
        diffused = convolve(self.field, self.DIFFUSION_KERNEL,
                            mode='constant', cval=0.0)
        new_field = np.zeros_like(self.field)
        new_field[1:-1, 1:-1] = diffused[1:-1, 1:-1] * self.decay_rate
        self.field = new_field

    def snapshot(self) -> np.ndarray:
        """Return a copy of the grid for read-only consumers."""
        return self.field.copy()

    def is_empty(self) -> bool:
        return not np.any(self.field)

    def reset(self) -> None:
        """Reset the trail field to zero."""
        self.field = np.zeros((self.rows, self.cols), dtype=np.float64)
