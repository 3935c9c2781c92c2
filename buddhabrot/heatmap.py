from __future__ import annotations

import numpy as np

COUNTER_DTYPE = np.uint32


class SharedMaximum:
    """Largest counter seen across every heatmap that shares this object."""

    def __init__(self, value: int = 0):
        if value < 0:
            raise ValueError(f"maximum cannot be negative, got {value}")
        self.value = int(value)

    def observe(self, candidate) -> None:
        candidate = int(candidate)
        if candidate > self.value:
            self.value = candidate

    def __int__(self):
        return self.value

    def __repr__(self):
        return f"SharedMaximum({self.value})"


class Heatmap:
    """
    Per-channel grid of visit counters, shape (height, width).

    Rows come from the real axis and columns from the imaginary axis.
    Cells only change through increment / increment_many, which keep the
    shared maximum >= every cell.
    """

    def __init__(self, width: int, height: int, shared: SharedMaximum):
        if width < 1 or height < 1:
            raise ValueError(f"Heatmap needs positive dimensions, got {width}x{height}")
        self.width = width
        self.height = height
        self.shared = shared
        self._grid = np.zeros((height, width), dtype=COUNTER_DTYPE)

    @property
    def counts(self) -> np.ndarray:
        view = self._grid.view()
        view.flags.writeable = False
        return view

    def read(self, row: int, col: int) -> int:
        return int(self._grid[row, col])

    def increment(self, row: int, col: int) -> None:
        self._grid[row, col] += 1
        self.shared.observe(self._grid[row, col])

    def increment_many(self, rows: np.ndarray, cols: np.ndarray) -> None:
        rows = np.asarray(rows, dtype=np.intp)
        cols = np.asarray(cols, dtype=np.intp)
        if rows.size == 0:
            return
        # add.at so duplicate (row, col) pairs each count
        np.add.at(self._grid, (rows, cols), 1)
        # only touched cells can have grown past the previous maximum
        self.shared.observe(self._grid[rows, cols].max())
