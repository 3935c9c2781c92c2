from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from buddhabrot.iterators import Complex


@dataclass(frozen=True)
class Bounds:
    """Rectangle of the complex plane that is both sampled and plotted."""
    minimum: Complex
    maximum: Complex

    def __post_init__(self):
        if not (self.minimum.real < self.maximum.real and self.minimum.imag < self.maximum.imag):
            raise ValueError(f"Degenerate bounds: min={self.minimum}, max={self.maximum}")

    def contains(self, point: Complex) -> bool:
        return (
            self.minimum.real <= point.real <= self.maximum.real
            and self.minimum.imag <= point.imag <= self.maximum.imag
        )

    def contains_many(self, real: np.ndarray, imag: np.ndarray) -> np.ndarray:
        return (
            (real >= self.minimum.real) & (real <= self.maximum.real)
            & (imag >= self.minimum.imag) & (imag <= self.maximum.imag)
        )


# Region used for every render. Not user configurable.
DEFAULT_BOUNDS = Bounds(Complex(-2.0, -2.0), Complex(1.0, 2.0))


def row_from_real(real: float, min_r: float, max_r: float, image_height: int) -> int:
    # [min_r, max_r] -> [0, max_r - min_r] -> [0, image_height]
    return int((real - min_r) * (image_height / (max_r - min_r)))


def col_from_imaginary(imag: float, min_i: float, max_i: float, image_width: int) -> int:
    return int((imag - min_i) * (image_width / (max_i - min_i)))


def cells_from_points(real, imag, bounds: Bounds, width: int, height: int):
    """
    Vectorized row_from_real / col_from_imaginary.

    Inputs must already lie inside bounds; like the scalar mappers no
    clamping is done here.
    """
    lo, hi = bounds.minimum, bounds.maximum
    rows = ((np.asarray(real) - lo.real) * (height / (hi.real - lo.real))).astype(np.int64)
    cols = ((np.asarray(imag) - lo.imag) * (width / (hi.imag - lo.imag))).astype(np.int64)
    return rows, cols
