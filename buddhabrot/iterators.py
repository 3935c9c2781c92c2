from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

ESCAPE_SQ_RADIUS = 2.0


@dataclass(frozen=True)
class Complex:
    real: float = 0.0
    imag: float = 0.0

    def __mul__(self, other: "Complex") -> "Complex":
        # (a + bi)(c + di)
        return Complex(
            self.real * other.real - self.imag * other.imag,
            self.real * other.imag + self.imag * other.real,
        )

    def __add__(self, other: "Complex") -> "Complex":
        return Complex(self.real + other.real, self.imag + other.imag)

    def sqmagnitude(self) -> float:
        return self.real * self.real + self.imag * self.imag


def buddhabrot_points(c: Complex, max_iter: int) -> Iterator[Complex]:
    """
    Orbit of z_{n+1} = z_n^2 + c starting from z_0 = 0.

    Yields every iterate up to and including the first one with
    |z|^2 > 2. If the orbit stays bounded for all max_iter steps the seed
    is treated as part of the Mandelbrot set and nothing is yielded.
    """
    if max_iter < 1:
        raise ValueError(f"max_iter must be positive, got {max_iter}")

    z = Complex()
    traj = []

    for _ in range(max_iter):
        z = z * z + c
        traj.append(z)
        if z.sqmagnitude() > ESCAPE_SQ_RADIUS:
            break
    else:
        return

    yield from traj


def escape_lengths(c_real: np.ndarray, c_imag: np.ndarray, max_iter: int) -> np.ndarray:
    """
    Vectorized trajectory lengths for a batch of seeds.

    lengths[k] == len(list(buddhabrot_points(c_k, max_iter))), i.e. the
    step on which seed k escaped, or 0 if it never did.
    """
    if max_iter < 1:
        raise ValueError(f"max_iter must be positive, got {max_iter}")

    c_real = np.asarray(c_real, dtype=np.float64)
    c_imag = np.asarray(c_imag, dtype=np.float64)

    lengths = np.zeros(c_real.shape, dtype=np.int64)
    idx = np.arange(c_real.size)
    zr = np.zeros(c_real.size, dtype=np.float64)
    zi = np.zeros(c_real.size, dtype=np.float64)
    cr = c_real.ravel()
    ci = c_imag.ravel()

    for n in range(1, max_iter + 1):
        if idx.size == 0:
            break
        # same operation order as Complex.__mul__ followed by __add__
        zr, zi = zr * zr - zi * zi + cr, zr * zi + zi * zr + ci
        escaped = zr * zr + zi * zi > ESCAPE_SQ_RADIUS
        if escaped.any():
            lengths.flat[idx[escaped]] = n
            keep = ~escaped
            idx, zr, zi, cr, ci = idx[keep], zr[keep], zi[keep], cr[keep], ci[keep]

    return lengths


def batch_trajectories(c_real: np.ndarray, c_imag: np.ndarray, lengths: np.ndarray):
    """
    Replay the orbits of escaping seeds one step at a time.

    Yields (real, imag) arrays holding the n-th iterate of every seed whose
    trajectory has at least n points. Seeds with length 0 never appear.
    """
    lengths = np.asarray(lengths).ravel()
    live = lengths > 0
    cr = np.asarray(c_real, dtype=np.float64).ravel()[live]
    ci = np.asarray(c_imag, dtype=np.float64).ravel()[live]
    remaining = lengths[live]
    zr = np.zeros(cr.size, dtype=np.float64)
    zi = np.zeros(ci.size, dtype=np.float64)

    while remaining.size:
        zr, zi = zr * zr - zi * zi + cr, zr * zi + zi * zr + ci
        yield zr, zi
        remaining = remaining - 1
        keep = remaining > 0
        if not keep.all():
            zr, zi, cr, ci, remaining = zr[keep], zi[keep], cr[keep], ci[keep], remaining[keep]
