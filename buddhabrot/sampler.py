"""
Monte-Carlo sampling of escaping orbits into per-channel heatmaps.

Each channel is an independent pass: draw uniform seeds c inside the
bounds, iterate z^2 + c, and count every in-bounds iterate of every
escaping orbit. All channels share one SharedMaximum so they can be
normalized against a single global peak.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from buddhabrot.config import RenderConfig
from buddhabrot.heatmap import Heatmap, SharedMaximum
from buddhabrot.iterators import Complex, batch_trajectories, buddhabrot_points, escape_lengths
from buddhabrot.mapping import DEFAULT_BOUNDS, Bounds, cells_from_points, col_from_imaginary, row_from_real
from buddhabrot.progress import ProgressReporter


def draw_seeds(rng, bounds: Bounds, count: int) -> Tuple[np.ndarray, np.ndarray]:
    """Uniform seeds over the bounds: all real parts first, then all imaginary parts."""
    real = rng.uniform(bounds.minimum.real, bounds.maximum.real, count)
    imag = rng.uniform(bounds.minimum.imag, bounds.maximum.imag, count)
    return np.asarray(real, dtype=np.float64), np.asarray(imag, dtype=np.float64)


def _accumulate_scalar(heatmap: Heatmap, bounds: Bounds, max_iter: int, c_real, c_imag) -> None:
    lo, hi = bounds.minimum, bounds.maximum
    last_row, last_col = heatmap.height - 1, heatmap.width - 1

    for r, i in zip(c_real.tolist(), c_imag.tolist()):
        for point in buddhabrot_points(Complex(r, i), max_iter):
            if not bounds.contains(point):
                continue
            row = row_from_real(point.real, lo.real, hi.real, heatmap.height)
            col = col_from_imaginary(point.imag, lo.imag, hi.imag, heatmap.width)
            # a point exactly on the max edge maps one past the grid
            heatmap.increment(min(row, last_row), min(col, last_col))


def _accumulate_vectorized(heatmap: Heatmap, bounds: Bounds, max_iter: int, c_real, c_imag) -> None:
    lengths = escape_lengths(c_real, c_imag, max_iter)

    for zr, zi in batch_trajectories(c_real, c_imag, lengths):
        inside = bounds.contains_many(zr, zi)
        if not inside.any():
            continue
        rows, cols = cells_from_points(zr[inside], zi[inside], bounds, heatmap.width, heatmap.height)
        np.minimum(rows, heatmap.height - 1, out=rows)
        np.minimum(cols, heatmap.width - 1, out=cols)
        heatmap.increment_many(rows, cols)


def generate_heatmap(
    heatmap: Heatmap,
    bounds: Bounds,
    max_iter: int,
    n_samples: int,
    rng,
    label: str = "",
    progress: Optional[ProgressReporter] = None,
    vectorized: bool = True,
    chunk_size: int = 100_000,
) -> Heatmap:
    """
    Accumulate n_samples random seeds into heatmap.

    Seeds are drawn in chunks of chunk_size; the scalar and vectorized
    paths consume the rng identically and produce the same counts.
    """
    if n_samples < 0:
        raise ValueError(f"n_samples must be >= 0, got {n_samples}")
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    accumulate = _accumulate_vectorized if vectorized else _accumulate_scalar

    taken = 0
    while taken < n_samples:
        if progress is not None:
            progress(label, taken, n_samples)
        count = min(chunk_size, n_samples - taken)
        c_real, c_imag = draw_seeds(rng, bounds, count)
        accumulate(heatmap, bounds, max_iter, c_real, c_imag)
        taken += count

    return heatmap


def generate_channels(
    config: RenderConfig,
    rng=None,
    progress: Optional[ProgressReporter] = None,
    bounds: Bounds = DEFAULT_BOUNDS,
) -> Tuple[List[Heatmap], SharedMaximum]:
    """Run one sampling pass per channel, in order, against a shared maximum."""
    if rng is None:
        rng = np.random.default_rng(config.seed)

    shared = SharedMaximum()
    heatmaps = []
    for channel in config.channels:
        heatmap = Heatmap(config.width, config.height, shared)
        print(f"[run] {channel.name} channel: max_iter={channel.max_iter}, samples={config.n_samples}")
        generate_heatmap(
            heatmap,
            bounds,
            channel.max_iter,
            config.n_samples,
            rng,
            label=f"{channel.name.capitalize()} Channel: ",
            progress=progress,
            vectorized=config.vectorized,
            chunk_size=config.chunk_size,
        )
        heatmaps.append(heatmap)

    return heatmaps, shared
