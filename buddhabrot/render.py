from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from buddhabrot.config import RenderConfig
from buddhabrot.heatmap import Heatmap
from buddhabrot.mapping import DEFAULT_BOUNDS, Bounds
from buddhabrot.progress import ProgressReporter
from buddhabrot.sampler import generate_channels


class OutputUnavailableError(OSError):
    """The image file could not be opened for writing."""


def normalize(counts, shared_max: int, max_value: int = 255) -> np.ndarray:
    """
    Scale visit counts to [0, max_value] against the shared maximum.

    out = floor(count * max_value / shared_max), in integer arithmetic so
    that count == shared_max lands exactly on max_value. An all-zero run
    (shared_max == 0) normalizes to all zeros.
    """
    counts = np.asarray(counts)
    if shared_max <= 0:
        return np.zeros(counts.shape, dtype=np.int64)
    return (counts.astype(np.int64) * max_value) // int(shared_max)


def _write_header(stream, width: int, height: int, max_value: int) -> None:
    stream.write("P3\n")
    stream.write(f"{width} {height}\n")
    stream.write(f"{max_value}\n")


def _write_row(stream, r_row, g_row, b_row) -> None:
    stream.write("".join(
        f"{r} {g} {b}   " for r, g, b in zip(r_row.tolist(), g_row.tolist(), b_row.tolist())
    ))
    stream.write("\n")


def write_ppm(stream, red, green, blue, max_value: int = 255) -> None:
    """Write three already-normalized (height, width) grids as a plain-text P3 PPM."""
    red, green, blue = np.asarray(red), np.asarray(green), np.asarray(blue)
    if not (red.shape == green.shape == blue.shape) or red.ndim != 2:
        raise ValueError(f"Channel grids must share one 2-D shape, got {red.shape}, {green.shape}, {blue.shape}")

    height, width = red.shape
    _write_header(stream, width, height, max_value)
    for row in range(height):
        _write_row(stream, red[row], green[row], blue[row])


def write_buddhabrot_ppm(stream, heatmaps: Sequence[Heatmap], shared_max: int, max_value: int = 255) -> None:
    """Normalize and write raw heatmaps one row at a time."""
    red, green, blue = (h.counts for h in heatmaps)
    if not (red.shape == green.shape == blue.shape):
        raise ValueError(f"Heatmaps must share one shape, got {red.shape}, {green.shape}, {blue.shape}")

    height, width = red.shape
    _write_header(stream, width, height, max_value)
    for row in range(height):
        _write_row(
            stream,
            normalize(red[row], shared_max, max_value),
            normalize(green[row], shared_max, max_value),
            normalize(blue[row], shared_max, max_value),
        )


def open_output(path):
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return open(path, "w", newline="\n")
    except OSError as e:
        raise OutputUnavailableError(f"Could not open {path} for writing: {e}") from e


def render_buddhabrot(
    config: RenderConfig,
    rng=None,
    progress: Optional[ProgressReporter] = None,
    bounds: Bounds = DEFAULT_BOUNDS,
) -> Path:
    """
    Sample all channels and write the image to config.output.

    The output file is opened before any sampling so an unwritable path
    fails fast with OutputUnavailableError.
    """
    out_path = Path(config.output)
    with open_output(out_path) as fh:
        heatmaps, shared = generate_channels(config, rng=rng, progress=progress, bounds=bounds)

        if shared.value == 0:
            print("[run] warning: no orbit landed inside the plotted region, image will be black")

        print(f"[run] writing {config.width}x{config.height} image to {out_path} (peak count {shared.value})")
        write_buddhabrot_ppm(fh, heatmaps, shared.value, config.max_value)

    return out_path
