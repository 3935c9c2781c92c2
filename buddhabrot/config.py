# buddhabrot/config.py
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Optional, Tuple

import yaml


@dataclass(frozen=True)
class ChannelSpec:
    name: str
    max_iter: int

    def __post_init__(self):
        if self.max_iter < 1:
            raise ValueError(f"Channel {self.name!r} needs max_iter >= 1, got {self.max_iter}")


DEFAULT_CHANNELS = (
    ChannelSpec("red", 5),
    ChannelSpec("green", 500),
    ChannelSpec("blue", 500_000),
)


@dataclass
class RenderConfig:
    # image size
    width: int = 7000
    height: int = 7000

    # samples drawn per channel = width * height * samples_per_pixel
    samples_per_pixel: int = 350

    # one sampling pass per channel, written as R, G, B
    channels: Tuple[ChannelSpec, ...] = field(default_factory=lambda: DEFAULT_CHANNELS)

    output: str = "out.ppm"
    seed: Optional[int] = None     # None => seed from OS entropy
    max_value: int = 255

    # seeds processed per batch; also how often progress is polled
    chunk_size: int = 100_000
    vectorized: bool = True

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.samples_per_pixel < 0:
            raise ValueError(f"samples_per_pixel must be >= 0, got {self.samples_per_pixel}")
        if len(self.channels) != 3:
            raise ValueError(f"Expected 3 channels (R, G, B), got {len(self.channels)}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")

    @property
    def n_samples(self) -> int:
        return self.width * self.height * self.samples_per_pixel


def _parse_channels(raw) -> Tuple[ChannelSpec, ...]:
    """Accept {red: 5, green: 500, blue: 500000} or a list of {name, max_iter}."""
    if isinstance(raw, dict):
        return tuple(ChannelSpec(str(k), int(v)) for k, v in raw.items())
    return tuple(ChannelSpec(str(ch["name"]), int(ch["max_iter"])) for ch in raw)


def load_config(path=None) -> RenderConfig:
    """Load a RenderConfig, overriding defaults with keys from a YAML file."""
    cfg = RenderConfig()
    if path is None:
        return cfg

    config_path = Path(path)
    if not config_path.exists():
        raise ValueError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f) or {}

    known = {f.name for f in fields(RenderConfig)}
    unknown = set(raw) - known
    if unknown:
        raise ValueError(f"Unknown config keys in {config_path}: {sorted(unknown)}")

    if "channels" in raw:
        raw["channels"] = _parse_channels(raw["channels"])

    return replace(cfg, **raw)
