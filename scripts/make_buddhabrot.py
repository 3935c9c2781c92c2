"""
Render the three-channel Buddhabrot to a plain PPM.

Run:
    python -m scripts.make_buddhabrot

Settings come from configs/buddhabrot.yaml (or the file named by the
BUDDHABROT_CONFIG environment variable); missing keys use the defaults in
buddhabrot/config.py.
"""

import os
import sys
import time
from pathlib import Path

# Ensure repository root is on sys.path so `from buddhabrot...` works when running
# this script directly (e.g. `python scripts/make_buddhabrot.py`).
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from buddhabrot.config import load_config
from buddhabrot.progress import ConsoleProgress, format_elapsed
from buddhabrot.render import OutputUnavailableError, render_buddhabrot

DEFAULT_CONFIG = ROOT / "configs" / "buddhabrot.yaml"


def _config_path():
    env = os.environ.get("BUDDHABROT_CONFIG")
    if env:
        return Path(env)
    if DEFAULT_CONFIG.exists():
        return DEFAULT_CONFIG
    return None


def _pause(message: str) -> None:
    print(message)
    if sys.stdin is not None and sys.stdin.isatty():
        input()


def main() -> int:
    start = time.monotonic()

    config_path = _config_path()
    try:
        config = load_config(config_path)
    except ValueError as e:
        print(f"[config] {e}")
        return 1

    print(f"[config] {config_path or 'defaults'}")
    print(f"[run] {config.width}x{config.height}, {config.n_samples} samples per channel, output={config.output}")

    try:
        render_buddhabrot(config, progress=ConsoleProgress())
    except OutputUnavailableError as e:
        print("Could not open image file for writing!")
        print(f"[run] {e}")
        _pause("Press ENTER to continue...")
        return 1

    print(f"Time elapsed: {format_elapsed(time.monotonic() - start)}")
    _pause("Finished generating image. Open in GIMP to view. Press ENTER to exit.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
