from __future__ import annotations

import time
from typing import Callable, Optional, Protocol


class ProgressReporter(Protocol):
    def __call__(self, label: str, taken: int, total: int) -> None: ...


class ConsoleProgress:
    """
    Prints "<label>Samples Taken: n/N", first after `first_delay` seconds,
    then at most once every `interval` seconds.
    """

    def __init__(
        self,
        first_delay: float = 5.0,
        interval: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
        printer: Callable[[str], None] = print,
    ):
        self.first_delay = first_delay
        self.interval = interval
        self.clock = clock
        self.printer = printer
        self._next: Optional[float] = None

    def __call__(self, label: str, taken: int, total: int) -> None:
        now = self.clock()
        if self._next is None:
            self._next = now + self.first_delay
            return
        if now > self._next:
            self._next = now + self.interval
            self.printer(f"{label}Samples Taken: {taken}/{total}")


def format_elapsed(seconds: float) -> str:
    """Human readable duration, e.g. '1 Hours, 2 Minutes, 3 Seconds, 4 Milliseconds'."""
    total_ms = int(seconds * 1000)
    hrs, rem = divmod(total_ms, 3_600_000)
    mins, rem = divmod(rem, 60_000)
    secs, mils = divmod(rem, 1000)

    out = ""
    if hrs > 24:
        out += f"{hrs // 24} Days, {hrs % 24} Hours, "
    elif hrs > 0:
        out += f"{hrs} Hours, "
    if mins > 0:
        out += f"{mins} Minutes, "
    if secs > 0:
        out += f"{secs} Seconds, "
    if mils > 0:
        out += f"{mils} Milliseconds"
    return out
