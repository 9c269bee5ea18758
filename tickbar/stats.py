"""Rate and ETA estimation, duration formatting and run summaries."""

import math
import re
import time
from dataclasses import dataclass

from tickbar.window import SlidingWindow

__all__ = [
    "PLACEHOLDER",
    "RunResult",
    "eta_seconds",
    "format_duration",
    "format_rate",
    "stopwatch",
    "window_rate",
]

# Shown in place of durations or rates that cannot be displayed
PLACEHOLDER = "-"

# Longest duration string before falling back to PLACEHOLDER
MAX_DURATION_WIDTH = 15


def stopwatch():
    """Generator that yields elapsed time since last yield."""
    t = time.perf_counter()
    while True:
        now = time.perf_counter()
        yield now - t
        t = now


def window_rate(window: SlidingWindow) -> float:
    """Throughput between the oldest and newest sample in the window.

    Returns 0.0 while fewer than two samples exist and math.inf when the
    samples span no time at all.
    """
    if window.size() < 2:
        return 0.0
    oldest, newest = window.oldest(), window.newest()
    dt = newest.timestamp - oldest.timestamp
    if dt <= 0:
        return math.inf
    return (newest.value - oldest.value) / dt


def eta_seconds(current: float, target: float, rate: float) -> float:
    """Seconds until current reaches target at the given rate."""
    remaining = target - current
    if remaining <= 0 or rate == math.inf:
        return 0.0
    if not rate > 0:  # zero, negative or NaN
        return math.inf
    return remaining / rate


def format_duration(seconds: float) -> str:
    """Format seconds as e.g. 1h01m01.00s, or PLACEHOLDER if it won't fit."""
    if not math.isfinite(seconds) or seconds < 0:
        return PLACEHOLDER
    # Round once so that 59.999 carries into the minutes instead of showing 60.00s
    centis = round(seconds * 100)
    days, centis = divmod(centis, 86400_00)
    hours, centis = divmod(centis, 3600_00)
    minutes, centis = divmod(centis, 60_00)

    out = ""
    if days:
        out += f"{days}d"
    if out or hours:
        out += f"{hours:02d}h" if out else f"{hours}h"
    if out or minutes:
        out += f"{minutes:02d}m" if out else f"{minutes}m"
    out += f"{centis / 100:05.2f}s" if out else f"{centis / 100:.2f}s"

    if len(out) > MAX_DURATION_WIDTH:
        return PLACEHOLDER
    return out


def format_rate(rate: float) -> str:
    if not math.isfinite(rate):
        return PLACEHOLDER
    return f"{rate:.2f}"


@dataclass
class RunResult:
    """Result of a completed progress run."""

    completed: float
    elapsed: float
    frames: int = 0
    render_time: float = 0.0  # Time spent composing and writing lines

    @property
    def average_rate(self) -> float:
        return self.completed / self.elapsed if self.elapsed > 0 else math.inf

    def print_summary(self, stream, verbose: bool = False):
        """Print a one-line summary, colored when the stream is a terminal."""
        render_fmt = ""
        if verbose and self.frames:
            render_fmt = (
                f"\033[0;32m • {self.frames} frames, "
                f"{self.render_time / self.frames * 1000:.2f} ms/frame"
            )
        msg = (
            f"\033[36m[tickbar]\033[32m completed \033[1m{self.completed}\033[0;32m Ticks in "
            f"\033[1m{format_duration(self.elapsed)}\033[0;32m @ "
            f"\033[1;32m{format_rate(self.average_rate)} Tick/s{render_fmt}\033[0m\n"
        )

        isatty = getattr(stream, "isatty", None)
        if not (isatty and isatty()):
            msg = re.sub(r"\033\[[0-9;]*m", "", msg)

        stream.write(msg)
        stream.flush()
