"""tickbar - Live terminal progress bar for counters advanced on another thread.

This package samples a shared counter at a fixed interval, estimates throughput
and remaining time over a sliding window of samples, and renders a configurable
single-line display followed by a speed sparkline on completion.
"""

from importlib.metadata import PackageNotFoundError, version

from tickbar.config import ProgressConfig
from tickbar.fields import Field, Recipe, Snapshot, parse_fields
from tickbar.history import SpeedHistory
from tickbar.progress import ProgressBar, State
from tickbar.stats import RunResult, eta_seconds, format_duration, window_rate
from tickbar.window import Sample, SlidingWindow

try:
    __version__ = version("tickbar")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"

__all__ = [
    "Field",
    "ProgressBar",
    "ProgressConfig",
    "Recipe",
    "RunResult",
    "Sample",
    "SlidingWindow",
    "Snapshot",
    "SpeedHistory",
    "State",
    "__version__",
    "eta_seconds",
    "format_duration",
    "parse_fields",
    "window_rate",
]
