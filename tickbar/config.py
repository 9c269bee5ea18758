"""Configuration for a progress bar instance."""

from dataclasses import dataclass

__all__ = ["ProgressConfig"]


@dataclass(frozen=True)
class ProgressConfig:
    """Settings fixed for the lifetime of one progress bar."""

    window_size: int = 20  # Samples used for the rate estimate
    speed_buckets: int = 20  # Columns of the completion sparkline
    interval_ms: float = 100  # Sampling interval
    bar_width: int = 50
    fill: str = "█"
    empty: str = "―"
    plot_height: int = 15
    plot_empty: str = "·"
    plot_marker: str = "⏺"
    hide_cursor: bool = True  # Only applies when the output is a terminal
    summary: bool = False  # Print a one-line summary after the sparkline

    def __post_init__(self):
        for name in ("window_size", "speed_buckets", "bar_width", "plot_height"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if not self.interval_ms > 0:
            raise ValueError(f"interval_ms must be positive, got {self.interval_ms!r}")
        for name in ("fill", "empty", "plot_empty", "plot_marker"):
            glyph = getattr(self, name)
            if not isinstance(glyph, str) or len(glyph) != 1:
                raise ValueError(f"{name} must be a single character, got {glyph!r}")

    @property
    def interval(self) -> float:
        """Sampling interval in seconds."""
        return self.interval_ms / 1000
