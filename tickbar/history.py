"""Per-percentage speed history and the post-completion sparkline."""

import numpy as np

__all__ = ["SpeedHistory"]


class SpeedHistory:
    """One throughput sample per progress bucket, latest write wins.

    Buckets that were never written hold NaN and, like infinite rates, are
    left out of both scaling and plotting.
    """

    def __init__(self, buckets: int = 20):
        if buckets < 1:
            raise ValueError(f"Speed history needs at least 1 bucket, got {buckets}")
        self.buckets = buckets
        self._rates = np.full(buckets, np.nan, dtype=np.float64)

    def bucket_index(self, current: float, target: float) -> int:
        """Bucket for the current progress fraction, clamped to a valid index."""
        if not target > 0:
            return 0
        idx = int(current / target * self.buckets)
        return max(0, min(self.buckets - 1, idx))

    def record(self, current: float, target: float, rate: float) -> int:
        idx = self.bucket_index(current, target)
        self._rates[idx] = rate
        return idx

    def rates(self) -> np.ndarray:
        return self._rates.copy()

    def max_rate(self) -> float | None:
        """Largest finite recorded rate, or None if there is none."""
        finite = self._rates[np.isfinite(self._rates)]
        if not finite.size:
            return None
        return float(finite.max())

    def render(self, height: int = 15, empty: str = "·", marker: str = "⏺") -> list[str]:
        """Render the chart rows (top first), the axis and the percentage labels."""
        if height < 1:
            raise ValueError(f"Sparkline height must be at least 1, got {height}")
        grid = [[empty] * self.buckets for _ in range(height)]

        max_rate = self.max_rate()
        if max_rate is not None:
            for col in np.flatnonzero(np.isfinite(self._rates)):
                rate = self._rates[col]
                row = int(rate / max_rate * (height - 1)) if max_rate > 0 else 0
                grid[max(0, min(height - 1, row))][col] = marker

        # Row 0 of the grid is the lowest speed, so print it last
        lines = ["│ " + "".join(f"{cell}  " for cell in row) for row in reversed(grid)]
        lines.append("└─" + "───" * self.buckets)
        lines.append("".join(f"{i * 100 // self.buckets:>3}" for i in range(1, self.buckets + 1)))
        return lines
