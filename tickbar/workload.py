"""Demo producer that advances a shared counter on its own thread."""

import logging
import math
import threading
import time

__all__ = ["SHAPES", "Workload"]

SHAPES = ("sqrt", "linear")


class Workload:
    """Advances state["current"] from 0 to target over a number of paced steps.

    The sqrt shape moves quickly at first and slows down towards the end, which
    gives the completion sparkline something to show.
    """

    def __init__(
        self,
        target: int,
        steps: int = 10_000,
        step_delay: float = 0.0005,
        shape: str = "sqrt",
    ):
        if target < 0:
            raise ValueError(f"Target must not be negative, got {target}")
        if steps < 1:
            raise ValueError(f"Steps must be at least 1, got {steps}")
        if shape not in SHAPES:
            raise ValueError(f"Unknown workload shape {shape!r} (choose from {', '.join(SHAPES)})")
        self.target = target
        self.steps = steps
        self.step_delay = step_delay
        self.shape = shape
        self.state = {"current": 0, "target": target}
        self._thread: threading.Thread | None = None

    def tick_at(self, step: int) -> int:
        """Counter value after the given step; tick_at(steps) == target."""
        if self.shape == "sqrt":
            return math.isqrt(self.target * self.target * step // self.steps)
        return self.target * step // self.steps

    def start(self):
        self._thread = threading.Thread(target=self._worker, daemon=True)
        self._thread.start()

    def join(self, timeout: float | None = None):
        if self._thread is not None:
            self._thread.join(timeout)

    def run(self):
        """Advance the counter on the calling thread."""
        for step in range(1, self.steps + 1):
            if self.step_delay:
                time.sleep(self.step_delay)
            self.state["current"] = self.tick_at(step)

    def _worker(self):
        try:
            self.run()
        except BaseException as e:
            logging.exception("Workload thread exception: %s", e)
        finally:
            # The renderer only stops at the target, never leave it waiting
            self.state["current"] = self.target
