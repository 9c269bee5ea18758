"""Single-line progress display with a speed sparkline on completion."""

import enum
import logging
import math
import sys
import threading
import time
from collections.abc import Callable, Iterable, Mapping

from tickbar.config import ProgressConfig
from tickbar.fields import Field, Recipe, Snapshot
from tickbar.history import SpeedHistory
from tickbar.stats import RunResult, eta_seconds, stopwatch, window_rate
from tickbar.window import SlidingWindow

__all__ = ["ProgressBar", "State"]

# Erase the whole line and return to column 1
CLEAR_LINE = "\x1b[2K\r"


class State(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    TERMINATED = "terminated"


class ProgressBar:
    """Progress line redrawn in place every interval until the target is reached.

    Reads progress from a shared state dict with 'current' and 'target' keys
    owned by a producer on another thread. The bar never writes to it. Reads
    rely on a single dict item lookup being atomic (true for CPython, with or
    without the GIL), so the producer may update state["current"] without a
    lock as long as it assigns whole values.

    The loop finishes once current >= target, renders one final frame with the
    exact value and then prints the speed sparkline. It does not time out: a
    counter that never reaches its target keeps the loop running.
    """

    def __init__(
        self,
        state: Mapping,
        fields: Recipe | Iterable[Field] = (Field.ALL,),
        config: ProgressConfig | None = None,
        stream=None,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.state = state  # Must have 'current' and 'target' keys
        self.recipe = fields if isinstance(fields, Recipe) else Recipe(fields)
        self.config = config or ProgressConfig()
        self.stream = stream
        self._clock = clock
        self._sleep = sleep
        self.window = SlidingWindow(self.config.window_size)
        self.history = SpeedHistory(self.config.speed_buckets)
        self.status = State.IDLE
        self.rate = 0.0
        self.eta = math.inf
        self._start_time: float | None = None
        self._now: float | None = None
        self._current = None
        self._target = None
        self._thread: threading.Thread | None = None
        self._result: RunResult | None = None
        self._error: BaseException | None = None
        self._hidden_cursor = False

    @property
    def elapsed(self) -> float:
        if self._start_time is None:
            return 0.0
        return self._now - self._start_time

    @property
    def result(self) -> RunResult | None:
        return self._result

    def start(self):
        """Run the render loop on a background thread."""
        if self._thread is not None:
            raise RuntimeError("Progress bar already started")
        self._thread = threading.Thread(target=self._run_thread, daemon=True)
        self._thread.start()

    def join(self, timeout: float | None = None) -> RunResult | None:
        """Wait for a started bar to finish; returns None if still running.

        An exception raised by the render loop is re-raised here.
        """
        if self._thread is None:
            raise RuntimeError("Progress bar was not started")
        self._thread.join(timeout)
        if self._thread.is_alive():
            return None
        if self._error is not None:
            raise self._error
        return self._result

    def run(self) -> RunResult:
        """Render until the target is reached, then plot the speed history."""
        if self.status is not State.IDLE:
            raise RuntimeError(f"Progress bar cannot run from state {self.status.value}")
        out = self.stream or sys.stdout
        self.status = State.RUNNING
        logging.debug("Progress bar running, target %s", self.state["target"])

        self._start_time = self._now = self._clock()
        self.window.push(self._start_time, self.state["current"])
        timer = stopwatch()
        render_time = 0.0
        frames = 0

        self._setup_terminal_state(out)
        try:
            while True:
                next(timer)
                self._draw(out)
                render_time += next(timer)
                frames += 1
                self._sleep(self.config.interval)
                if self._finished():
                    # Final frame so the exact target value stays on screen
                    next(timer)
                    self._draw(out)
                    render_time += next(timer)
                    frames += 1
                    break
            self._plot(out)
        finally:
            self._restore_terminal_state(out)

        self.status = State.TERMINATED
        self._result = RunResult(
            completed=self._current,
            elapsed=self.elapsed,
            frames=frames,
            render_time=render_time,
        )
        logging.debug("Progress bar terminated after %d frames", frames)
        if self.config.summary:
            self._result.print_summary(out)
        return self._result

    def _run_thread(self):
        try:
            self.run()
        except BaseException as e:
            logging.exception("Progress renderer exception: %s", e)
            self._error = e

    def _finished(self) -> bool:
        return self.state["current"] >= self.state["target"]

    def sample(self):
        """Take one sample of the shared counter and update rate, ETA and history."""
        self._now = self._clock()
        self._current = self.state["current"]
        self._target = self.state["target"]
        self.window.push(self._now, self._current)
        self.rate = window_rate(self.window)
        self.eta = eta_seconds(self._current, self._target, self.rate)
        self.history.record(self._current, self._target, self.rate)

    def snapshot(self) -> Snapshot:
        if self._current is None:
            current, target = self.state["current"], self.state["target"]
        else:
            current, target = self._current, self._target
        cfg = self.config
        return Snapshot(
            current=current,
            target=target,
            elapsed=self.elapsed,
            rate=self.rate,
            eta=self.eta,
            bar_width=cfg.bar_width,
            fill=cfg.fill,
            empty=cfg.empty,
        )

    def render_line(self) -> str:
        """Compose the progress line for the latest sample without writing it."""
        return self.recipe.render(self.snapshot())

    def _draw(self, out):
        self.sample()
        out.write(CLEAR_LINE + self.render_line())
        out.flush()

    def _plot(self, out):
        cfg = self.config
        lines = self.history.render(cfg.plot_height, cfg.plot_empty, cfg.plot_marker)
        out.write("\n" + "\n".join(lines) + "\n")
        out.flush()

    def _setup_terminal_state(self, out):
        """Hide cursor to reduce flicker while the line is being redrawn."""
        isatty = getattr(out, "isatty", None)
        if self.config.hide_cursor and isatty and isatty():
            out.write("\x1b[?25l")
            out.flush()
            self._hidden_cursor = True

    def _restore_terminal_state(self, out):
        if self._hidden_cursor:
            out.write("\x1b[?25h")
            out.flush()
            self._hidden_cursor = False
