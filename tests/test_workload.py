import logging

import pytest

from tickbar.workload import Workload


@pytest.mark.parametrize("shape", ["sqrt", "linear"])
@pytest.mark.parametrize("target,steps", [(10, 10), (60000, 1000), (7, 100), (0, 5)])
def test_ticks_monotonic_and_exact(shape, target, steps):
    wl = Workload(target, steps=steps, step_delay=0, shape=shape)
    ticks = [wl.tick_at(i) for i in range(steps + 1)]
    assert ticks[0] == 0
    assert ticks[-1] == target
    assert all(a <= b for a, b in zip(ticks, ticks[1:]))


def test_sqrt_shape_front_loaded():
    wl = Workload(1000, steps=100, step_delay=0)
    assert wl.tick_at(25) == 500


def test_run_reaches_target():
    wl = Workload(50, steps=20, step_delay=0)
    wl.run()
    assert wl.state == {"current": 50, "target": 50}


def test_thread_reaches_target():
    wl = Workload(30, steps=30, step_delay=0.001, shape="linear")
    wl.start()
    wl.join(timeout=10)
    assert wl.state["current"] == 30


def test_worker_failure_is_logged_and_completes(caplog, monkeypatch):
    wl = Workload(30, steps=30, step_delay=0)

    def broken(step):
        raise RuntimeError("boom")

    monkeypatch.setattr(wl, "tick_at", broken)
    with caplog.at_level(logging.ERROR):
        wl.start()
        wl.join(timeout=10)
    assert "Workload thread exception: boom" in caplog.text
    assert wl.state["current"] == 30


@pytest.mark.parametrize(
    "kwargs",
    [dict(target=-1), dict(target=10, steps=0), dict(target=10, shape="cubic")],
)
def test_invalid_arguments(kwargs):
    with pytest.raises(ValueError):
        Workload(**kwargs)
