import pathlib
import re
from importlib.metadata import PackageNotFoundError, version

import pytest

from tickbar.config import ProgressConfig
from tickbar.utils import parse_count


def test_defaults():
    cfg = ProgressConfig()
    assert cfg.window_size == 20
    assert cfg.speed_buckets == 20
    assert cfg.bar_width == 50
    assert cfg.plot_height == 15
    assert cfg.interval == pytest.approx(0.1)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(window_size=0),
        dict(speed_buckets=-3),
        dict(bar_width=2.5),
        dict(plot_height=0),
        dict(interval_ms=0),
        dict(fill=""),
        dict(empty="--"),
        dict(plot_marker=None),
    ],
)
def test_invalid_config(kwargs):
    with pytest.raises(ValueError):
        ProgressConfig(**kwargs)


def test_config_is_frozen():
    cfg = ProgressConfig()
    with pytest.raises(AttributeError):
        cfg.bar_width = 10


@pytest.mark.parametrize(
    "text,expected",
    [
        ("60000", 60000),
        ("60_000", 60000),
        ("60k", 60000),
        ("1.5K", 1500),
        ("2m", 2_000_000),
        ("1g", 1_000_000_000),
        (None, None),
    ],
)
def test_parse_count(text, expected):
    assert parse_count(text) == expected


@pytest.mark.parametrize("text", ["", "ten", "-5", "1x", "1.5"])
def test_parse_count_invalid(text):
    with pytest.raises(ValueError):
        parse_count(text)


def test_version_matches_distribution():
    import tickbar

    setup_py = pathlib.Path(__file__).parent.parent / "setup.py"
    declared = re.search(r'version="([^"]+)"', setup_py.read_text()).group(1)
    try:
        version("tickbar")
    except PackageNotFoundError:
        assert tickbar.__version__ == "0.0.0.dev0"
    else:
        assert tickbar.__version__ == declared
