"""Display fields and the recipe that composes them into one progress line.

Each Field kind has a renderer that appends its text to a shared output list.
A Recipe resolves the chosen kinds to their renderers once, at construction,
so rendering a frame is a fixed sequence of calls with no per-frame lookup.
"""

import enum
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from tickbar.stats import format_duration, format_rate

__all__ = [
    "CANONICAL_ORDER",
    "Field",
    "Recipe",
    "Snapshot",
    "filled_cells",
    "parse_fields",
    "percentage",
]


class Field(enum.Enum):
    ELAPSED = "elapsed"
    RAW = "raw"
    BAR = "bar"
    PERCENT = "percent"
    ETA = "eta"
    SPEED = "speed"
    ALL = "all"


# Order in which Field.ALL renders the individual kinds
CANONICAL_ORDER = (
    Field.ELAPSED,
    Field.RAW,
    Field.BAR,
    Field.PERCENT,
    Field.ETA,
    Field.SPEED,
)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a progress bar's state for one frame."""

    current: float
    target: float
    elapsed: float
    rate: float
    eta: float
    bar_width: int = 50
    fill: str = "█"
    empty: str = "―"


def filled_cells(current: float, target: float, width: int) -> int:
    """Number of filled bar cells: floor(current / target * width), clamped."""
    if not target > 0:
        return 0
    cells = int(current * width // target)
    return max(0, min(width, cells))


def percentage(current: float, target: float) -> float:
    return current * 100 / target if target > 0 else 0.0


def _render_elapsed(snap: Snapshot, out: list[str]):
    out.append(f"[Elapsed: {format_duration(snap.elapsed)}]")


def _render_raw(snap: Snapshot, out: list[str]):
    out.append(f"[Progress: {snap.current}/{snap.target} Ticks]")


def _render_bar(snap: Snapshot, out: list[str]):
    filled = filled_cells(snap.current, snap.target, snap.bar_width)
    out.append(f"|{snap.fill * filled}{snap.empty * (snap.bar_width - filled)}|")


def _render_percent(snap: Snapshot, out: list[str]):
    out.append(f"{percentage(snap.current, snap.target):.2f}%")


def _render_eta(snap: Snapshot, out: list[str]):
    out.append(f"[Est.Remaining: {format_duration(snap.eta)}]")


def _render_speed(snap: Snapshot, out: list[str]):
    out.append(f"[Speed: {format_rate(snap.rate)} Tick/s]")


Renderer = Callable[[Snapshot, list[str]], None]

_RENDERERS: dict[Field, Renderer] = {
    Field.ELAPSED: _render_elapsed,
    Field.RAW: _render_raw,
    Field.BAR: _render_bar,
    Field.PERCENT: _render_percent,
    Field.ETA: _render_eta,
    Field.SPEED: _render_speed,
}


def _render_all(snap: Snapshot, out: list[str]):
    for field in CANONICAL_ORDER:
        _RENDERERS[field](snap, out)


_RENDERERS[Field.ALL] = _render_all


class Recipe:
    """Ordered, immutable selection of fields making up one progress line."""

    __slots__ = ("_fields", "_renderers")

    def __init__(self, fields: Iterable[Field] = (Field.ALL,)):
        fields = tuple(fields)
        for field in fields:
            if not isinstance(field, Field):
                raise ValueError(f"Not a display field: {field!r}")
        self._fields = fields
        self._renderers: tuple[Renderer, ...] = tuple(_RENDERERS[f] for f in fields)

    @property
    def fields(self) -> tuple[Field, ...]:
        return self._fields

    def render(self, snap: Snapshot) -> str:
        out: list[str] = []
        for render in self._renderers:
            render(snap, out)
        return "".join(out)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Recipe({', '.join(f.name for f in self._fields)})"


_ALIASES = {
    "time": Field.ELAPSED,
    "progress": Field.RAW,
    "ticks": Field.RAW,
    "percentage": Field.PERCENT,
    "pct": Field.PERCENT,
    "%": Field.PERCENT,
    "remaining": Field.ETA,
    "rate": Field.SPEED,
}


def parse_fields(text: str) -> list[Field]:
    """Parse a comma separated field list such as "all,bar,elapsed".

    Empty items are skipped, so "" yields an empty recipe.
    """
    fields = []
    for name in text.split(","):
        name = name.strip().lower()
        if not name:
            continue
        field = _ALIASES.get(name)
        if field is None:
            try:
                field = Field(name)
            except ValueError:
                valid = ", ".join(f.value for f in Field)
                raise ValueError(f"Unknown field {name!r} (choose from {valid})") from None
        fields.append(field)
    return fields
