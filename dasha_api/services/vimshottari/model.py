from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from fractions import Fraction
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, Union

from .errors import MissingAnchorError
from .rounding import as_fraction
from .weights import WeightTable

LEVEL_NAMES = {
    1: "Mahadasha",
    2: "Antardasha",
    3: "Pratyantardasha",
    4: "Sookshmadasha",
    5: "Pranadasha",
    6: "Dehadasha",
}
MAX_LEVEL = max(LEVEL_NAMES)


def as_date(value: Union[date, datetime, str]) -> date:
    """Normalise a date-like value to a calendar ``date``."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    raise TypeError(f"unsupported date value: {value!r}")


@dataclass(eq=False)
class Interval:
    """One dasha period, half-open ``[start, end)``.

    ``_children`` is the only mutable state: it is filled once by
    :meth:`ensure_children` and never reassigned.
    """

    symbol: str
    start: date
    end: date
    level: int
    _children: Optional[Tuple["Interval", ...]] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ValueError(f"interval {self.symbol} ends on or before its start")

    @property
    def duration_days(self) -> int:
        return (self.end - self.start).days

    @property
    def level_name(self) -> str:
        return LEVEL_NAMES.get(self.level, f"Level {self.level}")

    @property
    def children(self) -> Optional[Tuple["Interval", ...]]:
        return self._children

    def contains(self, day: date) -> bool:
        return self.start <= day < self.end

    def ensure_children(self, factory: Callable[[], Iterable["Interval"]]) -> Tuple["Interval", ...]:
        if self._children is None:
            self._children = tuple(factory())
        return self._children

    def elapsed_days(self, as_of: date) -> int:
        if as_of <= self.start:
            return 0
        if as_of >= self.end:
            return self.duration_days
        return (as_of - self.start).days

    def remaining_days(self, as_of: date) -> int:
        return self.duration_days - self.elapsed_days(as_of)

    def progress_percent(self, as_of: date) -> float:
        return round(100.0 * self.elapsed_days(as_of) / self.duration_days, 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "level_name": self.level_name,
            "lord": self.symbol,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "days": self.duration_days,
        }


@dataclass(frozen=True)
class AnchorInput:
    """Birth date plus the running lord and the fraction of it already used.

    ``birth_date`` accepts anything :func:`as_date` does and
    ``progress_fraction`` anything :func:`as_fraction` does; both are
    normalised on construction.
    """

    birth_date: date
    starting_symbol: str
    progress_fraction: Fraction

    def __post_init__(self) -> None:
        try:
            progress = as_fraction(self.progress_fraction)
        except (TypeError, ValueError) as exc:
            raise MissingAnchorError(
                f"progress fraction {self.progress_fraction!r} is not a number"
            ) from exc
        try:
            born = as_date(self.birth_date)
        except (TypeError, ValueError) as exc:
            raise MissingAnchorError(f"birth date {self.birth_date!r} is not a date") from exc
        object.__setattr__(self, "progress_fraction", progress)
        object.__setattr__(self, "birth_date", born)

    def validate(self, table: WeightTable) -> None:
        if self.starting_symbol not in table:
            raise MissingAnchorError(
                f"starting lord {self.starting_symbol!r} is not in table {table.name!r}"
            )
        if not (0 <= self.progress_fraction < 1):
            raise MissingAnchorError(
                f"progress fraction {self.progress_fraction} is outside [0, 1)"
            )


@dataclass(frozen=True)
class TransitionWindow:
    """Sandhi around the boundary between two adjacent sibling periods."""

    from_symbol: str
    to_symbol: str
    level: int
    transition_date: date
    window_start: date
    window_end: date

    def contains(self, day: date) -> bool:
        return self.window_start <= day < self.window_end

    def intersects(self, start: date, end: date) -> bool:
        if self.window_start >= self.window_end or start >= end:
            return False
        return self.window_start < end and start < self.window_end

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "from_lord": self.from_symbol,
            "to_lord": self.to_symbol,
            "transition_date": self.transition_date.isoformat(),
            "window_start": self.window_start.isoformat(),
            "window_end": self.window_end.isoformat(),
        }


def shifted(day: date, days: int) -> date:
    return day + timedelta(days=days)


__all__ = [
    "AnchorInput",
    "Interval",
    "LEVEL_NAMES",
    "MAX_LEVEL",
    "TransitionWindow",
    "as_date",
    "shifted",
]
