from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

from .vimshottari.descent import check_depth, children_of, resolve
from .vimshottari.errors import OutOfRangeQueryError
from .vimshottari.model import AnchorInput, Interval, TransitionWindow, as_date
from .vimshottari.sandhi import Percent, collect_upcoming, default_window_percent
from .vimshottari.timeline import build as build_timeline
from .vimshottari.weights import VIMSHOTTARI, WeightTable

logger = logging.getLogger(__name__)


class DashaTimeline:
    """Query surface over one chart's Mahadasha list and its lazy sub-periods.

    Sub-periods are cached on the intervals the first time a query touches
    them. A timeline is meant for one thread at a time; to share it
    read-only, pre-expand the needed range with :meth:`intervals_at_level`.
    """

    def __init__(self, anchor: AnchorInput, table: WeightTable, level_one: Sequence[Interval]) -> None:
        self.anchor = anchor
        self.table = table
        self._level_one = tuple(level_one)

    @classmethod
    def build(
        cls,
        anchor: AnchorInput,
        table: WeightTable = VIMSHOTTARI,
        horizon_intervals: Optional[int] = None,
        year_length_days=None,
    ) -> "DashaTimeline":
        return cls(anchor, table, build_timeline(anchor, table, horizon_intervals, year_length_days))

    @property
    def start(self) -> date:
        return self._level_one[0].start

    @property
    def end(self) -> date:
        return self._level_one[-1].end

    def top_level_overview(self) -> List[Interval]:
        return list(self._level_one)

    def resolve(self, day, max_level: int = 3) -> List[Interval]:
        return resolve(self._level_one, as_date(day), max_level, self.table)

    def next_top_level(self, after) -> Optional[Interval]:
        """First Mahadasha starting strictly after ``after``."""

        day = as_date(after)
        return next((iv for iv in self._level_one if iv.start > day), None)

    def intervals_at_level(self, level: int, start, end) -> List[Interval]:
        """Every level-``level`` period overlapping ``[start, end)``, in order.

        Periods too short to split have no descendants, so the result can
        contain gaps below such a period.
        """

        check_depth(level)
        lo, hi = as_date(start), as_date(end)
        return list(self._walk(self._level_one, level, lo, hi))

    def _walk(self, intervals: Sequence[Interval], level: int, lo: date, hi: date) -> Iterator[Interval]:
        for iv in intervals:
            if iv.end <= lo or iv.start >= hi:
                continue
            if iv.level == level:
                yield iv
                continue
            children = children_of(iv, self.table)
            if children is not None:
                yield from self._walk(children, level, lo, hi)

    def upcoming_transitions(
        self,
        level: int,
        from_date,
        horizon_days: int,
        window_percent_for: Optional[Callable[[int], Percent]] = None,
    ) -> List[TransitionWindow]:
        """Sandhi windows at ``level`` overlapping the next ``horizon_days`` days."""

        lo = as_date(from_date)
        try:
            hi = lo + timedelta(days=horizon_days)
        except OverflowError as exc:
            raise OutOfRangeQueryError(f"{horizon_days} days after {lo} is past the last representable date") from exc
        span = self.intervals_at_level(level, lo, hi)
        if span:
            # Window percents are at most 1, so a window never reaches past
            # either neighbour and one extra period on each side is enough.
            before = self.intervals_at_level(level, span[0].start - timedelta(days=1), span[0].start)
            after = self.intervals_at_level(level, span[-1].end, span[-1].end + timedelta(days=1))
            span = before[-1:] + span + after[:1]
        percent_for = window_percent_for or default_window_percent
        windows: List[TransitionWindow] = []
        for run in _contiguous_runs(span):
            windows.extend(collect_upcoming(run, lo, horizon_days, percent_for))
        windows.sort(key=lambda w: w.transition_date)
        logger.debug(
            "dasha_transitions_collected",
            extra={"level": level, "from_date": lo.isoformat(), "horizon_days": horizon_days, "count": len(windows)},
        )
        return windows


def _contiguous_runs(intervals: Sequence[Interval]) -> List[List[Interval]]:
    runs: List[List[Interval]] = []
    for iv in intervals:
        if runs and runs[-1][-1].end == iv.start:
            runs[-1].append(iv)
        else:
            runs.append([iv])
    return runs


def describe_chain(chain: Sequence[Interval]) -> str:
    return "-".join(iv.symbol for iv in chain)


def compute_vimshottari(chart_input: Dict[str, Any], levels: int = 2, ayanamsha: str = "lahiri") -> List[Dict[str, Any]]:
    """
    Returns list of dasha periods with ISO start/end dates.
    Algorithm:
      - Moon's sidereal lon at birth -> nakshatra, its lord and the fraction traversed
      - Balance of the birth Mahadasha = (1 - fraction traversed) * Maha years
      - Full Mahadashas follow in ring order up to the configured horizon
      - levels == 2 adds each Mahadasha's Antardashas, self-seeded from its lord
    """
    from .vedic import anchor_for_chart

    anchor = anchor_for_chart(chart_input, ayanamsha=ayanamsha)
    return flat_periods(DashaTimeline.build(anchor), levels)


def flat_periods(timeline: DashaTimeline, levels: int = 2) -> List[Dict[str, Any]]:
    """Mahadashas, then (for ``levels >= 2``) every Antardasha tagged with its parent lord."""

    periods = [{**maha.to_dict(), "parent": None} for maha in timeline.top_level_overview()]
    if levels >= 2:
        for maha in timeline.top_level_overview():
            for antar in children_of(maha, timeline.table) or ():
                periods.append({**antar.to_dict(), "parent": maha.symbol})
    return periods


__all__ = ["DashaTimeline", "compute_vimshottari", "describe_chain", "flat_periods"]
