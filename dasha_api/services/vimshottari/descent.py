"""On-demand descent from a Mahadasha to finer sub-periods.

Sub-periods are computed only along the branches a query touches and are
cached on their parent, so resolving a date to six levels costs at most six
partitions the first time and nothing on repeat queries within that branch.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from datetime import date
from typing import List, Optional, Sequence, Tuple

from .errors import InvalidDepthError, OutOfRangeQueryError, PartitionConsistencyError
from .model import MAX_LEVEL, Interval
from .partition import is_divisible, partition_interval
from .weights import WeightTable

logger = logging.getLogger(__name__)


def check_depth(max_level: int) -> None:
    if isinstance(max_level, bool) or not isinstance(max_level, int) or not 1 <= max_level <= MAX_LEVEL:
        raise InvalidDepthError(f"level must be between 1 and {MAX_LEVEL}, got {max_level!r}")


def children_of(interval: Interval, table: WeightTable) -> Optional[Tuple[Interval, ...]]:
    """Cached sub-periods of ``interval``, or ``None`` if it is too short to split."""

    if interval.children is not None:
        return interval.children
    if not is_divisible(interval.duration_days, table):
        return None
    children = interval.ensure_children(lambda: partition_interval(interval, table))
    logger.debug(
        "dasha_children_expanded",
        extra={"lord": interval.symbol, "level": interval.level, "start": interval.start.isoformat()},
    )
    return children


def find_containing(intervals: Sequence[Interval], day: date) -> Optional[Interval]:
    """The interval of a contiguous, sorted run that contains ``day``."""

    if not intervals or day < intervals[0].start or day >= intervals[-1].end:
        return None
    idx = bisect_right([iv.start for iv in intervals], day) - 1
    candidate = intervals[idx]
    return candidate if candidate.contains(day) else None


def resolve(
    level_one: Sequence[Interval],
    day: date,
    max_level: int,
    table: WeightTable,
) -> List[Interval]:
    """Active chain at ``day``, outermost first, ``max_level`` deep at most.

    The chain is shorter than ``max_level`` only when a period on the path is
    too short to be split into whole-day sub-periods.
    """

    check_depth(max_level)
    if not level_one:
        raise OutOfRangeQueryError("timeline is empty")
    if day < level_one[0].start:
        raise OutOfRangeQueryError(
            f"{day.isoformat()} is before birth ({level_one[0].start.isoformat()})"
        )
    current = find_containing(level_one, day)
    if current is None:
        raise OutOfRangeQueryError(
            f"{day.isoformat()} is at or after the timeline end ({level_one[-1].end.isoformat()})"
        )

    chain = [current]
    while len(chain) < max_level:
        children = children_of(current, table)
        if children is None:
            logger.debug(
                "dasha_descent_stopped",
                extra={"lord": current.symbol, "level": current.level, "days": current.duration_days},
            )
            break
        child = find_containing(children, day)
        if child is None:
            raise PartitionConsistencyError(
                f"no sub-period of {current.symbol} ({current.start}..{current.end}) contains {day}"
            )
        chain.append(child)
        current = child
    return chain


__all__ = ["check_depth", "children_of", "find_containing", "resolve"]
