"""Exceptions raised by the dasha timeline engine."""

from __future__ import annotations


class DashaError(ValueError):
    """Base class for caller-facing dasha errors."""


class InvalidWeightTableError(DashaError):
    """Raised when a weight table is malformed."""


class MissingAnchorError(DashaError):
    """Raised when the birth anchor cannot seed a timeline."""


class OutOfRangeQueryError(DashaError):
    """Raised when a query date lies outside the computed timeline."""


class InvalidDepthError(DashaError):
    """Raised when a requested nesting level is outside 1..6."""


class IndivisiblePeriodError(DashaError):
    """Raised when a period is too short to hold one day per ring symbol."""


class PartitionConsistencyError(RuntimeError):
    """Raised when a computed partition does not cover its parent."""


__all__ = [
    "DashaError",
    "IndivisiblePeriodError",
    "InvalidDepthError",
    "InvalidWeightTableError",
    "MissingAnchorError",
    "OutOfRangeQueryError",
    "PartitionConsistencyError",
]
