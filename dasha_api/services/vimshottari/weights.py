"""Dasha lords, their weights and the cyclic order they run in.

A :class:`WeightTable` is the pluggable piece of the engine: the partitioner
and timeline builder only ever ask it for a symbol's weight, the cycle total
and the ring order, so an alternate nine-lord system can be swapped in
without touching the algorithm.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence, Tuple, Union

from .errors import InvalidWeightTableError

RING_SIZE = 9


@dataclass(frozen=True)
class SequenceRing:
    """Fixed cyclic ordering of the dasha lords."""

    symbols: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.symbols

    def index(self, symbol: str) -> int:
        try:
            return self.symbols.index(symbol)
        except ValueError:
            raise KeyError(symbol) from None

    def next(self, symbol: str) -> str:
        return self.symbols[(self.index(symbol) + 1) % len(self.symbols)]

    def rotate_from(self, symbol: str) -> list[str]:
        start = self.index(symbol)
        return [self.symbols[(start + i) % len(self.symbols)] for i in range(len(self.symbols))]


WeightEntries = Union[Mapping[str, int], Sequence[Tuple[str, int]]]


class WeightTable:
    """Immutable symbol → weight mapping whose weights sum to ``total``.

    Entries are given in ring order, either as an ordered mapping or as a
    sequence of ``(symbol, weight)`` pairs.
    """

    def __init__(self, entries: WeightEntries, total: int, name: str = "custom") -> None:
        pairs = list(entries.items()) if isinstance(entries, Mapping) else list(entries)
        _validate(pairs, total, name)
        self._name = name
        self._weights = dict(pairs)
        self._total = total
        self._ring = SequenceRing(tuple(symbol for symbol, _ in pairs))

    @property
    def name(self) -> str:
        return self._name

    @property
    def symbols(self) -> Tuple[str, ...]:
        return self._ring.symbols

    def __len__(self) -> int:
        return len(self._ring)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._weights

    def __repr__(self) -> str:
        return f"WeightTable(name={self._name!r}, total={self._total})"

    def weight(self, symbol: str) -> int:
        try:
            return self._weights[symbol]
        except KeyError:
            raise KeyError(f"unknown dasha lord {symbol!r} for table {self._name!r}") from None

    def total_weight(self) -> int:
        return self._total

    def next(self, symbol: str) -> str:
        return self._ring.next(symbol)

    def rotate_from(self, symbol: str) -> list[str]:
        return self._ring.rotate_from(symbol)

    def items(self) -> Iterable[Tuple[str, int]]:
        return ((symbol, self._weights[symbol]) for symbol in self._ring.symbols)


def _validate(pairs: list, total: int, name: str) -> None:
    if len(pairs) != RING_SIZE:
        raise InvalidWeightTableError(
            f"table {name!r} has {len(pairs)} entries; expected {RING_SIZE}"
        )
    seen: set[str] = set()
    running = 0
    for symbol, weight in pairs:
        if symbol in seen:
            raise InvalidWeightTableError(f"table {name!r} repeats symbol {symbol!r}")
        seen.add(symbol)
        # bool is an int subclass; a True weight is a typo, not a 1.
        if isinstance(weight, bool) or not isinstance(weight, int) or weight <= 0:
            raise InvalidWeightTableError(
                f"table {name!r} has non-positive or non-integer weight {weight!r} for {symbol!r}"
            )
        running += weight
    if isinstance(total, bool) or not isinstance(total, int) or running != total:
        raise InvalidWeightTableError(
            f"table {name!r} weights sum to {running}, declared total is {total!r}"
        )


# Vimshottari order and full years per Maha
VIMSHOTTARI = WeightTable(
    [
        ("Ketu", 7),
        ("Venus", 20),
        ("Sun", 6),
        ("Moon", 10),
        ("Mars", 7),
        ("Rahu", 18),
        ("Jupiter", 16),
        ("Saturn", 19),
        ("Mercury", 17),
    ],
    total=120,
    name="vimshottari",
)


__all__ = ["RING_SIZE", "SequenceRing", "VIMSHOTTARI", "WeightTable"]
