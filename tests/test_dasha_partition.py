from datetime import date, timedelta

import pytest

from dasha_api.services.vimshottari.errors import IndivisiblePeriodError
from dasha_api.services.vimshottari.model import Interval
from dasha_api.services.vimshottari.partition import is_divisible, partition, partition_interval, share_days
from dasha_api.services.vimshottari.weights import VIMSHOTTARI, WeightTable

LETTERS = WeightTable(
    [("A", 7), ("B", 20), ("C", 6), ("D", 10), ("E", 7), ("F", 18), ("G", 16), ("H", 19), ("I", 17)],
    total=120,
    name="letters",
)
# A deliberately lopsided table so tiny parents force clamping and borrowing.
SKEWED = WeightTable(
    [("p", 1), ("q", 1), ("r", 1), ("s", 1), ("t", 1), ("u", 1), ("v", 1), ("w", 1), ("x", 992)],
    total=1000,
    name="skewed",
)

START = date(2003, 7, 2)


def _check_invariants(children, start, duration, order):
    assert [c.symbol for c in children] == order
    assert sum(c.duration_days for c in children) == duration
    assert children[0].start == start
    assert children[-1].end == start + timedelta(days=duration)
    for left, right in zip(children, children[1:]):
        assert left.end == right.start
    assert all(c.duration_days >= 1 for c in children)


@pytest.mark.parametrize("table", [LETTERS, VIMSHOTTARI, SKEWED])
@pytest.mark.parametrize("duration", [9, 10, 11, 17, 34, 100, 203, 365, 1217, 2557, 7300, 7305, 43830])
def test_partition_invariants_hold_for_every_start_symbol(table, duration):
    for symbol in table.symbols:
        children = partition(START, duration, symbol, table, level=2)
        _check_invariants(children, START, duration, table.rotate_from(symbol))
        assert {c.level for c in children} == {2}


def test_scenario_second_mahadasha_children():
    children = partition(START, 7300, "B", LETTERS, level=2)
    assert [c.symbol for c in children] == ["B", "C", "D", "E", "F", "G", "H", "I", "A"]
    assert [c.duration_days for c in children] == [1217, 365, 608, 426, 1095, 973, 1156, 1034, 426]
    assert sum(c.duration_days for c in children) == 7300


def test_last_share_absorbs_rounding_remainder():
    # The first eight lords are rounded on their own; the last is whatever is left.
    days = share_days(100, LETTERS.rotate_from("A"), LETTERS)
    assert sum(days) == 100
    assert days[:8] == [6, 17, 5, 8, 6, 15, 13, 16]
    assert days[8] == 14


def test_ties_and_clamps_are_repaid_by_shrinking_the_nearest_earlier_share():
    # 10 * w / 120 from A: C ties at 0.5 and is clamped to 1, B F H round up,
    # leaving -1 for I. H then F each give back a day.
    days = share_days(10, LETTERS.rotate_from("A"), LETTERS)
    assert days == [1, 2, 1, 1, 1, 1, 1, 1, 1]


def test_minimum_length_parent_gets_one_day_per_lord():
    children = partition(START, 9, "A", LETTERS, level=2)
    assert [c.duration_days for c in children] == [1] * 9


def test_remainder_borrows_from_earlier_shares_when_exhausted():
    # Rotated from "x" the huge share comes first and rounds up past what the
    # eight one-day shares can leave behind.
    days = share_days(12, SKEWED.rotate_from("x"), SKEWED)
    assert sum(days) == 12
    assert all(d >= 1 for d in days)
    assert days[0] == 4


def test_parent_shorter_than_ring_is_indivisible():
    assert not is_divisible(8, LETTERS)
    assert is_divisible(9, LETTERS)
    with pytest.raises(IndivisiblePeriodError):
        partition(START, 8, "A", LETTERS, level=2)


def test_partition_interval_is_self_seeded_and_one_level_deeper():
    parent = Interval("G", START, START + timedelta(days=5844), 2)
    children = partition_interval(parent, LETTERS)
    assert children[0].symbol == "G"
    assert {c.level for c in children} == {3}
    _check_invariants(children, parent.start, parent.duration_days, LETTERS.rotate_from("G"))


def test_partition_labels_children_with_the_given_level():
    children = partition(START, 100, "A", LETTERS, level=4)
    assert {c.level for c in children} == {4}
    with pytest.raises(TypeError):
        partition(START, 100, "A", LETTERS)
