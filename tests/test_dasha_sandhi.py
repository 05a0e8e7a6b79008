from datetime import date, timedelta
from fractions import Fraction

import pytest

from dasha_api.services.vimshottari.model import Interval
from dasha_api.services.vimshottari.sandhi import collect_upcoming, default_window_percent, half_window_days

START = date(2003, 7, 2)


def _pair(d1, d2, level=1):
    left = Interval("B", START, START + timedelta(days=d1), level)
    right = Interval("C", left.end, left.end + timedelta(days=d2), level)
    return left, right


@pytest.mark.parametrize(
    "percent,d1,d2,expected",
    [
        ("0.05", 7300, 2190, 55),  # 54.75
        ("0.10", 25, 400, 1),  # 1.25
        ("0.10", 30, 30, 2),  # 1.5, tie to even
        ("0.10", 50, 60, 2),  # 2.5, tie to even
        ("0.20", 4, 9, 0),  # 0.4
    ],
)
def test_half_window_uses_shorter_neighbour(percent, d1, d2, expected):
    left, right = _pair(d1, d2)
    assert half_window_days(percent, left, right) == expected


def test_window_is_centred_on_the_boundary():
    left, right = _pair(7300, 2190)
    windows = collect_upcoming([left, right], left.end - timedelta(days=10), 20, lambda level: "0.05")
    assert len(windows) == 1
    window = windows[0]
    assert (window.from_symbol, window.to_symbol, window.level) == ("B", "C", 1)
    assert window.transition_date == left.end
    assert window.window_start == left.end - timedelta(days=55)
    assert window.window_end == left.end + timedelta(days=55)
    assert window.contains(left.end)
    assert not window.contains(window.window_end)


def test_window_reported_only_when_it_meets_the_horizon():
    left, right = _pair(7300, 2190)
    pct = lambda level: "0.05"
    ws = left.end - timedelta(days=55)
    we = left.end + timedelta(days=55)
    # Horizon ends exactly where the window starts: no overlap.
    assert collect_upcoming([left, right], ws - timedelta(days=10), 10, pct) == []
    assert len(collect_upcoming([left, right], ws - timedelta(days=10), 11, pct)) == 1
    # Horizon starts on the exclusive window end: no overlap.
    assert collect_upcoming([left, right], we, 365, pct) == []
    assert len(collect_upcoming([left, right], we - timedelta(days=1), 1, pct)) == 1


def test_every_adjacent_pair_is_considered_in_order():
    a = Interval("A", START, START + timedelta(days=100), 2)
    b = Interval("B", a.end, a.end + timedelta(days=100), 2)
    c = Interval("C", b.end, b.end + timedelta(days=100), 2)
    windows = collect_upcoming([a, b, c], START, 300, default_window_percent)
    assert [(w.from_symbol, w.to_symbol) for w in windows] == [("A", "B"), ("B", "C")]
    # level 2 default is 10%: 100 * 0.10 / 2 = 5 days each side
    assert windows[0].window_end - windows[0].window_start == timedelta(days=10)


def test_non_adjacent_siblings_are_rejected():
    a = Interval("A", START, START + timedelta(days=10), 1)
    b = Interval("B", a.end + timedelta(days=1), a.end + timedelta(days=20), 1)
    with pytest.raises(ValueError):
        collect_upcoming([a, b], START, 30)


def test_zero_width_window_never_matches():
    left, right = _pair(4, 9)
    assert collect_upcoming([left, right], START, 30, lambda level: "0.20") == []


def test_default_percentages_per_level():
    assert default_window_percent(1) == Fraction(1, 20)
    assert default_window_percent(2) == Fraction(1, 10)
    assert default_window_percent(3) == Fraction(3, 20)
    assert default_window_percent(6) == Fraction(1, 5)


def test_percentages_can_be_overridden_from_environment(monkeypatch):
    monkeypatch.setenv("DASHA_SANDHI_PERCENTS", "0.1,0.1,0.1,0.1,0.1,0.5")
    assert default_window_percent(1) == Fraction(1, 10)
    assert default_window_percent(6) == Fraction(1, 2)
    monkeypatch.setenv("DASHA_SANDHI_PERCENTS", "0.1,0.2")
    assert default_window_percent(1) == Fraction(1, 20)


def test_empty_horizon_reports_nothing():
    left, right = _pair(7300, 2190)
    pct = lambda level: "0.05"
    # The window straddles left.end, but [left.end, left.end) holds no day.
    assert collect_upcoming([left, right], left.end, 0, pct) == []
    assert len(collect_upcoming([left, right], left.end, 1, pct)) == 1


@pytest.mark.parametrize("percent", ["1.01", "10", "-0.05"])
def test_window_percent_outside_unit_range_is_rejected(percent):
    left, right = _pair(100, 100)
    with pytest.raises(ValueError):
        half_window_days(percent, left, right)
    with pytest.raises(ValueError):
        collect_upcoming([left, right], START, 300, lambda level: percent)


def test_full_percent_window_spans_the_shorter_neighbour():
    left, right = _pair(100, 40)
    assert half_window_days(1, left, right) == 20
