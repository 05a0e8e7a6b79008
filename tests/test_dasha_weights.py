import pytest

from dasha_api.services.vimshottari.errors import InvalidWeightTableError
from dasha_api.services.vimshottari.weights import VIMSHOTTARI, SequenceRing, WeightTable

LETTERS = [("A", 7), ("B", 20), ("C", 6), ("D", 10), ("E", 7), ("F", 18), ("G", 16), ("H", 19), ("I", 17)]


def test_vimshottari_table_matches_classical_years():
    assert VIMSHOTTARI.total_weight() == 120
    assert VIMSHOTTARI.symbols[0] == "Ketu"
    assert VIMSHOTTARI.weight("Venus") == 20
    assert VIMSHOTTARI.weight("Mercury") == 17
    assert sum(w for _, w in VIMSHOTTARI.items()) == 120


def test_ring_successor_wraps_around():
    table = WeightTable(LETTERS, total=120)
    assert table.next("A") == "B"
    assert table.next("I") == "A"


def test_rotate_from_starts_at_symbol_and_keeps_ring_order():
    table = WeightTable(LETTERS, total=120)
    assert table.rotate_from("B") == ["B", "C", "D", "E", "F", "G", "H", "I", "A"]
    assert table.rotate_from("A") == list("ABCDEFGHI")


def test_mapping_entries_keep_insertion_order():
    table = WeightTable(dict(LETTERS), total=120, name="letters")
    assert table.symbols == tuple("ABCDEFGHI")
    assert table.name == "letters"
    assert "C" in table and "Z" not in table


def test_unknown_symbol_lookups_raise_key_error():
    ring = SequenceRing(tuple("ABCDEFGHI"))
    with pytest.raises(KeyError):
        ring.next("Z")
    with pytest.raises(KeyError):
        VIMSHOTTARI.weight("Pluto")


@pytest.mark.parametrize(
    "entries,total",
    [
        (LETTERS[:8], 103),  # too few
        (LETTERS + [("J", 1)], 121),  # too many
        ([("A", 0)] + LETTERS[1:], 113),  # zero weight
        ([("A", -7)] + LETTERS[1:], 99),  # negative weight
        ([("A", 7.0)] + LETTERS[1:], 120),  # non-integer weight
        ([("A", True)] + LETTERS[1:], 114),  # bool is not a weight
        (LETTERS, 121),  # wrong declared total
        ([("B", 7)] + LETTERS[1:], 120),  # duplicate symbol
    ],
)
def test_malformed_tables_are_rejected(entries, total):
    with pytest.raises(InvalidWeightTableError):
        WeightTable(entries, total=total)
