"""Tests for the result rotator."""

import pytest

from birdrec.rotator import DEFAULT_TABLE, BirdEntry, ResultRotator


def test_default_table_order():
    assert [e.name for e in DEFAULT_TABLE] == [
        "Song Sparrow",
        "Northern Mockingbird",
        "American Robin",
        "Song Sparrow",
        "Northern Cardinal",
        "Bewick's Wren",
    ]


def test_duplicate_entry_preserved():
    assert DEFAULT_TABLE[0] == DEFAULT_TABLE[3]
    assert len({e.name for e in DEFAULT_TABLE}) == 5


def test_next_visits_table_in_order_and_wraps():
    rotator = ResultRotator()
    names = [rotator.next().name for _ in range(7)]
    assert names == [
        "Song Sparrow",
        "Northern Mockingbird",
        "American Robin",
        "Song Sparrow",
        "Northern Cardinal",
        "Bewick's Wren",
        "Song Sparrow",
    ]
    assert rotator.cursor == 1


def test_cursor_advances_modulo_length():
    rotator = ResultRotator()
    assert rotator.cursor == 0
    for expected in [1, 2, 3, 4, 5, 0, 1]:
        rotator.next()
        assert rotator.cursor == expected


def test_peek_does_not_advance():
    rotator = ResultRotator()
    assert rotator.peek().name == "Song Sparrow"
    assert rotator.cursor == 0


def test_decibel_strings():
    rotator = ResultRotator()
    assert [rotator.next().decibel_range for _ in range(6)] == [
        "55.7 dB", "71.8 dB", "52.8 dB", "55.7 dB", "33.2 dB", "90.5 dB",
    ]


def test_images():
    assert {e.name: e.image for e in DEFAULT_TABLE} == {
        "Song Sparrow": "so_spar.png",
        "Northern Mockingbird": "no_mock.png",
        "American Robin": "am_robi.png",
        "Northern Cardinal": "no_card.png",
        "Bewick's Wren": "be_wren.png",
    }
    assert BirdEntry("Dodo", "0 dB").image is None


def test_custom_table():
    rotator = ResultRotator([BirdEntry("A", "1 dB"), BirdEntry("B", "2 dB")])
    assert len(rotator) == 2
    assert [rotator.next().name for _ in range(3)] == ["A", "B", "A"]


def test_empty_table_rejected():
    with pytest.raises(ValueError):
        ResultRotator([])
