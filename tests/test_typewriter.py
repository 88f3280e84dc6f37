from itertools import islice

from hacklearn.typewriter import typewriter_frames


def test_types_holds_erases_then_moves_on() -> None:
    frames = list(islice(typewriter_frames(["ab", "c"], delay=100, hold=900, erase_delay=40), 9))
    assert frames == [
        ("a", 100),
        ("ab", 100),
        ("ab", 900),
        ("a", 40),
        ("", 40),
        ("c", 100),
        ("c", 900),
        ("", 40),
        ("a", 100),
    ]


def test_empty_word_list_yields_nothing() -> None:
    assert list(typewriter_frames([])) == []


def test_defaults() -> None:
    first = next(typewriter_frames(["Notes"]))
    assert first == ("N", 100)
