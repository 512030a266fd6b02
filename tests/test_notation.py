import pytest

from rubik_cube.notation import MOVES, LayerMove, expand_solution, from_notation, split_token, to_notation


@pytest.mark.parametrize("axis, limit, direction, expected", [
    ("x", 1, 1, "R'"),
    ("x", -1, 1, "L"),
    ("y", 1, -1, "U"),
    ("y", 1, 1, "U'"),
    ("y", -1, 1, "D"),
    ("z", 1, -1, "F"),
    ("z", -1, -1, "B'"),
])
def test_to_notation(axis, limit, direction, expected):
    assert to_notation(axis, limit, direction) == expected


def test_from_notation_r():
    assert from_notation("R") == LayerMove("x", 1, -1)


@pytest.mark.parametrize("move", MOVES, ids=str)
def test_round_trip(move):
    assert from_notation(to_notation(move.axis, move.limit, move.direction)) == move


def test_twelve_distinct_notations():
    names = {m.notation for m in MOVES}
    assert names == {f + s for f in "UDRLFB" for s in ("", "'")}


def test_middle_layer_has_no_notation():
    assert to_notation("x", 0, 1) == ""
    assert to_notation("w", 1, 1) == ""


@pytest.mark.parametrize("token", ["X", "", "u", "2", "M'", "R'x", "L22", "F2'", "U''", "B "])
def test_unknown_letter_is_not_a_move(token):
    assert from_notation(token) is None


def test_inverse_flips_marker():
    move = from_notation("F'")
    assert move.inverse().notation == "F"
    assert move.inverse().inverse() == move


def test_expand_solution_doubles_and_skips():
    moves = expand_solution(["R2", "U'", "Q", "F"])
    assert [m.notation for m in moves] == ["R", "R", "U'", "F"]


def test_split_token_reads_exact_suffix():
    assert split_token("R") == ("R", "")
    assert split_token("R'") == ("R", "'")
    assert split_token("D2") == ("D", "2")
    assert split_token("R'x") is None
    assert split_token("L22") is None


def test_expand_solution_skips_malformed_tokens():
    moves = expand_solution(["L22", "B2", "R'x"])
    assert [m.notation for m in moves] == ["B", "B"]
