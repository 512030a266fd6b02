import math

from rubik_cube import config
from rubik_cube.config import sanitize_numeric_input, sanitize_string_input


def test_numeric_clamps_and_defaults():
    assert sanitize_numeric_input(500, 0, 100, 5) == 100
    assert sanitize_numeric_input(-3, 0, 100, 5) == 0
    assert sanitize_numeric_input(None, 0, 100, 5) == 5
    assert sanitize_numeric_input("7", 0, 100, 5) == 5
    assert sanitize_numeric_input(math.nan, 0, 100, 5) == 5
    assert sanitize_numeric_input(True, 0, 100, 5) == 5


def test_string_must_be_allowed():
    assert sanitize_string_input("x", ["x", "y"]) == "x"
    assert sanitize_string_input("w", ["x", "y"], "y") == "y"
    assert sanitize_string_input(3, ["x"]) == ""


def test_timing_defaults():
    assert config.SHUFFLE_MOVES == 6
    assert config.SHUFFLE_DURATION_MS < config.SOLVE_DURATION_MS < config.TURN_DURATION_MS
    assert config.LAYER_TOLERANCE == 0.1
