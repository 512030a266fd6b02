import random
from typing import List, Sequence

import pytest

from rubik_cube.config import NORMAL_TO_FACE
from rubik_cube.controller import CubeController
from rubik_cube.pieces import PieceRegistry
from rubik_cube.rotation import LayerRotator, SimulatedClock
from rubik_cube.solver import FACELET_SLOTS


def invert_token(token: str) -> str:
    return token[0] if token.endswith("'") else token + "'"


class InverseSolver:
    """Solves by undoing the recorded history move by move."""

    def __init__(self):
        self.calls: List[Sequence[str]] = []

    def solve(self, history):
        self.calls.append(tuple(history))
        return [invert_token(t) for t in reversed(history)]


class ScriptedSolver:
    def __init__(self, solution):
        self.solution = list(solution)
        self.calls = []

    def solve(self, history):
        self.calls.append(tuple(history))
        return list(self.solution)


class FailingSolver:
    def __init__(self, error=None):
        self.error = error if error is not None else RuntimeError("search failed")
        self.calls = []

    def solve(self, history):
        self.calls.append(tuple(history))
        raise self.error


def registry_facelets(registry: PieceRegistry) -> str:
    """Facelet string of the piece registry, in the kociemba URFDLB order."""
    lookup = {}
    for piece in registry:
        for color, normal in piece.sticker_normals().items():
            lookup[(piece.coords, NORMAL_TO_FACE[normal])] = color
    return "".join(lookup[slot] for slot in FACELET_SLOTS)


@pytest.fixture
def registry():
    return PieceRegistry()


@pytest.fixture
def clock():
    return SimulatedClock(step_ms=10.0)


@pytest.fixture
def rotator(registry, clock):
    return LayerRotator(registry, clock)


@pytest.fixture
def inverse_solver():
    return InverseSolver()


@pytest.fixture
def controller(registry, rotator, inverse_solver):
    return CubeController(registry, rotator, inverse_solver, rng=random.Random(1234))
