"""
Solving collaborator.

The solver never looks at the rendered pieces. It replays the notation
history on its own sticker model of a fresh cube, serialises that to the
54-character facelet string expected by kociemba and returns kociemba's
answer as a list of notation tokens.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from .config import FACE_NORMALS, NORMAL_TO_FACE
from .notation import DOUBLE, PRIME, split_token
from .pieces import home_colors

logger = logging.getLogger(__name__)

Vector = Tuple[int, int, int]

# Facelet order of the kociemba cube definition string
FACELET_ORDER = "URFDLB"

# Clockwise quarter turn of each face: (axis, layer, right-hand sign)
MOVE_DEFS = {
    'U': ('y', +1, -1),
    'D': ('y', -1, +1),
    'R': ('x', +1, -1),
    'L': ('x', -1, +1),
    'F': ('z', +1, -1),
    'B': ('z', -1, +1),
}


def _rot_about_axis(vec: Vector, axis: str, sign: int) -> Vector:
    """Rotate an integer vector by +/-90 degrees about a global axis (right-hand rule)."""
    x, y, z = vec
    if axis == 'y':  # (x,z) -> (z,-x) for +90
        return (z, y, -x) if sign > 0 else (-z, y, x)
    if axis == 'x':  # (y,z) -> (-z, y) for +90
        return (x, -z, y) if sign > 0 else (x, z, -y)
    # 'z': (x,y) -> (-y, x) for +90
    return (-y, x, z) if sign > 0 else (y, -x, z)


def _facelet_position(face: str, row: int, col: int) -> Vector:
    """Lattice point of the facelet at (row, col) of `face` in the unfolded net."""
    if face == 'U':
        return (col - 1, 1, row - 1)
    if face == 'R':
        return (1, 1 - row, 1 - col)
    if face == 'F':
        return (col - 1, 1 - row, 1)
    if face == 'D':
        return (col - 1, -1, 1 - row)
    if face == 'L':
        return (-1, 1 - row, col - 1)
    return (1 - col, 1 - row, -1)  # 'B'


FACELET_SLOTS: List[Tuple[Vector, str]] = [
    (_facelet_position(face, row, col), face)
    for face in FACELET_ORDER
    for row in range(3)
    for col in range(3)
]


@dataclass
class Cubelet:
    pos: Vector
    faces: Dict[str, str]  # face the sticker currently points to -> sticker colour


class ReferenceCube:
    """Sticker model of a cube driven purely by face-turn notation."""

    def __init__(self) -> None:
        self.cubelets: List[Cubelet] = []
        self.reset_solved()

    def reset_solved(self) -> None:
        self.cubelets.clear()
        for x in (-1, 0, 1):
            for y in (-1, 0, 1):
                for z in (-1, 0, 1):
                    if x == 0 and y == 0 and z == 0:
                        continue
                    self.cubelets.append(Cubelet((x, y, z), home_colors(x, y, z)))

    def apply_turn(self, face: str, prime: bool = False, times: int = 1) -> None:
        axis, layer, sign = MOVE_DEFS[face]
        if prime:
            sign = -sign
        index = 'xyz'.index(axis)
        for _ in range(times):
            for cubie in self.cubelets:
                if cubie.pos[index] != layer:
                    continue
                cubie.pos = _rot_about_axis(cubie.pos, axis, sign)
                cubie.faces = {
                    NORMAL_TO_FACE[_rot_about_axis(FACE_NORMALS[f], axis, sign)]: color
                    for f, color in cubie.faces.items()
                }

    def apply(self, token: str) -> bool:
        """Apply one notation token ('R', "R'", 'R2'); False if it is not a face turn."""
        parsed = split_token(token)
        if parsed is None:
            logger.warning("Invalid move: %r", token)
            return False
        face, suffix = parsed
        self.apply_turn(face, prime=suffix == PRIME, times=2 if suffix == DOUBLE else 1)
        return True

    def apply_sequence(self, tokens: Iterable[str]) -> 'ReferenceCube':
        for token in tokens:
            self.apply(token)
        return self

    def to_facelets(self) -> str:
        lookup = {}
        for cubie in self.cubelets:
            for face, color in cubie.faces.items():
                lookup[(cubie.pos, face)] = color
        return "".join(lookup[slot] for slot in FACELET_SLOTS)

    def is_solved(self) -> bool:
        for cubie in self.cubelets:
            for face, color in cubie.faces.items():
                if face != color:
                    return False
        return True


class Solver(Protocol):
    def solve(self, history: Sequence[str]) -> List[str]:
        ...


class KociembaSolver:
    """Two-phase solver adapter; the kociemba module is loaded on first use."""

    def __init__(self) -> None:
        self._kociemba = None

    def _initialize(self):
        if self._kociemba is None:
            import kociemba
            self._kociemba = kociemba
            logger.info("Solver initialized")
        return self._kociemba

    def solve(self, history: Sequence[str]) -> List[str]:
        cube = ReferenceCube().apply_sequence(history)
        if cube.is_solved():
            logger.info("Cube already solved, nothing to do")
            return []
        facelets = cube.to_facelets()
        try:
            solution: Optional[str] = self._initialize().solve(facelets)
        except ValueError as e:
            logger.error("Solver rejected facelet string %s: %s", facelets, e)
            return []
        if not solution:
            return []
        return [m for m in solution.strip().split() if m]
