"""
Translation between geometric layer moves and face-turn notation.

Geometric directions follow the right-hand rule about the positive global
axis. Face notation is clockwise as seen from outside each face, so for the
three faces whose outward normal points along +x, +y or +z (R, U, F) the sign
is flipped on the way in and out.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

PRIME = "'"
DOUBLE = "2"

# (axis, limit) -> face letter
LAYER_TO_FACE: Dict[Tuple[str, int], str] = {
    ('y', +1): 'U',
    ('y', -1): 'D',
    ('x', +1): 'R',
    ('x', -1): 'L',
    ('z', +1): 'F',
    ('z', -1): 'B',
}
FACE_TO_LAYER = {face: layer for layer, face in LAYER_TO_FACE.items()}

# Faces viewed from the positive end of their axis
INVERTED_FACES = frozenset('URF')


@dataclass(frozen=True)
class LayerMove:
    axis: str
    limit: int
    direction: int

    def inverse(self) -> 'LayerMove':
        return LayerMove(self.axis, self.limit, -self.direction)

    @property
    def notation(self) -> str:
        return to_notation(self.axis, self.limit, self.direction)

    def __str__(self) -> str:
        return self.notation or f"{self.axis}{self.limit:+d}/{self.direction:+d}"


def to_notation(axis: str, limit: int, direction: int) -> str:
    """Face letter plus optional prime for a layer move; '' if (axis, limit) is not a face."""
    face = LAYER_TO_FACE.get((axis, limit))
    if face is None:
        return ""
    effective = -direction if face in INVERTED_FACES else direction
    return face + PRIME if effective == -1 else face


def split_token(token: str) -> Optional[Tuple[str, str]]:
    """(face, suffix) of a token such as "R", "R'" or "R2"; None for anything else."""
    if not token or token[0] not in FACE_TO_LAYER:
        return None
    suffix = token[1:]
    if suffix not in ("", PRIME, DOUBLE):
        return None
    return token[0], suffix


def from_notation(move: str) -> Optional[LayerMove]:
    """
    Layer move for a notation token, or None if it is not a face turn.

    A "2" suffix parses as the single quarter turn; `expand_solution` doubles it.
    """
    parsed = split_token(move)
    if parsed is None:
        return None
    face, suffix = parsed
    layer = FACE_TO_LAYER[face]
    direction = -1 if suffix == PRIME else 1
    if face in INVERTED_FACES:
        direction = -direction
    axis, limit = layer
    return LayerMove(axis, limit, direction)


def expand_solution(tokens: Iterable[str]) -> List[LayerMove]:
    """Quarter turns for a solver's token list; 'X2' yields the X turn twice."""
    moves: List[LayerMove] = []
    for token in tokens:
        move = from_notation(token)
        if move is None:
            logger.warning("Skipping unrecognized move %r", token)
            continue
        moves.append(move)
        if token.endswith(DOUBLE):
            moves.append(move)
    return moves


# The twelve quarter turns, in the order the move buttons list them
MOVES: List[LayerMove] = [
    LayerMove(axis, limit, direction)
    for (axis, limit) in (('y', 1), ('y', -1), ('x', 1), ('x', -1), ('z', 1), ('z', -1))
    for direction in (1, -1)
]
