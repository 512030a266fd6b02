"""Layer selection: which pieces currently sit in a given outer layer."""
from __future__ import annotations

from typing import Iterable, List

from .config import LAYER_TOLERANCE
from .pieces import Piece

AXIS_INDEX = {'x': 0, 'y': 1, 'z': 2}

# The six turnable layers, (axis, limit)
FACE_LAYERS = [(axis, limit) for axis in ('x', 'y', 'z') for limit in (-1, 1)]


def is_face_layer(axis: str, limit: int) -> bool:
    return (axis, limit) in FACE_LAYERS


def select_layer(pieces: Iterable[Piece], axis: str, limit: int,
                 tolerance: float = LAYER_TOLERANCE) -> List[Piece]:
    """
    Pieces whose `axis` coordinate, rounded, equals `limit`.

    Evaluated from the current positions on every call since membership
    changes after each completed turn. Anything other than one of the six
    face layers (an unknown axis, the middle slice) selects nothing.
    """
    if not is_face_layer(axis, limit):
        return []
    index = AXIS_INDEX[axis]
    return [p for p in pieces
            if abs(round(float(p.position[index])) - limit) < tolerance]
