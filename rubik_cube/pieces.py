"""Piece registry: the 27 cubelets and their integer lattice placement."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

import numpy as np

from .config import FACE_NORMALS, NORMAL_TO_FACE

Vector = Tuple[int, int, int]

LATTICE = (-1, 0, 1)


def home_colors(x: int, y: int, z: int) -> Dict[str, str]:
    """Sticker colours of the cubelet that starts at (x, y, z), keyed by local face."""
    faces: Dict[str, str] = {}
    if y == 1: faces['U'] = 'U'
    if y == -1: faces['D'] = 'D'
    if x == -1: faces['L'] = 'L'
    if x == 1: faces['R'] = 'R'
    if z == 1: faces['F'] = 'F'
    if z == -1: faces['B'] = 'B'
    return faces


@dataclass(eq=False)
class Piece:
    key: str
    home: Vector
    position: np.ndarray = field(repr=False)      # int vector, components in {-1, 0, 1}
    orientation: np.ndarray = field(repr=False)   # 3x3 int rotation, local -> global
    colors: Dict[str, str] = field(default_factory=dict)  # local face -> colour, fixed at creation

    @property
    def coords(self) -> Vector:
        x, y, z = (int(c) for c in self.position)
        return (x, y, z)

    def sticker_normals(self) -> Dict[str, Vector]:
        """Global outward normal of each coloured sticker, keyed by colour."""
        normals: Dict[str, Vector] = {}
        for local_face, color in self.colors.items():
            n = self.orientation @ np.array(FACE_NORMALS[local_face])
            normals[color] = (int(n[0]), int(n[1]), int(n[2]))
        return normals


class PieceRegistry:
    """
    Holds the 27 pieces of the cube, one per point of the {-1,0,1}^3 lattice.

    Pieces are created once; `reset` moves the same objects back home rather
    than rebuilding them, so keys held by a renderer stay valid.
    """

    def __init__(self) -> None:
        self._pieces: List[Piece] = []
        for x in LATTICE:
            for y in LATTICE:
                for z in LATTICE:
                    self._pieces.append(Piece(
                        key=f"{x}-{y}-{z}",
                        home=(x, y, z),
                        position=np.array([x, y, z], dtype=int),
                        orientation=np.identity(3, dtype=int),
                        colors=home_colors(x, y, z),
                    ))
        self._by_key = {p.key: p for p in self._pieces}

    def __iter__(self) -> Iterator[Piece]:
        return iter(self._pieces)

    def __len__(self) -> int:
        return len(self._pieces)

    def piece(self, key: str) -> Piece:
        return self._by_key[key]

    def positions(self) -> Dict[str, Vector]:
        return {p.key: p.coords for p in self._pieces}

    @staticmethod
    def commit_position(piece: Piece, vector) -> None:
        """Overwrite a piece's position with `vector` rounded to integers."""
        piece.position = np.rint(np.asarray(vector, dtype=float)).astype(int)

    @staticmethod
    def commit_orientation(piece: Piece, matrix) -> None:
        piece.orientation = np.rint(np.asarray(matrix, dtype=float)).astype(int)

    def reset(self) -> None:
        """Put every piece back on its home lattice point, unrotated."""
        for p in self._pieces:
            p.position = np.array(p.home, dtype=int)
            p.orientation = np.identity(3, dtype=int)

    def is_solved(self) -> bool:
        """True when every sticker faces the side its colour belongs to."""
        for p in self._pieces:
            for color, normal in p.sticker_normals().items():
                if NORMAL_TO_FACE.get(normal) != color:
                    return False
        return True
