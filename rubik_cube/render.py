"""OpenGL drawing of the piece registry, including the layer currently turning."""
from __future__ import annotations

import logging
import math
from typing import Dict

import numpy as np
from OpenGL.GL import *

from .config import AXIS, COLORS, CORE_COLOR, CUBELET_GAP, CUBELET_SIZE, sanitize_numeric_input
from .pieces import Piece, PieceRegistry
from .rotation import Pivot

logger = logging.getLogger(__name__)


def _set_face_material(face: str, colors: Dict[str, str]) -> None:
    if face in colors and colors[face] in COLORS:
        r, g, b = COLORS[colors[face]]
        glMaterialfv(GL_FRONT, GL_DIFFUSE, (GLfloat * 4)(r, g, b, 1.0))
        glMaterialfv(GL_FRONT, GL_AMBIENT, (GLfloat * 4)(r * 0.3, g * 0.3, b * 0.3, 1.0))
        glMaterialfv(GL_FRONT, GL_SPECULAR, (GLfloat * 4)(0.3, 0.3, 0.3, 1.0))
        glMaterialfv(GL_FRONT, GL_SHININESS, (GLfloat * 1)(20.0))
    else:
        # Dark material for faces without stickers
        r, g, b = CORE_COLOR
        glMaterialfv(GL_FRONT, GL_DIFFUSE, (GLfloat * 4)(r, g, b, 1.0))
        glMaterialfv(GL_FRONT, GL_AMBIENT, (GLfloat * 4)(0.01, 0.01, 0.01, 1.0))


def _face_quads(half: float):
    return [
        ('U', (0.0, 1.0, 0.0), [(-half, half, -half), (-half, half, half), (half, half, half), (half, half, -half)]),
        ('D', (0.0, -1.0, 0.0), [(-half, -half, -half), (half, -half, -half), (half, -half, half), (-half, -half, half)]),
        ('F', (0.0, 0.0, 1.0), [(-half, -half, half), (half, -half, half), (half, half, half), (-half, half, half)]),
        ('B', (0.0, 0.0, -1.0), [(-half, -half, -half), (-half, half, -half), (half, half, -half), (half, -half, -half)]),
        ('R', (1.0, 0.0, 0.0), [(half, -half, -half), (half, half, -half), (half, half, half), (half, -half, half)]),
        ('L', (-1.0, 0.0, 0.0), [(-half, -half, -half), (-half, -half, half), (-half, half, half), (-half, half, -half)]),
    ]


def _orientation_gl(orientation: np.ndarray):
    """Column-major 4x4 matrix for glMultMatrixf from a 3x3 rotation."""
    m = np.identity(4, dtype=np.float32)
    m[:3, :3] = orientation
    return m.T.flatten()


def draw_piece(piece: Piece, pivot: Pivot) -> None:
    """Draw one cubelet at its lattice point, carried by the pivot if it is turning."""
    spacing = sanitize_numeric_input(1.0 + CUBELET_GAP, 1.0, 2.0, 1.03)
    half = sanitize_numeric_input(CUBELET_SIZE / 2.0, 0.1, 1.0, 0.47)
    x, y, z = piece.coords

    glPushMatrix()
    try:
        if pivot.active and pivot.carries(piece):
            ax = AXIS[pivot.axis]
            glRotatef(math.degrees(pivot.angle), ax[0], ax[1], ax[2])
        glTranslatef(float(x * spacing), float(y * spacing), float(z * spacing))
        glMultMatrixf(_orientation_gl(piece.orientation))

        for face_name, normal, vertices in _face_quads(half):
            # Material must be set outside glBegin/glEnd
            _set_face_material(face_name, piece.colors)
            glBegin(GL_QUADS)
            glNormal3f(*normal)
            for vertex in vertices:
                glVertex3f(*vertex)
            glEnd()
    finally:
        glPopMatrix()


def draw_axes() -> None:
    glDisable(GL_LIGHTING)
    glLineWidth(2.0)
    glBegin(GL_LINES)
    # X red
    glColor3f(1, 0, 0)
    glVertex3f(-5, 0, 0)
    glVertex3f(5, 0, 0)
    # Y green
    glColor3f(0, 1, 0)
    glVertex3f(0, -5, 0)
    glVertex3f(0, 5, 0)
    # Z blue
    glColor3f(0, 0, 1)
    glVertex3f(0, 0, -5)
    glVertex3f(0, 0, 5)
    glEnd()
    glEnable(GL_LIGHTING)


def draw_cube(registry: PieceRegistry, pivot: Pivot) -> None:
    for piece in registry:
        if piece.home == (0, 0, 0):
            continue  # hidden core
        try:
            draw_piece(piece, pivot)
        except Exception as e:
            logger.error("Error drawing cubelet %s: %s", piece.key, e)
