"""
Animated quarter turns of a single layer.

A turn attaches the layer's pieces to a pivot at the cube centre, eases the
pivot angle from 0 to +/-90 degrees over the requested duration (one step per
display frame), then bakes the pivot rotation into each piece and rounds the
result back onto the integer lattice.
"""
from __future__ import annotations

import asyncio
import logging
import math
from typing import List, Optional

import numpy as np

from .config import DEFAULT_DURATION_MS, SIMULATED_FRAME_MS
from .layers import select_layer
from .pieces import Piece, PieceRegistry

logger = logging.getLogger(__name__)


# -----------------------------
# Frame clocks
# -----------------------------

class FrameClock:
    """
    Hands out display-refresh timestamps to coroutines waiting for the next frame.

    The render loop calls `tick` once per frame; every coroutine suspended in
    `next_frame` is resumed with that frame's timestamp.
    """

    def __init__(self, now_ms: float = 0.0) -> None:
        self._now_ms = float(now_ms)
        self._waiters: List[asyncio.Future] = []

    def now(self) -> float:
        return self._now_ms

    async def next_frame(self) -> float:
        fut = asyncio.get_running_loop().create_future()
        self._waiters.append(fut)
        return await fut

    def tick(self, now_ms: float) -> None:
        self._now_ms = float(now_ms)
        waiters, self._waiters = self._waiters, []
        for fut in waiters:
            if not fut.done():
                fut.set_result(self._now_ms)


class SimulatedClock:
    """Frame clock that advances a fixed step per frame; for headless runs and tests."""

    def __init__(self, step_ms: float = SIMULATED_FRAME_MS, now_ms: float = 0.0) -> None:
        self.step_ms = float(step_ms)
        self._now_ms = float(now_ms)
        self.frames = 0

    def now(self) -> float:
        return self._now_ms

    async def next_frame(self) -> float:
        await asyncio.sleep(0)
        self._now_ms += self.step_ms
        self.frames += 1
        return self._now_ms


# -----------------------------
# Geometry helpers
# -----------------------------

def ease_out(t: float) -> float:
    """Quadratic ease-out: fast start, decelerating into the final orientation."""
    t = min(max(t, 0.0), 1.0)
    return 1.0 - (1.0 - t) * (1.0 - t)


def rotation_matrix(axis: str, angle: float) -> np.ndarray:
    """Right-handed rotation by `angle` radians about a global axis."""
    c, s = math.cos(angle), math.sin(angle)
    if axis == 'x':
        return np.array([[1, 0, 0], [0, c, -s], [0, s, c]])
    if axis == 'y':
        return np.array([[c, 0, s], [0, 1, 0], [-s, 0, c]])
    if axis == 'z':
        return np.array([[c, -s, 0], [s, c, 0], [0, 0, 1]])
    return np.identity(3)


class Pivot:
    """Temporary frame at the cube centre that carries a layer while it turns."""

    def __init__(self) -> None:
        self.axis: Optional[str] = None
        self.angle = 0.0
        self.pieces: List[Piece] = []

    @property
    def active(self) -> bool:
        return self.axis is not None

    def attach(self, axis: str, pieces: List[Piece]) -> None:
        self.axis = axis
        self.angle = 0.0
        self.pieces = list(pieces)

    def matrix(self) -> np.ndarray:
        if self.axis is None:
            return np.identity(3)
        return rotation_matrix(self.axis, self.angle)

    def carries(self, piece: Piece) -> bool:
        return any(p is piece for p in self.pieces)

    def reset(self) -> None:
        self.axis = None
        self.angle = 0.0
        self.pieces = []


# -----------------------------
# Rotation primitive
# -----------------------------

class LayerRotator:
    """
    Turns one layer of `registry` by a quarter turn, one request at a time.

    A request arriving while another turn is animating is dropped, not queued;
    callers that need ordering must await each turn before issuing the next.
    """

    def __init__(self, registry: PieceRegistry, clock) -> None:
        self.registry = registry
        self.clock = clock
        self.pivot = Pivot()
        self._animating = False

    @property
    def animating(self) -> bool:
        return self._animating

    async def rotate(self, axis: str, limit: int, direction: int,
                     duration_ms: float = DEFAULT_DURATION_MS) -> bool:
        """
        Animate a quarter turn of layer (axis, limit) in the sense of `direction`.

        Returns False without doing anything if a turn is already running.
        """
        if self._animating:
            logger.debug("Rotation %s%+d dropped: another layer is turning", axis, limit)
            return False
        self._animating = True
        try:
            pieces = select_layer(self.registry, axis, limit)
            if not pieces:
                logger.warning("Layer (%s, %s) selects no pieces", axis, limit)
            self.pivot.attach(axis, pieces)

            target = (math.pi / 2) * direction
            start = self.clock.now()
            progress = 0.0
            while progress < 1.0:
                now = await self.clock.next_frame()
                if duration_ms <= 0:
                    progress = 1.0
                else:
                    progress = min((now - start) / duration_ms, 1.0)
                self.pivot.angle = target * ease_out(progress)

            self.pivot.angle = target
            self._settle()
            return True
        finally:
            self.pivot.reset()
            self._animating = False

    def _settle(self) -> None:
        """Re-express carried pieces in the global frame and snap them to the lattice."""
        rot = self.pivot.matrix()
        for piece in self.pivot.pieces:
            self.registry.commit_position(piece, rot @ piece.position)
            self.registry.commit_orientation(piece, rot @ piece.orientation)
