"""
Command orchestration: shuffle, turn, undo, solve and reset.

Every operation runs under one lock so no two of them ever interleave. What
happens to a request that arrives while the cube is busy is an explicit
policy: drop it (the default, like a button that does nothing mid-animation)
or wait for the running operation to finish.
"""
from __future__ import annotations

import asyncio
import enum
import logging
import random
from typing import Awaitable, Callable, List, Optional, TypeVar

from .config import (
    AXES,
    SHUFFLE_DURATION_MS,
    SHUFFLE_MOVES,
    SOLVE_DURATION_MS,
    TURN_DURATION_MS,
    UNDO_DURATION_MS,
    sanitize_string_input,
)
from .history import MoveHistory
from .layers import is_face_layer
from .notation import LayerMove, expand_solution
from .pieces import PieceRegistry
from .rotation import LayerRotator
from .solver import KociembaSolver, Solver

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BusyPolicy(enum.Enum):
    REJECT = "reject"
    QUEUE = "queue"


class CubeController:
    def __init__(
        self,
        registry: PieceRegistry,
        rotator: LayerRotator,
        solver: Optional[Solver] = None,
        *,
        policy: BusyPolicy = BusyPolicy.REJECT,
        rng: Optional[random.Random] = None,
        shuffle_moves: int = SHUFFLE_MOVES,
    ) -> None:
        self.registry = registry
        self.rotator = rotator
        self.solver = solver if solver is not None else KociembaSolver()
        self.policy = policy
        self.rng = rng if rng is not None else random.Random()
        self.shuffle_moves = shuffle_moves
        self.history = MoveHistory()
        self._lock = asyncio.Lock()

    # -------- State polled by the UI --------
    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def has_moves(self) -> bool:
        return self.history.has_moves

    # -------- Operations --------
    async def _exclusive(self, name: str, operation: Callable[[], Awaitable[T]], rejected: T) -> T:
        if self.policy is BusyPolicy.REJECT and self._lock.locked():
            logger.debug("%s ignored: cube is busy", name)
            return rejected
        async with self._lock:
            return await operation()

    async def shuffle(self) -> bool:
        """Scramble with a few random quarter turns; disables undo."""
        return await self._exclusive("Shuffle", self._shuffle, False)

    async def turn(self, axis: str, limit: int, direction: int) -> bool:
        """Turn one face layer a quarter turn and make it the undo candidate."""
        if not sanitize_string_input(axis, AXES):
            logger.warning("Refusing turn about unknown axis %r", axis)
            return False
        move = LayerMove(axis, limit, direction)
        if not is_face_layer(axis, limit) or direction not in (1, -1):
            logger.warning("Refusing turn of non-face layer %r", move)
            return False
        return await self._exclusive("Turn", lambda: self._turn(move), False)

    async def undo(self) -> bool:
        """Reverse the last manual turn, if it is still the most recent operation."""
        return await self._exclusive("Undo", self._undo, False)

    async def solve(self) -> List[str]:
        """Ask the solver for a solution of the recorded history and play it back."""
        return await self._exclusive("Solve", self._solve, [])

    async def reset(self) -> bool:
        """Put the cube back to solved and forget all recorded moves."""
        return await self._exclusive("Reset", self._reset, False)

    # -------- Implementations (lock held) --------
    async def _shuffle(self) -> bool:
        self.history.clear()
        scramble = []
        for _ in range(self.shuffle_moves):
            move = LayerMove(
                self.rng.choice(AXES),
                self.rng.choice((-1, 1)),
                self.rng.choice((1, -1)),
            )
            if await self.rotator.rotate(move.axis, move.limit, move.direction, SHUFFLE_DURATION_MS):
                self.history.record(move, undoable=False)
                scramble.append(move.notation)
        logger.info("Shuffled: %s", " ".join(scramble))
        return True

    async def _turn(self, move: LayerMove) -> bool:
        if not await self.rotator.rotate(move.axis, move.limit, move.direction, TURN_DURATION_MS):
            return False
        self.history.record(move)
        logger.debug("Turned %s", move)
        return True

    async def _undo(self) -> bool:
        move = self.history.take_undo()
        if move is None:
            logger.info("Nothing to undo")
            return False
        if not await self.rotator.rotate(move.axis, move.limit, move.direction, UNDO_DURATION_MS):
            return False
        self.history.record(move, undoable=False)
        logger.debug("Undid with %s", move)
        return True

    async def _solve(self) -> List[str]:
        history = self.history.snapshot()
        # Solve is never an undo target, whatever its outcome
        self.history.drop_undo()
        loop = asyncio.get_running_loop()
        try:
            solution = await loop.run_in_executor(None, self.solver.solve, history)
        except Exception as e:
            logger.error("Error solving: %s", e)
            return []
        if not solution:
            logger.info("No solution to play back")
            return []
        logger.info("Solution: %s", " ".join(solution))
        for move in expand_solution(solution):
            await self.rotator.rotate(move.axis, move.limit, move.direction, SOLVE_DURATION_MS)
        self.history.clear()
        return list(solution)

    async def _reset(self) -> bool:
        self.registry.reset()
        self.history.clear()
        logger.info("Cube reset")
        return True
