"""Move history in face notation plus a single-move undo slot."""
from __future__ import annotations

from typing import List, Optional, Tuple

from .notation import LayerMove


class MoveHistory:
    """
    Ordered log of applied turns, in notation, since the last reset or solve.

    The undo slot holds the last manual turn only; any other recorded move,
    or taking the undo, empties it.
    """

    def __init__(self) -> None:
        self._moves: List[str] = []
        self._last: Optional[LayerMove] = None

    def __len__(self) -> int:
        return len(self._moves)

    def record(self, move: LayerMove, undoable: bool = True) -> None:
        notation = move.notation
        if notation:
            self._moves.append(notation)
        self._last = move if undoable else None

    def take_undo(self) -> Optional[LayerMove]:
        """Inverse of the last manual turn, clearing the slot; None if there is none."""
        move, self._last = self._last, None
        return move.inverse() if move is not None else None

    def drop_undo(self) -> None:
        """Empty the undo slot without touching the log."""
        self._last = None

    def clear(self) -> None:
        self._moves.clear()
        self._last = None

    def snapshot(self) -> Tuple[str, ...]:
        return tuple(self._moves)

    @property
    def can_undo(self) -> bool:
        return self._last is not None

    @property
    def has_moves(self) -> bool:
        return bool(self._moves)
