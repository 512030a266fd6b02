"""Virtual 3x3x3 cube: layer turns, face notation, single undo and solver playback."""
from .controller import BusyPolicy, CubeController
from .history import MoveHistory
from .layers import select_layer
from .notation import LayerMove, expand_solution, from_notation, to_notation
from .pieces import Piece, PieceRegistry
from .rotation import FrameClock, LayerRotator, SimulatedClock
from .solver import KociembaSolver, ReferenceCube

__version__ = "1.3.0"

__all__ = [
    "BusyPolicy",
    "CubeController",
    "FrameClock",
    "KociembaSolver",
    "LayerMove",
    "LayerRotator",
    "MoveHistory",
    "Piece",
    "PieceRegistry",
    "ReferenceCube",
    "SimulatedClock",
    "expand_solution",
    "from_notation",
    "select_layer",
    "to_notation",
]
