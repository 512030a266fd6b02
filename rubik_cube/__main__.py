"""Entry point: `python -m rubik_cube` opens the window, `--headless` runs a shuffle and solve."""
from __future__ import annotations

import argparse
import asyncio
import logging
import random
import sys

from .controller import BusyPolicy, CubeController
from .logging_config import setup_logging
from .pieces import PieceRegistry
from .rotation import LayerRotator, SimulatedClock


async def headless(seed=None) -> int:
    registry = PieceRegistry()
    controller = CubeController(registry, LayerRotator(registry, SimulatedClock()),
                                rng=random.Random(seed))
    await controller.shuffle()
    scramble = controller.history.snapshot()
    solution = await controller.solve()
    print("scramble:", " ".join(scramble))
    print("solution:", " ".join(solution))
    print("solved:  ", registry.is_solved())
    return 0 if registry.is_solved() else 1


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="rubik-cube", description="Virtual 3x3x3 cube with undo and solver playback")
    parser.add_argument("--headless", action="store_true", help="shuffle and solve without opening a window")
    parser.add_argument("--seed", type=int, default=None, help="random seed for the shuffle")
    parser.add_argument("--queue", action="store_true", help="queue commands issued while busy instead of dropping them")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None)
    args = parser.parse_args(argv)

    setup_logging(getattr(logging, args.log_level), args.log_file)

    if args.headless:
        return asyncio.run(headless(args.seed))

    from .app import App

    try:
        app = App()
        if args.queue:
            app.controller.policy = BusyPolicy.QUEUE
        asyncio.run(app.run())
    except KeyboardInterrupt:
        print("\nProgram interrupted by user.")
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
