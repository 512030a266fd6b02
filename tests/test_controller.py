import asyncio
import random

import pytest

from conftest import FailingSolver, ScriptedSolver, registry_facelets
from rubik_cube.controller import BusyPolicy, CubeController
from rubik_cube.pieces import PieceRegistry
from rubik_cube.rotation import LayerRotator, SimulatedClock
from rubik_cube.solver import KociembaSolver, ReferenceCube


@pytest.mark.asyncio
async def test_turn_records_and_enables_undo(controller):
    assert await controller.turn("x", 1, -1)
    assert controller.history.snapshot() == ("R",)
    assert controller.can_undo
    assert controller.has_moves


@pytest.mark.asyncio
async def test_turn_then_undo_restores(controller, registry):
    before = registry.positions()
    await controller.turn("y", -1, 1)
    assert registry.positions() != before
    assert await controller.undo()
    assert registry.positions() == before
    assert registry.is_solved()
    assert not controller.can_undo
    assert controller.history.snapshot() == ("D", "D'")


@pytest.mark.asyncio
async def test_undo_only_one_level(controller):
    await controller.turn("x", 1, -1)
    await controller.turn("z", 1, -1)
    assert await controller.undo()
    assert await controller.undo() is False
    assert controller.history.snapshot() == ("R", "F", "F'")


@pytest.mark.asyncio
async def test_undo_with_empty_slot_is_noop(controller, registry):
    before = registry.positions()
    assert await controller.undo() is False
    assert registry.positions() == before
    assert controller.history.snapshot() == ()


@pytest.mark.asyncio
async def test_turn_rejects_non_face_layer(controller, registry):
    assert await controller.turn("x", 0, 1) is False
    assert await controller.turn("x", 1, 2) is False
    assert registry.is_solved()
    assert not controller.has_moves


@pytest.mark.asyncio
async def test_shuffle_records_moves_without_undo(controller, registry):
    await controller.turn("x", 1, -1)
    assert await controller.shuffle()
    history = controller.history.snapshot()
    assert len(history) == 6
    assert not controller.can_undo
    assert await controller.undo() is False


@pytest.mark.asyncio
async def test_shuffle_then_solve(controller, registry, inverse_solver):
    await controller.shuffle()
    scramble = controller.history.snapshot()
    solution = await controller.solve()
    assert inverse_solver.calls == [scramble]
    assert registry.is_solved()
    assert not controller.has_moves
    assert not controller.can_undo
    assert ReferenceCube().apply_sequence(list(scramble) + solution).is_solved()


@pytest.mark.asyncio
async def test_solve_expands_double_turns(registry, rotator):
    solver = ScriptedSolver(["R2", "Q", "U'"])
    controller = CubeController(registry, rotator, solver)
    await controller.turn("x", 1, -1)
    played = await controller.solve()
    assert played == ["R2", "Q", "U'"]
    expected = ReferenceCube().apply_sequence(["R", "R", "R", "U'"])
    assert registry_facelets(registry) == expected.to_facelets()
    assert not controller.has_moves


@pytest.mark.asyncio
async def test_solve_without_solution_changes_nothing(registry, rotator):
    controller = CubeController(registry, rotator, ScriptedSolver([]))
    await controller.turn("z", -1, 1)
    before = registry.positions()
    assert await controller.solve() == []
    assert registry.positions() == before
    assert controller.history.snapshot() == ("B",)
    assert not controller.can_undo
    assert await controller.undo() is False
    assert registry.positions() == before


@pytest.mark.asyncio
async def test_solver_failure_finishes_cleanly(registry, rotator):
    solver = FailingSolver()
    controller = CubeController(registry, rotator, solver)
    await controller.turn("x", -1, 1)
    before = registry.positions()
    assert await controller.solve() == []
    assert solver.calls == [("L",)]
    assert registry.positions() == before
    assert controller.history.snapshot() == ("L",)
    assert not controller.can_undo
    assert not controller.busy
    assert await controller.turn("y", 1, -1)


@pytest.mark.asyncio
async def test_turn_undo_turn_then_solve(controller, registry, inverse_solver):
    await controller.turn("x", 1, -1)
    await controller.undo()
    await controller.turn("z", 1, -1)
    await controller.turn("y", -1, 1)
    assert controller.can_undo
    solution = await controller.solve()
    assert inverse_solver.calls == [("R", "R'", "F", "D")]
    assert solution == ["D'", "F'", "R", "R'"]
    assert registry.is_solved()
    assert not controller.can_undo
    assert await controller.undo() is False


@pytest.mark.asyncio
async def test_turn_rejects_unknown_axis(controller, registry):
    assert await controller.turn("w", 1, 1) is False
    assert await controller.turn(None, 1, 1) is False
    assert registry.is_solved()
    assert not controller.has_moves


@pytest.mark.asyncio
async def test_reset(controller, registry):
    await controller.shuffle()
    assert await controller.reset()
    assert registry.is_solved()
    assert not controller.has_moves
    assert not controller.can_undo


@pytest.mark.asyncio
async def test_busy_controller_rejects(controller, registry):
    first = asyncio.ensure_future(controller.turn("x", 1, -1))
    await asyncio.sleep(0)
    assert controller.busy
    assert controller.rotator.animating
    assert await controller.turn("y", 1, -1) is False
    assert await controller.undo() is False
    assert await first
    assert controller.history.snapshot() == ("R",)
    assert registry.piece("1-1-1").coords == (1, 1, -1)


@pytest.mark.asyncio
async def test_queue_policy_runs_in_order(registry, rotator, inverse_solver):
    controller = CubeController(registry, rotator, inverse_solver, policy=BusyPolicy.QUEUE)
    results = await asyncio.gather(
        controller.turn("x", 1, -1),
        controller.turn("y", 1, -1),
        controller.undo(),
    )
    assert results == [True, True, True]
    assert controller.history.snapshot() == ("R", "U", "U'")


@pytest.mark.asyncio
async def test_rotator_latch_blocks_turn_recording(registry, rotator, controller):
    busy = asyncio.ensure_future(rotator.rotate("z", 1, -1, 100))
    await asyncio.sleep(0)
    assert await controller.turn("x", 1, -1) is False
    await busy
    assert controller.history.snapshot() == ()


@pytest.mark.asyncio
async def test_kociemba_end_to_end():
    pytest.importorskip("kociemba")
    registry = PieceRegistry()
    controller = CubeController(registry, LayerRotator(registry, SimulatedClock()),
                                KociembaSolver(), rng=random.Random(99))
    await controller.shuffle()
    scramble = controller.history.snapshot()
    solution = await controller.solve()
    assert registry.is_solved()
    assert ReferenceCube().apply_sequence(list(scramble) + solution).is_solved()


@pytest.mark.asyncio
async def test_kociemba_after_turns_and_undo():
    pytest.importorskip("kociemba")
    registry = PieceRegistry()
    controller = CubeController(registry, LayerRotator(registry, SimulatedClock()), KociembaSolver())
    await controller.turn("x", 1, -1)
    await controller.turn("y", 1, -1)
    await controller.undo()
    await controller.turn("z", 1, -1)
    await controller.turn("x", -1, 1)
    history = controller.history.snapshot()
    assert history == ("R", "U", "U'", "F", "L")
    solution = await controller.solve()
    assert solution
    assert registry.is_solved()
    assert not controller.can_undo
    assert not controller.has_moves
    assert ReferenceCube().apply_sequence(list(history) + solution).is_solved()
