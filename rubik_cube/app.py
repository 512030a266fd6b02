"""
Rubik's Cube - pygame + PyOpenGL front end
------------------------------------------
Controls:
    Mouse drag       – Orbit camera
    Mouse wheel      – Zoom

    CUBE MOVES:
    R L U D F B      – Clockwise face turns (letter keys)
    Arrow Keys       – U/D/L/R face turns
    SPACE            – Front face turn
    Shift + (key)    – Counterclockwise (prime) turn

    SHORTCUTS:
    S                – Shuffle
    Z / Backspace    – Undo the last turn (one level)
    Enter            – Solve
    C                – Reset to solved
    H                – Print this help
    ESC or Q         – Quit
"""
from __future__ import annotations

import asyncio
import logging
import math
from typing import Optional, Set, Tuple

import pygame
from pygame.locals import *  # noqa: F401,F403
from OpenGL.GL import *
from OpenGL.GLU import *

from .config import (
    FPS,
    MOUSE_SENS,
    WINDOW_H,
    WINDOW_W,
    ZOOM_SENS,
    sanitize_numeric_input,
)
from .controller import CubeController
from .notation import from_notation
from .pieces import PieceRegistry
from .render import draw_axes, draw_cube
from .rotation import FrameClock, LayerRotator

logger = logging.getLogger(__name__)

KEY_TO_FACE = {
    # Primary letter keys for face moves
    K_u: 'U', K_d: 'D', K_l: 'L', K_r: 'R', K_f: 'F', K_b: 'B',
    # Arrow keys
    K_UP: 'U', K_DOWN: 'D', K_LEFT: 'L', K_RIGHT: 'R',
    K_SPACE: 'F',  # Space for front
}


class App:
    def __init__(self, controller: Optional[CubeController] = None) -> None:
        pygame.init()
        pygame.display.set_mode((int(WINDOW_W), int(WINDOW_H)), DOUBLEBUF | OPENGL)
        pygame.display.set_caption("Rubik's Cube - Press H for Help")
        self.clock = pygame.time.Clock()
        self.frames = FrameClock(pygame.time.get_ticks())

        if controller is None:
            registry = PieceRegistry()
            controller = CubeController(registry, LayerRotator(registry, self.frames))
        self.controller = controller
        self._tasks: Set[asyncio.Task] = set()
        self._status = ""

        # Camera
        self.cam_dist = sanitize_numeric_input(8.5, 3.0, 50.0, 8.5)
        self.cam_yaw = sanitize_numeric_input(30, -360, 360, 30)
        self.cam_pitch = sanitize_numeric_input(20, -89, 89, 20)
        self.mouse_down = False
        self.last_mouse: Optional[Tuple[int, int]] = None

        self._setup_gl()
        print(__doc__)

    def _setup_gl(self) -> None:
        glViewport(0, 0, int(WINDOW_W), int(WINDOW_H))
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(45, WINDOW_W / float(WINDOW_H), 0.1, 100.0)
        glMatrixMode(GL_MODELVIEW)
        glEnable(GL_DEPTH_TEST)
        glEnable(GL_CULL_FACE)
        glCullFace(GL_BACK)
        glClearColor(0.08, 0.08, 0.1, 1.0)
        glEnable(GL_MULTISAMPLE)
        glEnable(GL_LINE_SMOOTH)
        # Pieces are drawn with a rotation matrix applied; keep lighting normals unit length
        glEnable(GL_NORMALIZE)

        # Light (simple ambient + directional)
        glEnable(GL_LIGHTING)
        glEnable(GL_LIGHT0)
        glLightfv(GL_LIGHT0, GL_AMBIENT, (GLfloat * 4)(0.3, 0.3, 0.3, 1.0))
        glLightfv(GL_LIGHT0, GL_DIFFUSE, (GLfloat * 4)(0.8, 0.8, 0.8, 1.0))
        glLightfv(GL_LIGHT0, GL_POSITION, (GLfloat * 4)(5.0, 8.0, 10.0, 1.0))
        glDisable(GL_COLOR_MATERIAL)  # we'll set colors directly

    # -------- Command dispatch --------
    def _spawn(self, name: str, coro) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        self._status = name

        def _done(t: asyncio.Task) -> None:
            self._tasks.discard(t)
            if t.cancelled():
                return
            if t.exception() is not None:
                logger.error("Error during %s: %s", name, t.exception())
            if not self._tasks:
                self._status = ""

        task.add_done_callback(_done)

    def _handle_key(self, event) -> bool:
        """Handle a key press; returns False when the app should quit."""
        if event.key in (K_ESCAPE, K_q):
            return False
        if event.key == K_c:
            self._spawn("resetting", self.controller.reset())
        elif event.key == K_s:
            self._spawn("shuffling", self.controller.shuffle())
        elif event.key in (K_z, K_BACKSPACE):
            self._spawn("undoing", self.controller.undo())
        elif event.key in (K_RETURN, K_KP_ENTER):
            self._spawn("solving", self.controller.solve())
        elif event.key == K_h:
            print(__doc__)
        else:
            self._handle_move_key(event)
        return True

    def _handle_move_key(self, event) -> None:
        face = KEY_TO_FACE.get(event.key)
        if face is None:
            return
        prime = bool(pygame.key.get_mods() & (KMOD_LSHIFT | KMOD_RSHIFT))
        move = from_notation(face + ("'" if prime else ""))
        if move is not None:
            self._spawn("turning", self.controller.turn(move.axis, move.limit, move.direction))

    # -------- Mouse / camera --------
    def _handle_mouse_button_down(self, event) -> None:
        if event.button == 1:
            self.mouse_down = True
            self.last_mouse = pygame.mouse.get_pos()
        elif event.button == 4:  # wheel up
            self.cam_dist = sanitize_numeric_input(self.cam_dist / ZOOM_SENS, 3.0, 50.0, self.cam_dist)
        elif event.button == 5:  # wheel down
            self.cam_dist = sanitize_numeric_input(self.cam_dist * ZOOM_SENS, 3.0, 50.0, self.cam_dist)

    def _handle_mouse_button_up(self, event) -> None:
        if event.button == 1:
            self.mouse_down = False
            self.last_mouse = None

    def _handle_mouse_motion(self, event) -> None:
        if not self.mouse_down:
            return
        x, y = event.pos
        if self.last_mouse is not None:
            dx = x - self.last_mouse[0]
            dy = y - self.last_mouse[1]
            self.cam_yaw = sanitize_numeric_input(self.cam_yaw + dx * MOUSE_SENS, -720, 720, self.cam_yaw)
            self.cam_pitch = sanitize_numeric_input(self.cam_pitch + dy * MOUSE_SENS, -89, 89, self.cam_pitch)
        self.last_mouse = (x, y)

    def _apply_camera(self) -> None:
        glLoadIdentity()
        # Position the camera on a sphere around origin
        pitch_rad = math.radians(self.cam_pitch)
        yaw_rad = math.radians(self.cam_yaw)
        x = self.cam_dist * math.cos(pitch_rad) * math.cos(yaw_rad)
        y = self.cam_dist * math.sin(pitch_rad)
        z = self.cam_dist * math.cos(pitch_rad) * math.sin(yaw_rad)
        gluLookAt(x, y, z, 0, 0, 0, 0, 1, 0)

    # -------- Main loop --------
    async def run(self) -> None:
        running = True
        try:
            while running:
                self.clock.tick(int(FPS))
                for event in pygame.event.get():
                    try:
                        if event.type == QUIT:
                            running = False
                        elif event.type == KEYDOWN:
                            running = self._handle_key(event)
                        elif event.type == MOUSEBUTTONDOWN:
                            self._handle_mouse_button_down(event)
                        elif event.type == MOUSEBUTTONUP:
                            self._handle_mouse_button_up(event)
                        elif event.type == MOUSEMOTION:
                            self._handle_mouse_motion(event)
                    except Exception as e:
                        logger.error("Error handling event: %s", e)

                # Wake every turn waiting on this frame, let them step, then draw
                self.frames.tick(pygame.time.get_ticks())
                await asyncio.sleep(0)
                self._render()
        finally:
            for task in list(self._tasks):
                task.cancel()
            self.cleanup()

    def _title(self) -> str:
        c = self.controller
        parts = [f"Rubik's Cube - Moves: {len(c.history)}"]
        if c.can_undo:
            parts.append("Undo: Z")
        if self._status:
            parts.append(self._status.capitalize() + "...")
        elif c.registry.is_solved():
            parts.append("SOLVED!")
        return "  ".join(parts)

    def _render(self) -> None:
        try:
            glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
            self._apply_camera()
            draw_axes()
            draw_cube(self.controller.registry, self.controller.rotator.pivot)
            pygame.display.set_caption(self._title())
            pygame.display.flip()
        except Exception as e:
            logger.error("Error in render function: %s", e)

    def cleanup(self) -> None:
        """Clean up OpenGL state and pygame."""
        try:
            glDisable(GL_LIGHTING)
            glDisable(GL_LIGHT0)
            glDisable(GL_DEPTH_TEST)
            glDisable(GL_NORMALIZE)
        except Exception as e:
            logger.error("Error during cleanup: %s", e)
        finally:
            pygame.quit()
