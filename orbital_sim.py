#!/usr/bin/env python3
"""
Orbital simulator application entry point: pygame driver and renderer.

What this module does
- Parses the command line, loads a world file and builds the World.
- Runs a single Pygame loop that handles input, feeds real elapsed time to the
  SimulationClock (which steps the Integrator) and draws the committed state.

The renderer only reads bodies (position, size, color, parent id). All motion
changes go through Integrator.step.

Units and conventions
- SI units throughout: meters [m], kilograms [kg], seconds [s]. Camera stores meters-per-pixel.
- Colors are RGB tuples in 0..255.

Controls
- '+' / '-': faster / slower simulated time
- Mouse wheel: zoom, left/right/middle drag or arrow keys: pan
- Space: pause/play, F: fit all bodies in view, Esc: quit

Running
1) Install: `pip install -e .`
2) Run: `python orbital_sim.py [world.json] [--seed N] [--ticks 60]`
"""

import argparse
import logging
import os
import random
import sys
import time
from typing import List, Optional

import pygame
from pygame import gfxdraw

from orbital.builder import build_world
from orbital.camera import Camera2D
from orbital.clock import RateCounter, SimulationClock, format_rate
from orbital.constants import (
    BACKGROUND_COLOR,
    DEFAULT_UPDATES_PER_SECOND,
    HUD_COLOR,
    MIN_SEPARATION,
    SAFE_COORD_LIMIT,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from orbital.errors import OrbitalError
from orbital.integrator import Integrator
from orbital.lighting import illumination
from orbital.physics import GravitySettings, MassLaw
from orbital.presets_loader import load_world_params, template_path
from orbital.world import World

logger = logging.getLogger("orbital_sim")

MARKER_RADIUS_PX = 3
MAX_BODY_RADIUS_PX = 400
PAN_SPEED_KEYS = 600  # pixels per second


# ============================================================
# Simulation Controller (driver-owned state)
# ============================================================

class SimulationController:
    """
    Everything the driver owns: the World, its Integrator and the clock.
    """
    def __init__(self, world: World, integrator: Integrator, clock: SimulationClock, name: str = "World"):
        self.world = world
        self.integrator = integrator
        self.clock = clock
        self.name = name
        self.running = True
        self.playing = True
        self.ups_counter = RateCounter()

    def _step(self, dt: float) -> None:
        self.integrator.step(dt)
        self.ups_counter.tick()

    def step_physics(self, dt_real_seconds: float) -> int:
        if not self.playing:
            return 0
        return self.clock.advance(dt_real_seconds, self._step)

    def measured_updates_per_second(self) -> int:
        """Updates run during the last full second; drops to 0 while paused."""
        return self.ups_counter.refresh()


# ============================================================
# Pygame Renderer
# ============================================================

class PygameRenderer:
    """
    Pygame loop: handles input, drives the clock and draws bodies and the HUD.
    """
    def __init__(self, sim: SimulationController):
        self.sim = sim
        self.camera = Camera2D(center=(0.0, 0.0))
        self.surface = None
        self.clock = None
        self.font = None
        self.dragging = False
        self.drag_start_screen = (0, 0)
        self.fps_counter = RateCounter()

    def auto_frame_camera(self):
        self.camera.fit(body.position for body in self.sim.world)

    def run(self):
        pygame.init()
        pygame.display.set_caption(f"Orbital Simulator - {self.sim.name}")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()
        self.font = _load_font()
        self.auto_frame_camera()

        last_time = time.perf_counter()
        try:
            while self.sim.running:
                now = time.perf_counter()
                real_dt = now - last_time
                last_time = now

                self.handle_events(real_dt)
                self.sim.step_physics(real_dt)
                self.draw()
                self.fps_counter.tick()

                self.clock.tick(60)
        finally:
            pygame.quit()

    def handle_events(self, real_dt):
        keys = pygame.key.get_pressed()
        if keys[pygame.K_LEFT]:
            self.camera.pan_pixels(PAN_SPEED_KEYS * real_dt, 0)
        if keys[pygame.K_RIGHT]:
            self.camera.pan_pixels(-PAN_SPEED_KEYS * real_dt, 0)
        if keys[pygame.K_UP]:
            self.camera.pan_pixels(0, PAN_SPEED_KEYS * real_dt)
        if keys[pygame.K_DOWN]:
            self.camera.pan_pixels(0, -PAN_SPEED_KEYS * real_dt)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.25 if event.y > 0 else 1.0 / 1.25
                self.camera.zoom(factor, pygame.mouse.get_pos())

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 2, 3):
                self.dragging = True
                self.drag_start_screen = pygame.mouse.get_pos()

            elif event.type == pygame.MOUSEBUTTONUP and event.button in (1, 2, 3):
                self.dragging = False

            elif event.type == pygame.MOUSEMOTION and self.dragging:
                mouse = pygame.mouse.get_pos()
                self.camera.pan_pixels(mouse[0] - self.drag_start_screen[0], mouse[1] - self.drag_start_screen[1])
                self.drag_start_screen = mouse

            elif event.type == pygame.TEXTINPUT:
                if event.text == "+":
                    self.sim.clock.faster()
                elif event.text == "-":
                    self.sim.clock.slower()

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.sim.running = False
                elif event.key == pygame.K_SPACE:
                    self.sim.playing = not self.sim.playing
                    logger.info("simulation %s", "playing" if self.sim.playing else "paused")
                elif event.key == pygame.K_f:
                    self.auto_frame_camera()

    def draw_body(self, surf, body):
        screen_pos = _safe_point(self.camera.world_to_screen(body.position))
        if screen_pos is None:
            return
        x, y = screen_pos

        if not self.camera.is_visible(body.size):
            # Too small to draw to scale: fixed-size marker
            pygame.draw.rect(surf, body.color, (x - MARKER_RADIUS_PX, y - MARKER_RADIUS_PX,
                                                2 * MARKER_RADIUS_PX, 2 * MARKER_RADIUS_PX))
            return

        vis_r = int(min(max(self.camera.size_in_pixels(body.size) / 2, 2), MAX_BODY_RADIUS_PX))
        gfxdraw.filled_circle(surf, x, y, vis_r, body.color)
        gfxdraw.aacircle(surf, x, y, vis_r, body.color)

        light = illumination(self.sim.world, body)
        if light is None or light.alpha <= 0:
            return
        alpha = int(light.alpha * 255)
        # Highlight on the side facing the light, shadow on the far side
        ox, oy = light.away[0] * vis_r * 0.5, light.away[1] * vis_r * 0.5
        gfxdraw.filled_circle(surf, int(x - ox), int(y - oy), max(vis_r // 2, 1), (255, 255, 255, alpha))
        gfxdraw.filled_circle(surf, int(x + ox), int(y + oy), max(vis_r // 2, 1), (0, 0, 0, alpha))

    def draw_hud(self, surf):
        w, h = self.camera.viewport_size
        clock = self.sim.clock
        ups = self.sim.measured_updates_per_second()
        rate = clock.relative_rate(ups)
        state = "" if self.sim.playing else "  [Paused]"
        draw_text(surf, self.font, f"{format_rate(rate)}{state}", 10, h - 22)
        draw_text(surf, self.font, f"FPS: {self.fps_counter.refresh()}", w - 100, h - 40)
        draw_text(surf, self.font, f"UPS: {ups}", w - 100, h - 22)

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)
        for body in self.sim.world:
            self.draw_body(surf, body)
        self.draw_hud(surf)
        pygame.display.flip()


def _load_font():
    try:
        return pygame.font.SysFont("dejavusansmono", 14)
    except (pygame.error, OSError):
        return pygame.font.Font(None, 16)


def draw_text(surface, font, text, x, y, color=HUD_COLOR):
    img = font.render(text, True, color)
    surface.blit(img, (x, y))


def _safe_point(pt):
    x, y = pt
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


# ============================================================
# Application Entry
# ============================================================

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simple orbital simulator.")
    parser.add_argument(
        "world",
        nargs="?",
        default=template_path(),
        help="World JSON file (default: the bundled Sol system).",
    )
    parser.add_argument(
        "-t",
        "--ticks",
        type=int,
        default=DEFAULT_UPDATES_PER_SECOND,
        help="Base number of updates per second. More updates give a more accurate simulation.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random orbital phases (default: random).",
    )
    parser.add_argument(
        "--newtonian",
        action="store_true",
        help="Use m_j instead of m_i + m_j in the force law.",
    )
    parser.add_argument(
        "--min-separation",
        type=float,
        default=MIN_SEPARATION,
        help=f"Separation floor in meters for the force law (default: {MIN_SEPARATION:g}).",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("ORBITAL_LOG", "WARNING"),
        help="Logging level (default: $ORBITAL_LOG or WARNING).",
    )
    return parser.parse_args(argv)


def build_simulation(args: argparse.Namespace) -> SimulationController:
    params = load_world_params(args.world)
    settings = GravitySettings(
        mass_law=MassLaw.NEWTONIAN if args.newtonian else MassLaw.COMBINED,
        min_separation=args.min_separation,
    )
    world = build_world(params, rng=random.Random(args.seed), min_separation=settings.min_separation)
    clock = SimulationClock(
        updates_per_second=args.ticks,
        seconds_per_second=params.seconds_per_second or 1,
    )
    return SimulationController(world, Integrator(world, settings), clock, name=params.name)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    try:
        sim = build_simulation(args)
    except OrbitalError as exc:
        logger.error("failed to build world: %s", exc)
        return 1

    PygameRenderer(sim).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
