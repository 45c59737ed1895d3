"""
antcolony module: render/renderer.py

Pygame rendering of a WorldSnapshot (top-down). World units are scaled to
screen pixels by a single uniform factor.
"""

from __future__ import annotations
import math

import numpy as np
import pygame

from antcolony.colony.ant import AntMode
from antcolony.render import colors
from antcolony.sim.state import Status, WorldSnapshot


def _to_screen(x: float, y: float, scale: float) -> tuple[int, int]:
    return int(x * scale), int(y * scale)


def draw_ground(screen: pygame.Surface, snap: WorldSnapshot, scale: float) -> None:
    rect = pygame.Rect(0, 0, int(snap.world.w * scale), int(snap.world.h * scale))
    pygame.draw.rect(screen, colors.GROUND, rect)


def draw_pheromones(screen: pygame.Surface, snap: WorldSnapshot, scale: float) -> None:
    # blend the three grids into one RGB image, then scale it up once
    rows, cols = snap.home_trail.shape
    rgb = np.zeros((rows, cols, 3), dtype=np.float32)
    for values, color in (
        (snap.home_trail, colors.HOME_TRAIL),
        (snap.food_trail, colors.FOOD_TRAIL),
        (snap.nest_signal, colors.NEST_SIGNAL),
    ):
        alpha = np.minimum(0.7, values)[:, :, None]
        rgb += alpha * np.array(color, dtype=np.float32)

    rgb = np.clip(rgb + np.array(colors.GROUND, dtype=np.float32), 0, 255).astype(np.uint8)
    # surfarray is (width, height, 3)
    surf = pygame.surfarray.make_surface(rgb.transpose(1, 0, 2))
    cell = snap.world.w / cols
    size = (int(cols * cell * scale), int(rows * cell * scale))
    screen.blit(pygame.transform.scale(surf, size), (0, 0))


def draw_nest(screen: pygame.Surface, snap: WorldSnapshot, scale: float) -> None:
    center = _to_screen(snap.nest.x, snap.nest.y, scale)
    r = max(1, int(snap.nest.radius * scale))
    pygame.draw.circle(screen, colors.NEST, center, r)
    pygame.draw.circle(screen, colors.NEST_RIM, center, r, 2)


def draw_food(screen: pygame.Surface, snap: WorldSnapshot, scale: float) -> None:
    for f in snap.food:
        center = _to_screen(f.x, f.y, scale)
        r = max(1, int(f.radius * scale))
        pygame.draw.circle(screen, colors.FOOD, center, r)
        # rim brightness tracks remaining capacity
        v = 0.4 + 0.6 * f.fill_ratio
        rim = tuple(int(c * v) for c in colors.FOOD_RIM)
        pygame.draw.circle(screen, rim, center, r + 2, 2)


def draw_ants(screen: pygame.Surface, snap: WorldSnapshot, scale: float) -> None:
    body = max(1, int(0.45 * scale))
    for a in snap.ants:
        if a.mode is AntMode.FORAGING:
            col = colors.ANT
        elif a.mode is AntMode.RETURNING:
            col = colors.ANT_CARRYING
        else:
            col = colors.ANT_FORCED

        x, y = _to_screen(a.x, a.y, scale)
        hx = x + math.cos(a.direction) * body * 2
        hy = y + math.sin(a.direction) * body * 2
        pygame.draw.line(screen, col, (x, y), (hx, hy), max(1, body))
        pygame.draw.circle(screen, col, (x, y), body)


def draw_hud(screen: pygame.Surface, snap: WorldSnapshot, auto_food: bool) -> None:
    font = pygame.font.Font(None, 26)

    minutes, seconds = divmod(max(0.0, snap.stats.elapsed_seconds), 60)
    paused = snap.status is Status.PAUSED
    lines = [
        f"Ants: {len(snap.ants)}  Food sources: {len(snap.food)}",
        f"Delivered: {snap.stats.delivered_food}",
        f"Sim time: {int(minutes):02d}:{seconds:04.1f}",
        f"Auto food: {'on' if auto_food else 'off'}" + ("  [PAUSED]" if paused else ""),
    ]

    y = 10
    for line in lines:
        txt = font.render(line, True, colors.HUD)
        screen.blit(txt, (12, y))
        y += 22


def draw_world(screen: pygame.Surface, snap: WorldSnapshot, scale: float, auto_food: bool) -> None:
    screen.fill(colors.BG)
    draw_ground(screen, snap, scale)
    draw_pheromones(screen, snap, scale)
    draw_nest(screen, snap, scale)
    draw_food(screen, snap, scale)
    draw_ants(screen, snap, scale)
    draw_hud(screen, snap, auto_food)


def draw_idle(screen: pygame.Surface, world, staged_food, nest_radius: float, scale: float) -> None:
    """
    Pre-start view: empty ground, nest and any food placed so far.
    """
    screen.fill(colors.BG)
    pygame.draw.rect(screen, colors.GROUND, pygame.Rect(0, 0, int(world.w * scale), int(world.h * scale)))

    cx, cy = world.center
    pygame.draw.circle(screen, colors.NEST, _to_screen(cx, cy, scale), max(1, int(nest_radius * scale)))
    for f in staged_food:
        pygame.draw.circle(screen, colors.FOOD, _to_screen(f.x, f.y, scale), max(1, int(f.radius * scale)))

    font = pygame.font.Font(None, 26)
    txt = font.render("Click to place food, SPACE to start", True, colors.HUD)
    screen.blit(txt, (12, 10))
