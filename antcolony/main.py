"""
Ant colony foraging: real-time pygame viewer or headless batch run.

Controls (windowed):
  left click  place food
  SPACE       start / pause / resume
  R           reset (back to food placement)
  A           toggle automatic food respawn
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Optional, Sequence

from antcolony import config
from antcolony.settings import ConfigError, Settings
from antcolony.sim.engine import SimulationEngine, Status

logger = logging.getLogger("antcolony")

SCREEN_SCALE = 8  # pixels per world unit


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ant colony foraging simulation")
    parser.add_argument("--settings", type=str, default=None, help="JSON settings file")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--ants", type=int, default=None, help="Override ant count")
    parser.add_argument("--headless", action="store_true", help="Run without a window")
    parser.add_argument("--seconds", type=float, default=120.0, help="Simulated seconds for headless runs")
    parser.add_argument("--food", type=int, default=2, help="Random food sources placed before a headless run")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> Settings:
    settings = Settings.from_file(args.settings) if args.settings else Settings()
    changes = {}
    if args.seed is not None:
        changes["seed"] = args.seed
    if args.ants is not None:
        changes["ant_count"] = args.ants
    return settings.replace(**changes) if changes else settings


def run_headless(engine: SimulationEngine, seconds: float, food: int) -> None:
    w, h = engine.world.w, engine.world.h
    for _ in range(max(0, food)):
        engine.place_food(engine.rng.uniform(0.1 * w, 0.9 * w), engine.rng.uniform(0.1 * h, 0.9 * h))

    engine.start()
    steps = int(round(seconds / config.SIM_STEP))
    for i in range(steps):
        engine.step()
        if (i + 1) % 200 == 0:
            s = engine.stats
            logger.info("t=%.1fs delivered=%d", s.elapsed_seconds, s.delivered_food)

    s = engine.stats
    print(f"elapsed={s.elapsed_seconds:.2f}s delivered={s.delivered_food}")


def run_window(engine: SimulationEngine) -> None:
    import pygame

    from antcolony.render.renderer import draw_idle, draw_world

    pygame.init()
    world = engine.world
    screen = pygame.display.set_mode((int(world.w * SCREEN_SCALE), int(world.h * SCREEN_SCALE)))
    pygame.display.set_caption("antcolony")
    clock = pygame.time.Clock()

    running = True
    while running:
        dt_frame = clock.tick(60) / 1000.0

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False
            elif e.type == pygame.KEYDOWN:
                if e.key == pygame.K_SPACE:
                    if engine.status is Status.IDLE:
                        engine.start()
                    elif engine.status is Status.RUNNING:
                        engine.pause()
                    else:
                        engine.resume()
                elif e.key == pygame.K_r:
                    engine.reset()
                elif e.key == pygame.K_a:
                    engine.set_auto_food(not engine.settings.auto_food)
            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                mx, my = e.pos
                engine.place_food(mx / SCREEN_SCALE, my / SCREEN_SCALE)

        engine.tick(dt_frame)

        snap = engine.snapshot()
        if snap is None:
            draw_idle(screen, engine.world, engine.staged_food, config.NEST_RADIUS, SCREEN_SCALE)
        else:
            draw_world(screen, snap, SCREEN_SCALE, engine.settings.auto_food)
        pygame.display.flip()

    pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args)
    except ConfigError as exc:
        logger.error("invalid settings: %s", exc)
        return 2

    engine = SimulationEngine(settings)
    if args.headless:
        run_headless(engine, args.seconds, args.food)
    else:
        run_window(engine)
    return 0


if __name__ == "__main__":
    sys.exit(main())
