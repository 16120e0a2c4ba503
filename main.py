import argparse
import logging
import sys

import pygame

from config import (
    GRID_WIDTH, GRID_HEIGHT, CELL_SIZE, FPS, MAX_SPEED, COLOR_BG, COLOR_TEXT,
    DEFAULT_SEED, INITIAL_POPULATION, PRESET_ORDER, load_preset
)
from environment import Environment
from render import rasterize

logger = logging.getLogger(__name__)

STATUS_HEIGHT = 40


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Grid food field with Monod-kinetics consumers."
    )
    parser.add_argument('--seed', default=DEFAULT_SEED, help="RNG seed string")
    parser.add_argument('--preset', default='bloom', choices=PRESET_ORDER)
    parser.add_argument('--population', type=int, default=INITIAL_POPULATION,
                        help="initial number of agents")
    parser.add_argument('--width', type=int, default=GRID_WIDTH)
    parser.add_argument('--height', type=int, default=GRID_HEIGHT)
    parser.add_argument('--scale', type=int, default=CELL_SIZE,
                        help="pixels per grid cell")
    parser.add_argument('--speed', type=int, default=1,
                        help="ticks per rendered frame")
    parser.add_argument('--move', type=float, default=0.0,
                        help="per-tick probability of a random step")
    parser.add_argument('--headless', type=int, metavar='TICKS', default=None,
                        help="run TICKS ticks without a window and exit")
    parser.add_argument('--log-every', type=int, default=100,
                        help="headless: log stats every N ticks")
    parser.add_argument('--log-level', default='INFO')
    return parser.parse_args(argv)


def format_stats(stats):
    return (f"Ticks: {stats.ticks} | Agents: {stats.count} | "
            f"Avg energy: {stats.mean_energy:.2f} | Avg food: {stats.mean_food:.3f} | "
            f"Births: {stats.births}  Deaths: {stats.deaths}")


def new_environment(args, params, seed_noise):
    env = Environment(args.width, args.height, args.scale)
    env.reset(args.seed, args.population, seed_noise,
              params.division_threshold, params.carrying_capacity)
    return env


def run_headless(args):
    """Runs a fixed number of ticks and returns the final Stats."""
    params, seed_noise = load_preset(args.preset, move_probability=args.move)
    env = new_environment(args, params, seed_noise)
    logger.info("Headless run: %d ticks, preset=%s, seed=%r",
                args.headless, args.preset, args.seed)

    every = max(1, args.log_every)
    for _ in range(args.headless):
        env.tick(params)
        if env.ticks % every == 0:
            logger.info(format_stats(env.stats()))
        if not env.agents:
            logger.info("Extinction at tick %d", env.ticks)
            break

    stats = env.stats()
    logger.info("Done. %s", format_stats(stats))
    return stats


def paint_obstacle(env, pos, blocked):
    """Marks the cell under a window position; clicks outside the grid are ignored."""
    gx, gy = pos[0] // env.scale, pos[1] // env.scale
    if env.field.in_bounds(gx, gy):
        env.set_obstacle(gx, gy, blocked)


def run_interactive(args):
    params, seed_noise = load_preset(args.preset, move_probability=args.move)
    env = new_environment(args, params, seed_noise)

    pygame.init()

    # Setup Window
    grid_w, grid_h = env.width * env.scale, env.height * env.scale
    screen = pygame.display.set_mode((grid_w, grid_h + STATUS_HEIGHT))
    pygame.display.set_caption("Monod Field")

    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 14)
    grid_surf = pygame.Surface((grid_w, grid_h))

    running = True
    paused = False
    speed = max(1, min(MAX_SPEED, args.speed))
    preset = args.preset
    logger.info("Interactive run: preset=%s, seed=%r", preset, args.seed)

    while running:
        step_once = False

        # --- Event Handling ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_q, pygame.K_ESCAPE):
                    running = False
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                elif event.key == pygame.K_n:
                    step_once = True
                elif event.key == pygame.K_r:
                    env.reset(args.seed, args.population, seed_noise,
                              params.division_threshold, params.carrying_capacity,
                              keep_obstacles=True)
                elif event.key == pygame.K_UP:
                    speed = min(MAX_SPEED, speed + 1)
                elif event.key == pygame.K_DOWN:
                    speed = max(1, speed - 1)
                elif pygame.K_1 <= event.key < pygame.K_1 + len(PRESET_ORDER):
                    preset = PRESET_ORDER[event.key - pygame.K_1]
                    params, seed_noise = load_preset(preset, move_probability=args.move)
                    logger.info("Preset: %s", preset)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 3):
                paint_obstacle(env, event.pos, event.button == 1)
            elif event.type == pygame.MOUSEMOTION and (event.buttons[0] or event.buttons[2]):
                paint_obstacle(env, event.pos, bool(event.buttons[0]))

        # --- Logic Update ---
        if not paused:
            env.run(params, speed)
        elif step_once:
            env.tick(params)

        # --- Rendering ---
        screen.fill(COLOR_BG)
        pixels = rasterize(env, params.carrying_capacity)[..., :3]
        pygame.surfarray.blit_array(grid_surf, pixels.transpose(1, 0, 2))
        screen.blit(grid_surf, (0, 0))

        pygame.draw.rect(screen, (30, 30, 30), (0, grid_h, grid_w, STATUS_HEIGHT))
        stats_text = f"{format_stats(env.stats())} | x{speed} | {preset}"
        if paused:
            stats_text += " [PAUSED]"
        text_surf = font.render(stats_text, True, COLOR_TEXT)
        screen.blit(text_surf, (10, grid_h + 10))

        pygame.display.flip()
        clock.tick(FPS)

    pygame.quit()
    return env.stats()


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.headless is not None:
        run_headless(args)
    else:
        run_interactive(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
