#!/usr/bin/env python3
"""
flappy_client.py

pygame host for the engine: captures input, runs the fixed logical tick,
draws the state snapshot and lets the player live-tune the configuration.
"""

import argparse
import logging
import math
import random
from typing import Dict, Optional, Tuple

import pygame

from .config import clamp_updates, next_physics_type, step_option
from .constants import (
    SCREEN_WIDTH, SCREEN_HEIGHT, GROUND_Y, GROUND_HEIGHT, TICK_RATE, DB_FILE,
)
from .data_models import GameConfig, GameState, GameStatus, PhysicsType, RayState
from .physics_engine import GameEngine
from .score_db import ScoreStore

logger = logging.getLogger(__name__)

# RENDER_FPS can be faster than TICK_RATE for smooth rendering
RENDER_FPS = 60

SKY = (135, 206, 235)
GROUND = (139, 115, 85)
PIPE_COLOR = (16, 37, 68)
BIRD_COLOR = (16, 37, 68)
GHOST_COLOR = (120, 140, 170)
ELECTRIC_COLOR = (255, 230, 0)
WARNING_COLOR = (255, 120, 120)
RAY_COLOR = (255, 40, 40)
FLIP_COLOR = (180, 120, 255)
VORTEX_COLOR = (90, 40, 140)
WHITE = (255, 255, 255)

# Live tuning: key -> (option, direction)
TUNING_KEYS: Dict[int, Tuple[str, int]] = {
    pygame.K_RIGHTBRACKET: ("speed", 1),
    pygame.K_LEFTBRACKET: ("speed", -1),
    pygame.K_EQUALS: ("gravity", 1),
    pygame.K_MINUS: ("gravity", -1),
    pygame.K_PERIOD: ("pipe_gap", 1),
    pygame.K_COMMA: ("pipe_gap", -1),
    pygame.K_QUOTE: ("jump_height", 1),
    pygame.K_SEMICOLON: ("jump_height", -1),
    pygame.K_0: ("pipe_spacing", 1),
    pygame.K_9: ("pipe_spacing", -1),
}

HAZARD_KEYS: Dict[int, str] = {
    pygame.K_1: "electric_pipes",
    pygame.K_2: "gamma_rays",
    pygame.K_3: "vortexes",
    pygame.K_4: "particles",
    pygame.K_5: "schrodinger_pipes",
}


# ----------------- Rendering -----------------

def _draw_pipe(screen: pygame.Surface, pipe):
    color = GHOST_COLOR if pipe.is_ghost and pipe.is_revealed else PIPE_COLOR
    # Revealed ghosts are drawn hollow
    outline = 2 if pipe.is_ghost and pipe.is_revealed else 0
    pygame.draw.rect(screen, color, (pipe.x, 0, pipe.width, pipe.top_height), outline)
    pygame.draw.rect(screen, color,
                     (pipe.x, pipe.bottom_y, pipe.width, GROUND_Y - pipe.bottom_y), outline)

    if pipe.electric is not None and pipe.electric.active:
        for i in range(4):
            x = pipe.x + pipe.width * (i + 0.5) / 4
            pygame.draw.line(screen, ELECTRIC_COLOR, (x, pipe.top_height), (x, pipe.bottom_y), 2)


def _draw_chaos(screen: pygame.Surface, state: GameState, tick: int):
    chaos = state.chaos

    for flip in chaos.gravity_flips:
        pygame.draw.rect(screen, FLIP_COLOR, (flip.x, 0, flip.width, GROUND_Y),
                         0 if flip.is_active else 2)

    for ray in chaos.gamma_rays:
        if ray.state == RayState.WARNING:
            if (tick // 10) % 2 == 0:
                pygame.draw.line(screen, WARNING_COLOR, (0, ray.y + ray.height / 2),
                                 (ray.width, ray.y + ray.height / 2), 1)
        elif ray.state == RayState.ACTIVE:
            pygame.draw.rect(screen, RAY_COLOR, (0, ray.y, ray.width, ray.height))
        else:
            thickness = max(1, int(ray.height * (1 - ray.progress)))
            pygame.draw.rect(screen, WARNING_COLOR, (0, ray.y, ray.width, thickness))

    for vortex in chaos.vortexes:
        center = (int(vortex.x), int(vortex.y))
        pygame.draw.circle(screen, VORTEX_COLOR, center, int(vortex.radius), 2)
        arm = (vortex.x + math.cos(vortex.rotation) * vortex.radius,
               vortex.y + math.sin(vortex.rotation) * vortex.radius)
        pygame.draw.line(screen, VORTEX_COLOR, center, arm, 2)

    for particle in chaos.particles:
        pygame.draw.circle(screen, pygame.Color(particle.color),
                           (int(particle.x), int(particle.y)), max(1, int(particle.radius)))


def draw_game(screen: pygame.Surface, state: GameState, font: Optional[pygame.font.Font] = None):
    """Renders a state snapshot. Reads the state only, never changes it."""
    screen.fill(SKY)

    for pipe in state.pipes:
        _draw_pipe(screen, pipe)

    _draw_chaos(screen, state, state.tick)

    pygame.draw.rect(screen, GROUND, (0, GROUND_Y, SCREEN_WIDTH, GROUND_HEIGHT))

    bird = state.bird
    if state.black_hole.active:
        radius = int(20 + 80 * state.black_hole.progress)
        pygame.draw.circle(screen, (0, 0, 0), (SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2), radius)
        # Bird shrinks toward the centre while it is pulled in
        scale = max(0.05, 1 - state.black_hole.progress)
        pygame.draw.rect(screen, BIRD_COLOR, (bird.x, bird.y, bird.width * scale,
                                              bird.height * scale))
    else:
        pygame.draw.rect(screen, BIRD_COLOR, (bird.x, bird.y, bird.width, bird.height))

    if font is None:
        return

    score_text = font.render(f"Score: {state.score}  Best: {state.best_score}", True, WHITE)
    screen.blit(score_text, (SCREEN_WIDTH // 2 - score_text.get_width() // 2, 20))

    config = state.config
    info = font.render(
        f"{config.physics_type.value}"
        f" | spd {config.speed} | g {config.gravity} | gap {config.pipe_gap}"
        f" | chaos {'on' if config.chaos_enabled else 'off'}",
        True, WHITE)
    screen.blit(info, (10, SCREEN_HEIGHT - GROUND_HEIGHT + 10))

    message = None
    if state.status == GameStatus.READY:
        message = "Press SPACE / CLICK to start"
    elif state.status == GameStatus.OVER:
        message = "Game over - SPACE / CLICK to play again"
    elif state.black_hole.waiting_to_resume:
        message = "New record! SPACE / CLICK to continue"
    if message:
        surf = font.render(message, True, WHITE)
        screen.blit(surf, (SCREEN_WIDTH // 2 - surf.get_width() // 2, SCREEN_HEIGHT // 2 - 60))


# ----------------- Game Client -----------------

class FlappyClient:
    def __init__(self, engine: GameEngine):
        pygame.init()
        self.engine = engine
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("Flappy Physics")
        self.font = pygame.font.Font(None, 24)

        # Time Management
        self.clock = pygame.time.Clock()
        self.tick_time = 1.0 / TICK_RATE
        self.tick_timer = 0.0
        self.running = False

    def handle_event(self, event: pygame.event.Event):
        """Translates one pygame event into an engine command."""
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.MOUSEBUTTONDOWN:
            self.engine.jump()
        elif event.type == pygame.KEYDOWN:
            self.handle_key(event.key)

    def handle_key(self, key: int):
        engine = self.engine
        config = engine.state.config
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key in (pygame.K_SPACE, pygame.K_UP):
            engine.jump()
        elif key == pygame.K_r and engine.state.status == GameStatus.OVER:
            engine.restart()
        elif key == pygame.K_p:
            engine.configure(physics_type=next_physics_type(config.physics_type))
        elif key == pygame.K_c:
            engine.configure(chaos_enabled=not config.chaos_enabled)
        elif key == pygame.K_g:
            engine.place_gravity_flip()
        elif key in HAZARD_KEYS:
            name = HAZARD_KEYS[key]
            engine.configure(hazards={name: not getattr(config.hazards, name)})
        elif key in TUNING_KEYS:
            name, direction = TUNING_KEYS[key]
            updates = step_option(config, name, direction)
            logger.info("Config %s -> %s", name, updates[name])
            engine.configure(**updates)

    def advance(self, elapsed: float) -> int:
        """Runs as many fixed ticks as `elapsed` seconds allow. Returns the count."""
        self.tick_timer += elapsed
        ticks = 0
        while self.tick_timer >= self.tick_time:
            self.tick_timer -= self.tick_time
            self.engine.step()
            ticks += 1
        return ticks

    def run(self):
        """The main client execution loop."""
        self.running = True
        while self.running:
            elapsed = self.clock.tick(RENDER_FPS) / 1000.0

            for event in pygame.event.get():
                self.handle_event(event)

            self.advance(elapsed)

            draw_game(self.screen, self.engine.state, self.font)
            pygame.display.flip()

        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Flappy Physics")
    parser.add_argument("--db", default=DB_FILE, help="SQLite file for the best score")
    parser.add_argument("--chaos", action="store_true", help="Start with chaos hazards on")
    parser.add_argument("--physics", default=PhysicsType.PARABOLIC.value,
                        choices=[p.value for p in PhysicsType], help="Jump curve")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the hazard generator")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = ScoreStore(args.db)
    options = clamp_updates({"physics_type": args.physics})
    config = GameConfig(chaos_enabled=args.chaos, **options)
    engine = GameEngine.from_store(store, config=config, rng=random.Random(args.seed))
    print(f"Best score so far: {engine.stored_best}")

    client = FlappyClient(engine)
    try:
        client.run()
    except KeyboardInterrupt:
        pygame.quit()
    finally:
        store.close()
        print(f"Best score: {engine.state.best_score}")


if __name__ == "__main__":
    main()
