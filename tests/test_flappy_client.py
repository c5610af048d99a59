#!/usr/bin/env python3
"""
Test suite for flappy_client.py: input mapping, fixed tick and rendering.
Runs headless through SDL's dummy drivers.
"""

import os
import random
import unittest
from dataclasses import replace

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402

from flappy_physics.data_models import (  # noqa: E402
    GameStatus, PhysicsType, Pipe, ElectricCharge, GammaRay, RayState, Vortex, Particle,
)
from flappy_physics.flappy_client import (  # noqa: E402
    FlappyClient, draw_game, build_parser, SKY, GROUND,
)
from flappy_physics.physics_engine import GameEngine, create_initial_state  # noqa: E402


class TestFlappyClient(unittest.TestCase):

    def setUp(self):
        self.engine = GameEngine(rng=random.Random(1))
        self.client = FlappyClient(self.engine)

    def tearDown(self):
        pygame.quit()

    def test_space_starts_game(self):
        self.client.handle_key(pygame.K_SPACE)
        self.assertEqual(self.engine.state.status, GameStatus.PLAYING)

    def test_mouse_click_jumps(self):
        self.client.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 0)))
        self.assertEqual(self.engine.state.status, GameStatus.PLAYING)

    def test_quit_event_stops_loop(self):
        self.client.running = True
        self.client.handle_event(pygame.event.Event(pygame.QUIT))
        self.assertFalse(self.client.running)

    def test_chaos_toggle_syncs_state(self):
        self.client.handle_key(pygame.K_c)
        self.assertTrue(self.engine.state.config.chaos_enabled)
        self.assertTrue(self.engine.state.chaos.enabled)
        self.client.handle_key(pygame.K_c)
        self.assertFalse(self.engine.state.chaos.enabled)

    def test_physics_cycle_key(self):
        self.client.handle_key(pygame.K_p)
        self.assertEqual(self.engine.state.config.physics_type, PhysicsType.LINEAR)

    def test_tuning_keys(self):
        self.client.handle_key(pygame.K_RIGHTBRACKET)
        self.assertEqual(self.engine.state.config.speed, 5)
        for _ in range(20):
            self.client.handle_key(pygame.K_RIGHTBRACKET)
        self.assertEqual(self.engine.state.config.speed, 10)

    def test_hazard_keys(self):
        self.client.handle_key(pygame.K_2)
        self.assertFalse(self.engine.state.config.hazards.gamma_rays)
        self.assertTrue(self.engine.state.config.hazards.vortexes)
        self.client.handle_key(pygame.K_2)
        self.assertTrue(self.engine.state.config.hazards.gamma_rays)

    def test_gravity_flip_key(self):
        self.client.handle_key(pygame.K_c)
        self.client.handle_key(pygame.K_g)
        self.assertEqual(self.engine.state.chaos.gravity_flips, ())  # not while ready
        self.client.handle_key(pygame.K_SPACE)
        self.client.handle_key(pygame.K_g)
        self.assertEqual(len(self.engine.state.chaos.gravity_flips), 1)

    def test_restart_only_when_over(self):
        self.client.handle_key(pygame.K_SPACE)
        self.client.handle_key(pygame.K_r)
        self.assertEqual(self.engine.state.status, GameStatus.PLAYING)

    def test_fixed_tick_accumulator(self):
        self.client.handle_key(pygame.K_SPACE)
        self.assertEqual(self.client.advance(0.055), 3)
        self.assertEqual(self.engine.state.tick, 3)
        # Leftover time carries into the next frame
        self.assertEqual(self.client.advance(0.012), 1)


class TestDrawGame(unittest.TestCase):

    def setUp(self):
        pygame.init()
        self.screen = pygame.Surface((480, 640))

    def tearDown(self):
        pygame.quit()

    def test_background_and_ground(self):
        draw_game(self.screen, create_initial_state())
        self.assertEqual(tuple(self.screen.get_at((5, 5)))[:3], SKY)
        self.assertEqual(tuple(self.screen.get_at((5, 600)))[:3], GROUND)

    def test_draws_every_hazard(self):
        state = create_initial_state()
        chaos = replace(
            state.chaos,
            enabled=True,
            gamma_rays=(GammaRay(id="r", y=100, width=480, height=15, warning_time=240,
                                 active_time=30, state=RayState.ACTIVE),),
            vortexes=(Vortex(id="v", x=300, y=300, radius=60, strength=0.15),),
            particles=(Particle(id="p", x=200, y=200, vx=1, vy=0, radius=4, color="#00FFFF"),),
        )
        pipe = Pipe(x=200, top_height=100, bottom_y=300, electric=ElectricCharge(active=True))
        state = replace(state, pipes=(pipe,), chaos=chaos)
        draw_game(self.screen, state, pygame.font.Font(None, 24))
        self.assertEqual(tuple(self.screen.get_at((0, 107)))[:3], (255, 40, 40))


class TestParser(unittest.TestCase):

    def test_defaults(self):
        args = build_parser().parse_args([])
        self.assertFalse(args.chaos)
        self.assertEqual(args.physics, "parabolic")
        self.assertIsNone(args.seed)

    def test_flags(self):
        args = build_parser().parse_args(["--chaos", "--physics", "sine", "--seed", "7"])
        self.assertTrue(args.chaos)
        self.assertEqual(args.physics, "sine")
        self.assertEqual(args.seed, 7)


if __name__ == "__main__":
    unittest.main()
