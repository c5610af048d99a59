#!/usr/bin/env python3
"""
Test suite for pipes.py: spawning, scrolling, scoring and collision.
"""

import random
import unittest

from flappy_physics.data_models import Bird, Pipe
from flappy_physics.pipes import (
    create_pipe, update_pipes, should_spawn_pipe, check_pipe_collision, check_any_collision,
    count_passed_pipes,
)


class ConstantRandom(random.Random):
    """Generator that always returns the same value from random()."""

    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


class TestCreatePipe(unittest.TestCase):

    def test_gap_and_bounds_hold_for_many_draws(self):
        for seed in range(100):
            pipe = create_pipe(530, 160, rng=random.Random(seed))
            self.assertAlmostEqual(pipe.bottom_y - pipe.top_height, 160)
            self.assertGreaterEqual(pipe.top_height, 80)
            self.assertLessEqual(pipe.bottom_y, 560)
            self.assertEqual(pipe.x, 530)
            self.assertFalse(pipe.passed)

    def test_band_limits(self):
        low = create_pipe(530, 160, rng=ConstantRandom(0.0))
        self.assertEqual(low.top_height, 80)
        high = create_pipe(530, 160, rng=ConstantRandom(1.0))
        # 640 - 80 ground - 160 gap - 80 min bottom pillar
        self.assertEqual(high.bottom_y, 480)

    def test_width_is_configurable(self):
        self.assertEqual(create_pipe(0, 120, width=90, rng=ConstantRandom(0.5)).width, 90)

    def test_no_modifiers_by_default(self):
        pipe = create_pipe(530, 160, rng=ConstantRandom(0.5))
        self.assertIsNone(pipe.electric)
        self.assertIsNone(pipe.superposition)


class TestUpdatePipes(unittest.TestCase):

    def test_scrolls_left(self):
        pipes = update_pipes((Pipe(x=300, top_height=100, bottom_y=260),), 4)
        self.assertEqual(pipes[0].x, 296)

    def test_removal_boundary(self):
        # Trailing edge at -50 is gone, at -40 it stays
        self.assertEqual(update_pipes((Pipe(x=-110, top_height=100, bottom_y=260),), 0), ())
        kept = update_pipes((Pipe(x=-100, top_height=100, bottom_y=260),), 0)
        self.assertEqual(len(kept), 1)

    def test_removal_after_move(self):
        pipes = (Pipe(x=-106, top_height=100, bottom_y=260), Pipe(x=200, top_height=100, bottom_y=260))
        updated = update_pipes(pipes, 4)
        self.assertEqual([p.x for p in updated], [196])

    def test_input_is_not_mutated(self):
        pipes = (Pipe(x=300, top_height=100, bottom_y=260),)
        update_pipes(pipes, 4)
        self.assertEqual(pipes[0].x, 300)


class TestShouldSpawn(unittest.TestCase):

    def test_empty_spawns(self):
        self.assertTrue(should_spawn_pipe((), 280))

    def test_position_triggered_by_last_pipe(self):
        far = Pipe(x=-10, top_height=100, bottom_y=260)
        self.assertTrue(should_spawn_pipe((far, Pipe(x=199, top_height=100, bottom_y=260)), 280))
        self.assertFalse(should_spawn_pipe((far, Pipe(x=200, top_height=100, bottom_y=260)), 280))


class TestCollision(unittest.TestCase):

    def setUp(self):
        self.pipe = Pipe(x=100, top_height=200, bottom_y=360)

    def test_bird_inside_gap(self):
        self.assertFalse(check_pipe_collision(Bird(x=80, y=250), self.pipe))

    def test_hits_top_pillar(self):
        self.assertTrue(check_pipe_collision(Bird(x=80, y=190), self.pipe))

    def test_hits_bottom_pillar(self):
        self.assertTrue(check_pipe_collision(Bird(x=80, y=340), self.pipe))

    def test_no_horizontal_overlap(self):
        self.assertFalse(check_pipe_collision(Bird(x=80, y=10), Pipe(x=200, top_height=200, bottom_y=360)))

    def test_touching_edge_is_not_overlap(self):
        # Bird spans 80..114
        self.assertFalse(check_pipe_collision(Bird(x=80, y=10), Pipe(x=114, top_height=200, bottom_y=360)))

    def test_any_collision(self):
        pipes = (Pipe(x=300, top_height=50, bottom_y=200), self.pipe)
        self.assertTrue(check_any_collision(Bird(x=80, y=100), pipes))
        self.assertFalse(check_any_collision(Bird(x=80, y=250), pipes))


class TestScoring(unittest.TestCase):

    def test_passed_pipe_scores_once(self):
        bird = Bird(x=80)
        pipes = (Pipe(x=0, top_height=100, bottom_y=260),)
        pipes, scored = count_passed_pipes(bird, pipes)
        self.assertEqual(scored, 1)
        self.assertTrue(pipes[0].passed)
        pipes, scored = count_passed_pipes(bird, pipes)
        self.assertEqual(scored, 0)
        self.assertTrue(pipes[0].passed)

    def test_trailing_edge_must_be_behind_bird(self):
        _, scored = count_passed_pipes(Bird(x=80), (Pipe(x=20, top_height=100, bottom_y=260),))
        self.assertEqual(scored, 0)

    def test_counts_every_pipe_crossed_this_tick(self):
        pipes = (
            Pipe(x=-40, top_height=100, bottom_y=260),
            Pipe(x=10, top_height=100, bottom_y=260),
            Pipe(x=300, top_height=100, bottom_y=260),
        )
        updated, scored = count_passed_pipes(Bird(x=80), pipes)
        self.assertEqual(scored, 2)
        self.assertEqual([p.passed for p in updated], [True, True, False])

    def test_no_double_count_across_ticks(self):
        bird = Bird(x=80)
        pipes = (Pipe(x=40, top_height=100, bottom_y=260),)
        total = 0
        for _ in range(60):
            pipes = update_pipes(pipes, 4)
            pipes, scored = count_passed_pipes(bird, pipes)
            total += scored
        self.assertEqual(total, 1)


if __name__ == "__main__":
    unittest.main()
