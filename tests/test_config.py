#!/usr/bin/env python3
"""
Test suite for config.py: clamping and live-tuning steps.
"""

import unittest

from flappy_physics.config import clamp_value, clamp_updates, step_option, next_physics_type
from flappy_physics.data_models import GameConfig, PhysicsType


class TestClamp(unittest.TestCase):

    def test_clamps_into_range(self):
        self.assertEqual(clamp_value("speed", 50), 10)
        self.assertEqual(clamp_value("speed", 0), 1)
        self.assertEqual(clamp_value("gravity", 0), 0.05)
        self.assertEqual(clamp_value("pipe_gap", 170), 170)

    def test_unknown_names_pass_through(self):
        self.assertEqual(clamp_value("pipe_width", 999), 999)

    def test_clamp_updates(self):
        updates = clamp_updates({"jump_height": 20, "pipe_spacing": 100, "chaos_enabled": True})
        self.assertEqual(updates, {"jump_height": 11, "pipe_spacing": 150, "chaos_enabled": True})

    def test_physics_type_coerced(self):
        self.assertEqual(clamp_updates({"physics_type": "sine"})["physics_type"], PhysicsType.SINE)
        self.assertEqual(clamp_updates({"physics_type": "bogus"})["physics_type"],
                         PhysicsType.PARABOLIC)


class TestStepOption(unittest.TestCase):

    def test_step_up(self):
        self.assertEqual(step_option(GameConfig(), "speed", 1), {"speed": 5})

    def test_step_down_stops_at_minimum(self):
        config = GameConfig(pipe_gap=100)
        self.assertEqual(step_option(config, "pipe_gap", -1), {"pipe_gap": 100})

    def test_gravity_step_is_rounded(self):
        self.assertEqual(step_option(GameConfig(), "gravity", 1), {"gravity": 0.45})


class TestPhysicsCycle(unittest.TestCase):

    def test_cycles_through_all_curves(self):
        seen = [PhysicsType.PARABOLIC]
        for _ in range(4):
            seen.append(next_physics_type(seen[-1]))
        self.assertEqual(seen, [
            PhysicsType.PARABOLIC, PhysicsType.LINEAR, PhysicsType.EXPONENTIAL,
            PhysicsType.SINE, PhysicsType.PARABOLIC,
        ])

    def test_accepts_plain_strings(self):
        self.assertEqual(next_physics_type("linear"), PhysicsType.EXPONENTIAL)


if __name__ == "__main__":
    unittest.main()
