"""
physics_core.py: Deterministic kinematic functions for the bird.

Each motion curve produces a visually different jump:

LINEAR       straight line up, then a sharp drop (tent shape)
PARABOLIC    classic arc, gravity always active
EXPONENTIAL  strong burst that decays quickly, slow peak, normal fall
SINE         S-curve rise following a cosine profile, then normal fall

All functions are pure: they take values and return new values.
"""

import math
from dataclasses import replace

from .constants import (
    GROUND_Y, LINEAR_ASCENT_TICKS, SINE_ASCENT_TICKS, LINEAR_FALL_FACTOR,
    EXPONENTIAL_DECAY_RATE,
)
from .data_models import Bird, PhysicsType

# Initial jump velocity per curve, as a multiple of jump height
JUMP_FACTORS = {
    PhysicsType.PARABOLIC: 1.0,
    PhysicsType.LINEAR: 0.5,
    PhysicsType.EXPONENTIAL: 1.8,   # Must start strong, it decays fast
    PhysicsType.SINE: 0.9,
}


def apply_gravity(velocity: float, gravity: float, physics_type: str,
                  jump_time: int, jump_height: float) -> float:
    """Returns the velocity after one tick for the selected curve."""
    if physics_type == PhysicsType.LINEAR:
        # No gravity while ascending, then a stronger pull for a sharp turn
        if velocity < 0 and jump_time < LINEAR_ASCENT_TICKS:
            return velocity
        return velocity + gravity * LINEAR_FALL_FACTOR

    if physics_type == PhysicsType.EXPONENTIAL:
        if velocity < 0:
            # Half gravity keeps the decay from hovering forever
            return velocity * (1 - EXPONENTIAL_DECAY_RATE) + gravity * 0.5
        return velocity + gravity

    if physics_type == PhysicsType.SINE:
        if jump_time < SINE_ASCENT_TICKS and velocity < 0:
            phase = (jump_time / SINE_ASCENT_TICKS) * math.pi
            target = -jump_height * max(0.0, math.cos(phase)) * 0.7
            return velocity * 0.8 + target * 0.2 + gravity * 0.3
        return velocity + gravity

    # Parabolic, and anything unrecognized
    return velocity + gravity


def apply_jump(jump_height: float, physics_type: str) -> float:
    """Returns the instantaneous velocity after a jump."""
    return -jump_height * JUMP_FACTORS.get(physics_type, 1.0)


def update_position(y: float, velocity: float) -> float:
    return y + velocity


# -------- Bird --------

def create_bird() -> Bird:
    return Bird()


def update_bird(bird: Bird, gravity: float, physics_type: str, jump_height: float) -> Bird:
    """Advances the bird one tick: velocity, then position, then jump timer."""
    velocity = apply_gravity(bird.velocity, gravity, physics_type, bird.jump_time, jump_height)
    return replace(
        bird,
        velocity=velocity,
        y=update_position(bird.y, velocity),
        jump_time=bird.jump_time + 1,
    )


def jump_bird(bird: Bird, jump_height: float, physics_type: str) -> Bird:
    return replace(bird, velocity=apply_jump(jump_height, physics_type), jump_time=0)


def is_bird_out_of_bounds(bird: Bird) -> bool:
    """Touching the ground or leaving the top of the field is fatal."""
    return bird.y + bird.height > GROUND_Y or bird.y < 0
