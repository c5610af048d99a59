"""
config.py: Configuration boundary.

Range clamping happens here, before updates reach the engine. The engine
itself trusts whatever it is given.
"""

from typing import Any, Dict

from .constants import CONFIG_RANGES
from .data_models import GameConfig, PhysicsType

# Increment used by the live-tuning keys
CONFIG_STEPS = {
    "speed": 1,
    "jump_height": 1,
    "gravity": 0.05,
    "pipe_gap": 10,
    "pipe_spacing": 10,
}

PHYSICS_CYCLE = (
    PhysicsType.PARABOLIC, PhysicsType.LINEAR, PhysicsType.EXPONENTIAL, PhysicsType.SINE,
)


def clamp_value(name: str, value: float) -> float:
    """Clamps a tunable option into its allowed range. Unknown names pass through."""
    if name not in CONFIG_RANGES:
        return value
    low, high, _ = CONFIG_RANGES[name]
    return max(low, min(value, high))


def coerce_physics_type(value: Any) -> PhysicsType:
    """Unknown curve names fall back to parabolic."""
    try:
        return PhysicsType(value)
    except ValueError:
        return PhysicsType.PARABOLIC


def clamp_updates(updates: Dict[str, Any]) -> Dict[str, Any]:
    """Returns a copy of `updates` with every ranged option clamped."""
    clamped = {}
    for name, value in updates.items():
        if name in CONFIG_RANGES:
            value = clamp_value(name, value)
        elif name == "physics_type":
            value = coerce_physics_type(value)
        clamped[name] = value
    return clamped


def step_option(config: GameConfig, name: str, direction: int) -> Dict[str, Any]:
    """Builds a clamped single-option update nudging `name` up (+1) or down (-1)."""
    value = getattr(config, name) + CONFIG_STEPS[name] * direction
    return clamp_updates({name: round(value, 2)})


def next_physics_type(current: str) -> PhysicsType:
    try:
        index = PHYSICS_CYCLE.index(PhysicsType(current))
    except ValueError:
        index = -1
    return PHYSICS_CYCLE[(index + 1) % len(PHYSICS_CYCLE)]
