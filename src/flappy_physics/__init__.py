"""
flappy_physics: Deterministic Flappy Bird simulation with physics chaos hazards.
"""

__version__ = "0.1.0"
