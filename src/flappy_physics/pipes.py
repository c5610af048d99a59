"""
pipes.py: Pipe spawning, scrolling, scoring and collision.
"""

import random
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from .constants import (
    SCREEN_WIDTH, SCREEN_HEIGHT, GROUND_HEIGHT, MIN_PIPE_HEIGHT, PIPE_WIDTH,
    PIPE_CULL_MARGIN,
)
from .data_models import Bird, Pipe


def create_pipe(x: float, gap: float, width: float = PIPE_WIDTH,
                rng: Optional[random.Random] = None) -> Pipe:
    """Creates a pipe with a random gap position that leaves room for both pillars."""
    rng = rng or random
    available = SCREEN_HEIGHT - GROUND_HEIGHT - gap - MIN_PIPE_HEIGHT * 2
    top_height = MIN_PIPE_HEIGHT + rng.random() * available
    return Pipe(x=x, top_height=top_height, bottom_y=top_height + gap, width=width)


def update_pipes(pipes: Sequence[Pipe], speed: float) -> Tuple[Pipe, ...]:
    """Scrolls pipes left and drops those that are fully off-screen."""
    moved = (replace(pipe, x=pipe.x - speed) for pipe in pipes)
    return tuple(p for p in moved if p.x + p.width > -PIPE_CULL_MARGIN)


def should_spawn_pipe(pipes: Sequence[Pipe], spacing: float) -> bool:
    if not pipes:
        return True
    return pipes[-1].x < SCREEN_WIDTH - spacing


def check_pipe_collision(bird: Bird, pipe: Pipe) -> bool:
    """Axis-aligned box test of the bird against the top and bottom pillars."""
    if bird.x + bird.width > pipe.x and bird.x < pipe.x + pipe.width:
        if bird.y < pipe.top_height:
            return True
        if bird.y + bird.height > pipe.bottom_y:
            return True
    return False


def check_any_collision(bird: Bird, pipes: Sequence[Pipe]) -> bool:
    return any(check_pipe_collision(bird, pipe) for pipe in pipes)


def count_passed_pipes(bird: Bird, pipes: Sequence[Pipe]) -> Tuple[Tuple[Pipe, ...], int]:
    """
    Marks every pipe whose trailing edge is behind the bird as passed.
    Returns the updated pipes and how many were newly passed this call.
    """
    scored = 0
    updated = []
    for pipe in pipes:
        if not pipe.passed and pipe.x + pipe.width < bird.x:
            scored += 1
            pipe = replace(pipe, passed=True)
        updated.append(pipe)
    return tuple(updated), scored
