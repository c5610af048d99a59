"""
physics_engine.py: The authoritative game simulation.

The pure functions here map one GameState snapshot to the next. GameEngine
wraps them for a host loop: it owns the current snapshot, the random
generator and the best-score store.

Per-tick order while playing:
  1. black hole animation (suspends everything else)
  2. chaos update, gravity flip trigger, bird physics, vortex pull
  3. pipe scroll/spawn, electric cycles, Schrodinger reveals
  4. scoring
  5. black hole trigger (pre-empts collisions for this tick)
  6. collisions
"""

import logging
import random
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional

from .constants import (
    SCREEN_HEIGHT, BIRD_X, PIPE_SPAWN_X, ELECTRIC_CHANCE, VORTEX_BIRD_MIN_X,
    VORTEX_BIRD_MAX_X, BLACK_HOLE_DURATION, BLACK_HOLE_PULL_PHASE,
    BLACK_HOLE_STRETCH_PHASE, PROGRESS_EPSILON,
)
from .data_models import (
    GameState, GameConfig, GameStatus, BlackHole, BlackHolePhase, HazardToggles, Pipe,
    ChaosState,
)
from .physics_core import create_bird, update_bird, jump_bird, is_bird_out_of_bounds
from .pipes import (
    create_pipe, update_pipes, should_spawn_pipe, check_any_collision, count_passed_pipes,
)
from .chaos import (
    create_initial_chaos, update_chaos, check_chaos_collision, check_electric_pipe_collision,
    apply_vortex_force, check_gravity_flip_trigger, apply_schrodinger_effect,
    reveal_schrodinger_pipe, make_electric_pipe, update_electric_pipe, collidable_pipes,
    spawn_gravity_flip,
)
from .config import coerce_physics_type
from .score_db import ScoreStore

logger = logging.getLogger(__name__)

CONFIG_FIELDS = frozenset(f.name for f in fields(GameConfig))
HAZARD_FIELDS = frozenset(f.name for f in fields(HazardToggles))


# -------- Lifecycle --------

def black_hole_phase(progress: float) -> BlackHolePhase:
    if progress < BLACK_HOLE_PULL_PHASE:
        return BlackHolePhase.PULLING
    if progress < BLACK_HOLE_STRETCH_PHASE:
        return BlackHolePhase.STRETCHING
    return BlackHolePhase.NONE


def create_initial_state(best_score: int = 0, config: Optional[GameConfig] = None) -> GameState:
    if config is None:
        config = GameConfig()
    return GameState(
        bird=create_bird(),
        best_score=best_score,
        previous_best=best_score,
        config=config,
        chaos=create_initial_chaos(enabled=config.chaos_enabled),
    )


def start_game(state: GameState) -> GameState:
    logger.info("Game started (best %d, physics %s, chaos %s)",
                state.best_score, state.config.physics_type.value,
                state.config.chaos_enabled)
    return replace(
        state,
        status=GameStatus.PLAYING,
        tick=0,
        previous_best=state.best_score,
        bird=jump_bird(state.bird, state.config.jump_height, state.config.physics_type),
        chaos=create_initial_chaos(enabled=state.config.chaos_enabled),
    )


def restart_game(state: GameState) -> GameState:
    """Fresh game that keeps the best score and the current config."""
    return create_initial_state(state.best_score, state.config)


def handle_jump(state: GameState) -> GameState:
    """The single input command; its meaning depends on where the game is."""
    # No jumping while the black hole animation plays
    if state.black_hole.active:
        return state

    if state.black_hole.waiting_to_resume:
        return replace(
            state,
            bird=jump_bird(state.bird, state.config.jump_height, state.config.physics_type),
            black_hole=replace(state.black_hole, waiting_to_resume=False),
        )

    if state.status == GameStatus.READY:
        return start_game(state)

    if state.status == GameStatus.PLAYING:
        return replace(
            state,
            bird=jump_bird(state.bird, state.config.jump_height, state.config.physics_type),
        )

    return start_game(restart_game(state))


# -------- Tick --------

def _advance_black_hole(state: GameState, tick: int) -> GameState:
    progress = state.black_hole.progress + 1 / BLACK_HOLE_DURATION

    if progress < 1 - PROGRESS_EPSILON:
        return replace(
            state,
            tick=tick,
            black_hole=replace(state.black_hole, progress=progress,
                               phase=black_hole_phase(progress)),
        )

    # Animation complete: bird reappears centred and waits for the player
    logger.debug("Black hole finished, waiting for player to resume")
    return replace(
        state,
        tick=tick,
        pipes=(),
        bird=replace(state.bird, x=BIRD_X, y=SCREEN_HEIGHT / 2, velocity=0.0),
        black_hole=replace(state.black_hole, active=False, progress=0.0,
                           phase=BlackHolePhase.NONE, waiting_to_resume=True),
        chaos=replace(state.chaos, gamma_rays=(), gravity_flips=(), vortexes=(),
                      particles=(), gravity_multiplier=1),
    )


def _spawn_pipe(config: GameConfig, chaos: ChaosState, rng: random.Random) -> Pipe:
    pipe = create_pipe(PIPE_SPAWN_X, config.pipe_gap, config.pipe_width, rng)

    if config.chaos_enabled and chaos.schrodinger_mode:
        pipe = apply_schrodinger_effect(pipe, chaos, rng)

    if config.chaos_enabled and config.hazards.electric_pipes and rng.random() < ELECTRIC_CHANCE:
        pipe = make_electric_pipe(pipe)

    return pipe


def _is_fatal(state: GameState) -> bool:
    bird = state.bird
    hit_pipe = check_any_collision(bird, collidable_pipes(state.pipes))
    hit_bounds = is_bird_out_of_bounds(bird)
    hit_chaos = check_chaos_collision(bird, state.chaos)
    hit_electric = state.config.chaos_enabled and check_electric_pipe_collision(bird, state.pipes)
    return hit_pipe or hit_bounds or hit_chaos or hit_electric


def update_game(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """Advances the game by exactly one tick. A no-op unless playing."""
    if state.status != GameStatus.PLAYING or state.black_hole.waiting_to_resume:
        return state
    rng = rng or random
    tick = state.tick + 1

    if state.black_hole.active:
        return _advance_black_hole(state, tick)

    config = state.config

    # 1. Chaos hazards and gravity flip
    chaos = state.chaos
    if config.chaos_enabled:
        chaos = update_chaos(chaos, config.speed, tick, config.hazards, rng)
        chaos = check_gravity_flip_trigger(state.bird, chaos)
    multiplier = chaos.gravity_multiplier if config.chaos_enabled else 1

    # 2. Bird
    bird = update_bird(state.bird, config.gravity * multiplier,
                       config.physics_type, config.jump_height)
    if config.chaos_enabled:
        vx, vy = apply_vortex_force(bird, chaos)
        bird = replace(
            bird,
            x=max(VORTEX_BIRD_MIN_X, min(bird.x + vx, VORTEX_BIRD_MAX_X)),
            velocity=bird.velocity + vy,
        )

    # 3. Pipes
    pipes = update_pipes(state.pipes, config.speed)
    if should_spawn_pipe(pipes, config.pipe_spacing):
        pipes += (_spawn_pipe(config, chaos, rng),)
    if config.chaos_enabled:
        pipes = tuple(reveal_schrodinger_pipe(update_electric_pipe(p), bird) for p in pipes)

    # 4. Scoring
    pipes, scored = count_passed_pipes(bird, pipes)
    score = state.score + scored

    advanced = replace(
        state,
        tick=tick,
        bird=bird,
        pipes=pipes,
        score=score,
        best_score=max(score, state.best_score),
        chaos=chaos,
    )

    # 5. Beating a previous best opens the black hole, skipping collisions
    if (score > state.previous_best and state.previous_best > 0
            and not state.black_hole.has_triggered_this_game):
        logger.info("New best %d beats %d, black hole opening", score, state.previous_best)
        return replace(advanced, black_hole=BlackHole(
            active=True,
            progress=0.0,
            phase=BlackHolePhase.PULLING,
            has_triggered_this_game=True,
        ))

    # 6. Collisions
    if _is_fatal(advanced):
        logger.info("Game over at tick %d with score %d", tick, score)
        return replace(advanced, status=GameStatus.OVER)

    return advanced


# -------- Gravity Flip Placement --------

def place_gravity_flip(state: GameState, x: float = PIPE_SPAWN_X) -> GameState:
    """Drops a gravity flip zone into the world. Ignored while chaos is off or not playing."""
    if not state.config.chaos_enabled or state.status != GameStatus.PLAYING:
        return state
    return replace(state, chaos=spawn_gravity_flip(state.chaos, x))


# -------- Config --------

def update_config(state: GameState, **updates: Any) -> GameState:
    """
    Merges a partial set of options into the config. `hazards` may be a
    HazardToggles or a partial mapping of toggle names. The chaos state's
    own `enabled` flag is always re-synced with `chaos_enabled`.
    """
    unknown = set(updates) - CONFIG_FIELDS
    if unknown:
        logger.debug("Ignoring unknown config options: %s", ", ".join(sorted(unknown)))
    changes = {k: v for k, v in updates.items() if k in CONFIG_FIELDS}
    if "physics_type" in changes:
        changes["physics_type"] = coerce_physics_type(changes["physics_type"])

    hazards = changes.get("hazards")
    if isinstance(hazards, Mapping):
        changes["hazards"] = replace(
            state.config.hazards,
            **{k: bool(v) for k, v in hazards.items() if k in HAZARD_FIELDS},
        )

    config = replace(state.config, **changes)
    return replace(
        state,
        config=config,
        chaos=replace(state.chaos, enabled=config.chaos_enabled),
    )


# -------- Engine --------

@dataclass
class GameEngine:
    """
    Single-writer driver for a host loop. step() and jump() are the only
    mutating commands; callers must not run them concurrently.
    """
    state: GameState = field(default_factory=create_initial_state)
    rng: random.Random = field(default_factory=random.Random)
    store: Optional[ScoreStore] = None
    stored_best: int = 0

    @classmethod
    def from_store(cls, store: ScoreStore, config: Optional[GameConfig] = None,
                   rng: Optional[random.Random] = None) -> "GameEngine":
        """Builds an engine seeded with the persisted best score."""
        best = store.load_best()
        return cls(
            state=create_initial_state(best, config),
            rng=rng if rng is not None else random.Random(),
            store=store,
            stored_best=best,
        )

    def step(self) -> GameState:
        previous = self.state
        self.state = update_game(previous, self.rng)
        if self.state.status == GameStatus.OVER and previous.status != GameStatus.OVER:
            self._save_best()
        return self.state

    def jump(self) -> GameState:
        self.state = handle_jump(self.state)
        return self.state

    def restart(self) -> GameState:
        self.state = restart_game(self.state)
        return self.state

    def configure(self, **updates: Any) -> GameState:
        self.state = update_config(self.state, **updates)
        return self.state

    def place_gravity_flip(self, x: float = PIPE_SPAWN_X) -> GameState:
        self.state = place_gravity_flip(self.state, x)
        return self.state

    def _save_best(self):
        best = self.state.best_score
        if best <= self.stored_best:
            return
        if self.store is not None and self.store.save_best(best):
            logger.info("Saved new best score %d", best)
        self.stored_best = best
