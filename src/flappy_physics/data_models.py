"""
data_models.py: Immutable data structures for the game state.

Every tick produces a brand-new GameState; nothing here is mutated in place.
Use dataclasses.replace() to derive updated snapshots.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .constants import (
    BIRD_X, BIRD_START_Y, BIRD_WIDTH, BIRD_HEIGHT, PIPE_WIDTH, CONFIG_RANGES,
    ELECTRIC_ON_TICKS, ELECTRIC_OFF_TICKS,
)


class PhysicsType(str, Enum):
    PARABOLIC = "parabolic"
    LINEAR = "linear"
    EXPONENTIAL = "exponential"
    SINE = "sine"


class GameStatus(str, Enum):
    READY = "ready"
    PLAYING = "playing"
    OVER = "over"


class BlackHolePhase(str, Enum):
    PULLING = "pulling"
    STRETCHING = "stretching"
    NONE = "none"


class RayState(str, Enum):
    WARNING = "warning"
    ACTIVE = "active"
    FADING = "fading"


# -------- Bird & Pipes --------

@dataclass(frozen=True)
class Bird:
    """The controlled actor. Negative velocity means moving up."""
    x: float = BIRD_X
    y: float = BIRD_START_Y
    velocity: float = 0.0
    width: float = BIRD_WIDTH
    height: float = BIRD_HEIGHT
    jump_time: int = 0             # Ticks since last jump (drives the motion curves)


@dataclass(frozen=True)
class ElectricCharge:
    """On/off electricity cycle carried by an electrified pipe."""
    cycle_time: int = 0
    on_duration: int = ELECTRIC_ON_TICKS
    off_duration: int = ELECTRIC_OFF_TICKS
    active: bool = False


@dataclass(frozen=True)
class Superposition:
    """Schrodinger state of a pipe: is_ghost is decided once and never changes."""
    is_ghost: bool
    is_revealed: bool = False


@dataclass(frozen=True)
class Pipe:
    x: float
    top_height: float
    bottom_y: float
    width: float = PIPE_WIDTH
    passed: bool = False
    electric: Optional[ElectricCharge] = None
    superposition: Optional[Superposition] = None

    @property
    def gap(self) -> float:
        return self.bottom_y - self.top_height

    @property
    def is_ghost(self) -> bool:
        return self.superposition is not None and self.superposition.is_ghost

    @property
    def is_revealed(self) -> bool:
        return self.superposition is not None and self.superposition.is_revealed


# -------- Chaos Hazards --------

@dataclass(frozen=True)
class GammaRay:
    """Horizontal full-width beam: warning -> active -> fading -> removed."""
    id: str
    y: float
    width: float
    height: float
    warning_time: int
    active_time: int
    state: RayState = RayState.WARNING
    progress: float = 0.0


@dataclass(frozen=True)
class GravityFlip:
    """Zone that inverts gravity for `duration` ticks once the bird enters it."""
    id: str
    x: float
    width: float
    duration: int
    is_active: bool = False
    progress: float = 0.0


@dataclass(frozen=True)
class Vortex:
    id: str
    x: float
    y: float
    radius: float
    strength: float
    rotation: float = 0.0


@dataclass(frozen=True)
class Particle:
    id: str
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    color: str


@dataclass(frozen=True)
class ChaosState:
    enabled: bool = False
    gamma_rays: Tuple[GammaRay, ...] = ()
    gravity_flips: Tuple[GravityFlip, ...] = ()
    vortexes: Tuple[Vortex, ...] = ()
    particles: Tuple[Particle, ...] = ()
    schrodinger_mode: bool = False
    gravity_multiplier: int = 1
    last_spawn_tick: int = 0
    next_id: int = 0               # Id counter for hazard entities


# -------- Black Hole --------

@dataclass(frozen=True)
class BlackHole:
    """One-shot full-stop event fired when the previous best score is beaten."""
    active: bool = False
    progress: float = 0.0
    phase: BlackHolePhase = BlackHolePhase.NONE
    has_triggered_this_game: bool = False
    waiting_to_resume: bool = False

    @property
    def suspends_play(self) -> bool:
        return self.active or self.waiting_to_resume


# -------- Config & Game State --------

@dataclass(frozen=True)
class HazardToggles:
    """Per-hazard switches, only consulted while chaos is enabled."""
    electric_pipes: bool = True
    gamma_rays: bool = True
    vortexes: bool = True
    particles: bool = True
    schrodinger_pipes: bool = True


@dataclass(frozen=True)
class GameConfig:
    speed: float = CONFIG_RANGES["speed"][2]
    jump_height: float = CONFIG_RANGES["jump_height"][2]
    gravity: float = CONFIG_RANGES["gravity"][2]
    physics_type: PhysicsType = PhysicsType.PARABOLIC
    pipe_gap: float = CONFIG_RANGES["pipe_gap"][2]
    pipe_spacing: float = CONFIG_RANGES["pipe_spacing"][2]
    pipe_width: float = PIPE_WIDTH
    chaos_enabled: bool = False
    hazards: HazardToggles = field(default_factory=HazardToggles)


@dataclass(frozen=True)
class GameState:
    """The authoritative snapshot handed to renderers every frame."""
    bird: Bird = field(default_factory=Bird)
    pipes: Tuple[Pipe, ...] = ()
    score: int = 0
    best_score: int = 0
    previous_best: int = 0         # Best score as it stood when this game started
    status: GameStatus = GameStatus.READY
    config: GameConfig = field(default_factory=GameConfig)
    chaos: ChaosState = field(default_factory=ChaosState)
    black_hole: BlackHole = field(default_factory=BlackHole)
    tick: int = 0
