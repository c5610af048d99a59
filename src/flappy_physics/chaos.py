"""
chaos.py: Physics chaos hazards.

Spawns and manages physics-themed obstacles:
- Gamma Ray Burst: horizontal beam with a long warning before it turns lethal
- Gravity Flip: zone that reverses gravity for a while once entered
- Vortex: pulls the bird into a spiral
- Particles: fast projectiles to dodge
- Electric Pipes: the gap of a pipe is electrified on a fixed duty cycle
- Schrodinger's Pipe: a pipe may be a ghost, only revealed up close

Every function returns a new ChaosState/Pipe; none mutates its input.
"""

import logging
import math
import random
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Tuple

from .constants import (
    SCREEN_WIDTH, SCREEN_HEIGHT, CHAOS_SPAWN_INTERVAL, CHAOS_SPAWN_CHANCE,
    PARTICLES_PER_SPAWN, MAX_GAMMA_RAYS, GAMMA_RAY_HEIGHT, GAMMA_RAY_WARNING_TICKS,
    GAMMA_RAY_ACTIVE_TICKS, VORTEX_RADIUS, VORTEX_STRENGTH, VORTEX_DEAD_ZONE,
    VORTEX_SPEED_FACTOR, VORTEX_SPIN, PARTICLE_MARGIN, PARTICLE_COLORS,
    GRAVITY_FLIP_WIDTH, GRAVITY_FLIP_DURATION, ELECTRIC_ON_TICKS, ELECTRIC_OFF_TICKS,
    GHOST_CHANCE, GHOST_REVEAL_DISTANCE, PROGRESS_EPSILON,
)
from .data_models import (
    Bird, Pipe, ChaosState, HazardToggles, GammaRay, GravityFlip, Vortex, Particle,
    RayState, ElectricCharge, Superposition,
)

logger = logging.getLogger(__name__)

GAMMA = "gamma"
VORTEX = "vortex"
PARTICLES = "particles"


def create_initial_chaos(enabled: bool = False) -> ChaosState:
    return ChaosState(enabled=enabled)


def _gravity_multiplier(flips: Iterable[GravityFlip]) -> int:
    return -1 if any(f.is_active for f in flips) else 1


# -------- Spawning --------

def spawn_gamma_ray(entity_id: str, rng: random.Random) -> GammaRay:
    return GammaRay(
        id=entity_id,
        y=100 + rng.random() * (SCREEN_HEIGHT - 280),
        width=SCREEN_WIDTH,
        height=GAMMA_RAY_HEIGHT,
        warning_time=GAMMA_RAY_WARNING_TICKS,
        active_time=GAMMA_RAY_ACTIVE_TICKS,
    )


def spawn_vortex(entity_id: str, rng: random.Random) -> Vortex:
    return Vortex(
        id=entity_id,
        x=SCREEN_WIDTH + 50,
        y=150 + rng.random() * (SCREEN_HEIGHT - 380),
        radius=VORTEX_RADIUS,
        strength=VORTEX_STRENGTH,
    )


def spawn_particle(entity_id: str, rng: random.Random) -> Particle:
    from_left = rng.random() > 0.5
    direction = 1 if from_left else -1
    return Particle(
        id=entity_id,
        x=-20 if from_left else SCREEN_WIDTH + 20,
        y=100 + rng.random() * (SCREEN_HEIGHT - 280),
        vx=direction * (4 + rng.random() * 3),
        vy=(rng.random() - 0.5) * 2,
        radius=4 + rng.random() * 2,
        color=rng.choice(PARTICLE_COLORS),
    )


def spawn_gravity_flip(chaos: ChaosState, x: float, width: float = GRAVITY_FLIP_WIDTH,
                       duration: int = GRAVITY_FLIP_DURATION) -> ChaosState:
    """Places an inactive gravity flip zone. Not part of the random spawner."""
    flip = GravityFlip(id=f"chaos-{chaos.next_id + 1}", x=x, width=width, duration=duration)
    return replace(
        chaos,
        gravity_flips=chaos.gravity_flips + (flip,),
        next_id=chaos.next_id + 1,
    )


# -------- Update Logic --------

def _update_gamma_rays(rays: Sequence[GammaRay]) -> Tuple[GammaRay, ...]:
    updated = []
    for ray in rays:
        duration = ray.warning_time if ray.state == RayState.WARNING else ray.active_time
        progress = ray.progress + 1 / duration
        state = ray.state
        if progress >= 1 - PROGRESS_EPSILON:
            if state == RayState.WARNING:
                state, progress = RayState.ACTIVE, 0.0
            elif state == RayState.ACTIVE:
                state, progress = RayState.FADING, 0.0
            else:
                continue  # faded out
        updated.append(replace(ray, state=state, progress=progress))
    return tuple(updated)


def _update_gravity_flips(flips: Sequence[GravityFlip], speed: float) -> Tuple[GravityFlip, ...]:
    updated = []
    for flip in flips:
        flip = replace(
            flip,
            x=flip.x - speed,
            progress=flip.progress + 1 / flip.duration if flip.is_active else flip.progress,
            is_active=flip.is_active and flip.progress < 1 - PROGRESS_EPSILON,
        )
        if flip.x > -flip.width:
            updated.append(flip)
    return tuple(updated)


def _update_vortexes(vortexes: Sequence[Vortex], speed: float) -> Tuple[Vortex, ...]:
    moved = (
        replace(v, x=v.x - speed * VORTEX_SPEED_FACTOR, rotation=v.rotation + VORTEX_SPIN)
        for v in vortexes
    )
    return tuple(v for v in moved if v.x > -v.radius * 2)


def _update_particles(particles: Sequence[Particle]) -> Tuple[Particle, ...]:
    moved = (replace(p, x=p.x + p.vx, y=p.y + p.vy) for p in particles)
    return tuple(
        p for p in moved
        if -PARTICLE_MARGIN < p.x < SCREEN_WIDTH + PARTICLE_MARGIN
        and -PARTICLE_MARGIN < p.y < SCREEN_HEIGHT + PARTICLE_MARGIN
    )


def enabled_spawn_kinds(hazards: HazardToggles) -> List[str]:
    """Hazard kinds handled by the shared spawner. Electric and ghost pipes ride on pipes."""
    kinds = []
    if hazards.gamma_rays:
        kinds.append(GAMMA)
    if hazards.vortexes:
        kinds.append(VORTEX)
    if hazards.particles:
        kinds.append(PARTICLES)
    return kinds


def update_chaos(chaos: ChaosState, speed: float, tick: int, hazards: HazardToggles,
                 rng: Optional[random.Random] = None) -> ChaosState:
    """Advances every hazard one tick and rolls the shared spawner."""
    if not chaos.enabled:
        return chaos
    rng = rng or random

    gamma_rays = _update_gamma_rays(chaos.gamma_rays)
    gravity_flips = _update_gravity_flips(chaos.gravity_flips, speed)
    vortexes = _update_vortexes(chaos.vortexes, speed)
    particles = _update_particles(chaos.particles)
    next_id = chaos.next_id
    last_spawn_tick = chaos.last_spawn_tick

    kinds = enabled_spawn_kinds(hazards)
    if kinds and tick - chaos.last_spawn_tick > CHAOS_SPAWN_INTERVAL \
            and rng.random() < CHAOS_SPAWN_CHANCE:
        kind = rng.choice(kinds)
        if kind == GAMMA:
            if len(gamma_rays) < MAX_GAMMA_RAYS:
                next_id += 1
                gamma_rays += (spawn_gamma_ray(f"chaos-{next_id}", rng),)
        elif kind == VORTEX:
            next_id += 1
            vortexes += (spawn_vortex(f"chaos-{next_id}", rng),)
        else:
            spawned = []
            for _ in range(PARTICLES_PER_SPAWN):
                next_id += 1
                spawned.append(spawn_particle(f"chaos-{next_id}", rng))
            particles += tuple(spawned)
        logger.debug("Chaos spawn roll picked %s at tick %d", kind, tick)
        last_spawn_tick = tick

    return replace(
        chaos,
        gamma_rays=gamma_rays,
        gravity_flips=gravity_flips,
        vortexes=vortexes,
        particles=particles,
        schrodinger_mode=hazards.schrodinger_pipes,
        gravity_multiplier=_gravity_multiplier(gravity_flips),
        last_spawn_tick=last_spawn_tick,
        next_id=next_id,
    )


# -------- Collision Detection --------

def check_chaos_collision(bird: Bird, chaos: ChaosState) -> bool:
    """Lethal contact with an active gamma ray or any particle."""
    if not chaos.enabled:
        return False

    bird_top = bird.y
    bird_bottom = bird.y + bird.height
    for ray in chaos.gamma_rays:
        if ray.state == RayState.ACTIVE and bird_bottom > ray.y and bird_top < ray.y + ray.height:
            return True

    center_x = bird.x + bird.width / 2
    center_y = bird.y + bird.height / 2
    hit_radius = min(bird.width, bird.height) / 2
    for particle in chaos.particles:
        distance = math.hypot(center_x - particle.x, center_y - particle.y)
        if distance < particle.radius + hit_radius:
            return True

    return False


# -------- Vortex Effect --------

def apply_vortex_force(bird: Bird, chaos: ChaosState) -> Tuple[float, float]:
    """
    Summed spiral pull of all vortexes on the bird's centre.
    Radial pull toward each centre plus a tangential push at half strength.
    """
    if not chaos.enabled:
        return 0.0, 0.0

    total_vx = 0.0
    total_vy = 0.0
    for vortex in chaos.vortexes:
        dx = vortex.x - (bird.x + bird.width / 2)
        dy = vortex.y - (bird.y + bird.height / 2)
        distance = math.hypot(dx, dy)
        if VORTEX_DEAD_ZONE < distance < vortex.radius:
            force = vortex.strength * (1 - distance / vortex.radius)
            total_vx += dx / distance * force
            total_vy += dy / distance * force
            # tangent (-dy, dx)
            total_vx += -dy / distance * force * 0.5
            total_vy += dx / distance * force * 0.5

    return total_vx, total_vy


# -------- Gravity Flip Check --------

def check_gravity_flip_trigger(bird: Bird, chaos: ChaosState) -> ChaosState:
    """Activates the first unused zone the bird has entered, unless one is already active."""
    if not chaos.enabled or any(f.is_active for f in chaos.gravity_flips):
        return chaos

    flips = list(chaos.gravity_flips)
    for i, flip in enumerate(flips):
        if flip.progress < 1 - PROGRESS_EPSILON and flip.x <= bird.x < flip.x + flip.width:
            flips[i] = replace(flip, is_active=True, progress=0.0)
            logger.debug("Gravity flip %s triggered", flip.id)
            return replace(chaos, gravity_flips=tuple(flips), gravity_multiplier=-1)

    return chaos


# -------- Electric Pipes --------

def make_electric_pipe(pipe: Pipe) -> Pipe:
    # Starts off so the player can see it coming
    return replace(pipe, electric=ElectricCharge(
        cycle_time=0,
        on_duration=ELECTRIC_ON_TICKS,
        off_duration=ELECTRIC_OFF_TICKS,
        active=False,
    ))


def is_electric_active(cycle_time: int, on_duration: int, off_duration: int) -> bool:
    return cycle_time % (on_duration + off_duration) < on_duration


def update_electric_pipe(pipe: Pipe) -> Pipe:
    charge = pipe.electric
    if charge is None:
        return pipe
    cycle_time = charge.cycle_time + 1
    return replace(pipe, electric=replace(
        charge,
        cycle_time=cycle_time,
        active=is_electric_active(cycle_time, charge.on_duration, charge.off_duration),
    ))


def check_electric_pipe_collision(bird: Bird, pipes: Sequence[Pipe]) -> bool:
    """The gap itself is lethal while charged; the pillars are not tested here."""
    for pipe in pipes:
        if pipe.electric is None or not pipe.electric.active:
            continue
        if bird.x + bird.width > pipe.x and bird.x < pipe.x + pipe.width:
            if bird.y > pipe.top_height and bird.y + bird.height < pipe.bottom_y:
                return True  # zapped in the gap
    return False


# -------- Schrodinger's Pipe --------

def apply_schrodinger_effect(pipe: Pipe, chaos: ChaosState,
                             rng: Optional[random.Random] = None) -> Pipe:
    """Decides once, at creation, whether the pipe is a ghost."""
    if not chaos.enabled or not chaos.schrodinger_mode or pipe.superposition is not None:
        return pipe
    rng = rng or random
    return replace(pipe, superposition=Superposition(is_ghost=rng.random() > GHOST_CHANCE))


def reveal_schrodinger_pipe(pipe: Pipe, bird: Bird) -> Pipe:
    if pipe.superposition is None or pipe.superposition.is_revealed:
        return pipe
    if bird.x + bird.width > pipe.x - GHOST_REVEAL_DISTANCE:
        return replace(pipe, superposition=replace(pipe.superposition, is_revealed=True))
    return pipe


def collidable_pipes(pipes: Sequence[Pipe]) -> Tuple[Pipe, ...]:
    """Revealed ghosts are passable; everything else still collides."""
    return tuple(p for p in pipes if not p.is_ghost or not p.is_revealed)
