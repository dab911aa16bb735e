"""
Per-tick simulation step.

step(session, inp) advances a SessionState by exactly one tick and returns
the events that tick produced. It never touches a display, mixer or
clock, so it runs unchanged in tests and behind any presentation layer.

Order within a PLAYING tick:
    1. zap (if requested)
    2. player movement
    3. hazards fall; crossings damage the pipeline
    4. power-ups fall and despawn
    5. effect markers age
    6. spawn countdowns
    7. zap cooldown
    8. power-up buff countdowns (revert on expiry)
    9. level countdown (scaled by the speed multiplier)

An explosion ends the tick immediately in GAME_OVER.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from pipeline_defense.events import EventKind, GameEvent
from pipeline_defense.logging import get_logger
from pipeline_defense.models.enums import HazardKind, MarkerKind, Phase, PowerUpKind
from pipeline_defense.models.primitives import Resolution
from pipeline_defense.sim.inputs import IDLE, TickInput
from pipeline_defense.sim.random_source import RandomSource
from pipeline_defense.sim.registry import iter_reversed
from pipeline_defense.sim.resolver import trigger_action
from pipeline_defense.sim.session import SessionState
from pipeline_defense.tuning import TuningConfig

log = get_logger('simulation')


def new_session(
    width: float,
    height: float,
    tuning: Optional[TuningConfig] = None,
    seed: Optional[int] = None,
    rng: Optional[RandomSource] = None,
) -> SessionState:
    """
    Create a fresh PLAYING session for a playfield.

    Args:
        width: Playfield width in pixels
        height: Playfield height in pixels
        tuning: Gameplay constants (defaults if None)
        seed: Seed for a new RandomSource (ignored if rng is given)
        rng: Random source to use, e.g. a scripted one in tests

    Raises:
        ValidationError: If width or height is not positive
    """
    bounds = Resolution(width=int(width), height=int(height))
    session = SessionState(bounds, tuning=tuning, rng=rng or RandomSource(seed))
    log.info("New session %dx%d (seed=%s)", bounds.width, bounds.height, session.rng.seed)
    return session


def _update_hazards(session: SessionState) -> Tuple[List[GameEvent], bool]:
    events: List[GameEvent] = []
    hazards = session.registry.hazards
    line_y = session.damage_line_y

    for i, hazard in iter_reversed(hazards):
        hazard.update()
        if hazard.y <= line_y:
            continue

        del hazards[i]
        exploded = session.health.damage(hazard.damage)
        session.add_marker(MarkerKind.DAMAGE, hazard.x, line_y, value=hazard.damage)
        events.append(session.event(EventKind.DAMAGE, x=hazard.x, y=line_y,
                                    entity_kind=hazard.kind.value, value=hazard.damage))
        if exploded:
            events.extend(session.enter_game_over(hazard.x, line_y))
            return events, True

    return events, False


def _update_power_ups(session: SessionState) -> None:
    power_ups = session.registry.power_ups
    height = session.bounds.height
    for i, power_up in iter_reversed(power_ups):
        power_up.update()
        if power_up.has_left(height):
            del power_ups[i]


def step(session: SessionState, inp: TickInput = IDLE,
         dt: Optional[float] = None) -> List[GameEvent]:
    """
    Advance the session by one tick.

    Args:
        session: Session to mutate
        inp: Input gathered for this tick
        dt: Elapsed seconds for the level countdown (defaults to one tick
            at the tuned tick rate)

    Returns:
        Events produced this tick, in order
    """
    if inp.restart:
        return [session.restart()]

    events: List[GameEvent] = []
    if inp.pause_toggle:
        toggled = session.toggle_pause()
        if toggled is not None:
            events.append(toggled)

    if session.phase != Phase.PLAYING:
        return events

    if dt is None:
        dt = 1.0 / session.tuning.ticks_per_second

    session.tick += 1

    if inp.trigger:
        events.extend(trigger_action(session))

    session.player.update(inp)

    hazard_events, exploded = _update_hazards(session)
    events.extend(hazard_events)
    if exploded:
        return events

    _update_power_ups(session)
    session.registry.update_markers()

    session.spawner.tick(session.registry, session.hazard_speed,
                         session.spawn_rate, session.speed_multiplier)

    if session.cooldown > 0:
        session.cooldown -= 1

    session.power_ups.tick(session)

    session.time_left -= dt * session.speed_multiplier
    if session.time_left <= 0:
        events.append(session.advance_level())

    return events


# ----------------------------------------------------------------------
# Read-only views for presentation
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class HazardView:
    id: int
    kind: HazardKind
    x: float
    y: float
    size: float


@dataclass(frozen=True)
class PowerUpView:
    id: int
    kind: PowerUpKind
    x: float
    y: float
    age: int


@dataclass(frozen=True)
class AvatarView:
    x: float
    y: float
    width: float
    height: float
    duplicate: bool


@dataclass(frozen=True)
class MarkerView:
    id: int
    kind: MarkerKind
    x: float
    y: float
    ttl: int
    value: float


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer or HUD needs for one frame."""
    width: int
    height: int
    phase: Phase
    tick: int
    level: int
    score: int
    time_left: float
    health: float
    hits_taken: int
    zap_range: float
    cooldown: int
    range_boosted: bool
    duplicate_active: bool
    slowed: bool
    damage_line_y: float
    hazards: Tuple[HazardView, ...]
    power_ups: Tuple[PowerUpView, ...]
    avatars: Tuple[AvatarView, ...]
    markers: Tuple[MarkerView, ...]


def snapshot(session: SessionState) -> Snapshot:
    """Capture an immutable view of the session."""
    player = session.player
    registry = session.registry
    avatar_xs = player.avatar_xs(session.duplicate_active, session.tuning.effects)

    return Snapshot(
        width=session.bounds.width,
        height=session.bounds.height,
        phase=session.phase,
        tick=session.tick,
        level=session.level,
        score=session.score,
        time_left=max(0.0, session.time_left),
        health=session.health.value,
        hits_taken=session.health.hits_taken,
        zap_range=session.zap_range,
        cooldown=session.cooldown,
        range_boosted=session.power_ups.is_active(PowerUpKind.RANGE_BOOST),
        duplicate_active=session.duplicate_active,
        slowed=session.speed_multiplier < 1.0,
        damage_line_y=session.damage_line_y,
        hazards=tuple(HazardView(h.id, h.kind, h.x, h.y, h.size) for h in registry.hazards),
        power_ups=tuple(PowerUpView(p.id, p.kind, p.x, p.y, p.age) for p in registry.power_ups),
        avatars=tuple(
            AvatarView(x, player.y, player.width, player.height, duplicate=i > 0)
            for i, x in enumerate(avatar_xs)
        ),
        markers=tuple(
            MarkerView(m.id, m.kind, m.x, m.y, m.ttl, m.value) for m in registry.markers
        ),
    )
