"""
Power-up effect engine.

One table, keyed by PowerUpKind, describes every power-up:

    kind -> PowerUpEffect(duration, apply, revert)

Collecting a power-up awards its fixed score, runs apply() and (re)starts
the duration countdown. Re-collecting an active buff resets its countdown
to the full duration rather than stacking. The engine decrements active
countdowns once per tick and runs revert() exactly once when a countdown
reaches zero. A duration of zero marks an instantaneous effect that never
enters the countdown table.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from pipeline_defense.events import EventKind, GameEvent
from pipeline_defense.logging import get_logger
from pipeline_defense.models.enums import MarkerKind, PowerUpKind
from pipeline_defense.sim.registry import iter_reversed
from pipeline_defense.tuning import EffectTuning, TuningConfig

if TYPE_CHECKING:
    from pipeline_defense.sim.session import SessionState

log = get_logger('powerups')

ApplyFn = Callable[['SessionState', float, float], List[GameEvent]]
RevertFn = Callable[['SessionState'], None]


@dataclass(frozen=True)
class PowerUpEffect:
    """
    Table entry for one power-up kind.

    Attributes:
        kind: Power-up kind this entry handles
        duration: Ticks the buff lasts, read from the effect tuning (0 = instant)
        apply: Mutates the session at collection; returns extra events
        revert: Restores the baseline when the duration expires
    """
    kind: PowerUpKind
    duration: Callable[[EffectTuning], int]
    apply: ApplyFn
    revert: Optional[RevertFn] = None


# ----------------------------------------------------------------------
# Effect implementations
# ----------------------------------------------------------------------

def _apply_range_boost(session: 'SessionState', x: float, y: float) -> List[GameEvent]:
    base = session.tuning.action.base_range
    session.zap_range = math.floor(base * session.tuning.effects.range_multiplier)
    return []


def _revert_range_boost(session: 'SessionState') -> None:
    session.zap_range = session.tuning.action.base_range


def _apply_duplicate(session: 'SessionState', x: float, y: float) -> List[GameEvent]:
    session.duplicate_active = True
    return []


def _revert_duplicate(session: 'SessionState') -> None:
    session.duplicate_active = False


def _apply_area_clear(session: 'SessionState', x: float, y: float) -> List[GameEvent]:
    """Remove every hazard strictly inside the blast radius around (x, y)."""
    effects = session.tuning.effects
    hazards = session.registry.hazards
    cleared = 0
    for i, hazard in iter_reversed(hazards):
        if math.hypot(hazard.x - x, hazard.y - y) < effects.area_clear_radius:
            del hazards[i]
            cleared += 1
            session.add_score(effects.area_clear_bonus)

    session.add_marker(MarkerKind.BLAST, x, y, value=effects.area_clear_radius)
    log.debug("Area clear at (%.0f, %.0f) removed %d hazards", x, y, cleared)
    return [session.event(EventKind.AREA_CLEAR, x=x, y=y,
                          entity_kind=PowerUpKind.AREA_CLEAR.value, value=cleared)]


def _apply_heal(session: 'SessionState', x: float, y: float) -> List[GameEvent]:
    restored = session.health.heal(session.tuning.effects.heal_amount)
    log.debug("Healed %.0f (health %.0f)", restored, session.health.value)
    return []


def _apply_wave_clear(session: 'SessionState', x: float, y: float) -> List[GameEvent]:
    """Clear the whole field and slow the game down."""
    cleared = session.registry.clear_hazards()
    session.speed_multiplier = session.tuning.effects.slowdown_multiplier

    center_x, center_y = session.bounds.width / 2, session.bounds.height / 2
    session.add_marker(MarkerKind.WAVE, center_x, center_y, value=cleared)
    log.debug("Wave clear removed %d hazards", cleared)
    return [session.event(EventKind.AREA_CLEAR, x=center_x, y=center_y,
                          entity_kind=PowerUpKind.WAVE_CLEAR.value, value=cleared)]


def _revert_wave_clear(session: 'SessionState') -> None:
    session.speed_multiplier = 1.0


POWER_UP_EFFECTS: Dict[PowerUpKind, PowerUpEffect] = {
    effect.kind: effect for effect in (
        PowerUpEffect(PowerUpKind.RANGE_BOOST, lambda t: t.range_boost_ticks,
                      _apply_range_boost, _revert_range_boost),
        PowerUpEffect(PowerUpKind.AREA_CLEAR, lambda t: 0, _apply_area_clear),
        PowerUpEffect(PowerUpKind.AVATAR_DUPLICATE, lambda t: t.duplicate_ticks,
                      _apply_duplicate, _revert_duplicate),
        PowerUpEffect(PowerUpKind.HEAL, lambda t: 0, _apply_heal),
        PowerUpEffect(PowerUpKind.WAVE_CLEAR, lambda t: t.slowdown_ticks,
                      _apply_wave_clear, _revert_wave_clear),
    )
}


class PowerUpEngine:
    """
    Applies power-ups and owns the buff countdowns.

    Attributes:
        active: Remaining ticks per active timed buff
    """

    def __init__(self, tuning: TuningConfig,
                 effects: Optional[Dict[PowerUpKind, PowerUpEffect]] = None):
        self._tuning = tuning
        self._effects = effects if effects is not None else POWER_UP_EFFECTS
        missing = [kind.value for kind in PowerUpKind if kind not in self._effects]
        if missing:
            raise ValueError(f"No effect registered for power-up kinds: {missing}")
        self.active: Dict[PowerUpKind, int] = {}

    def reset(self) -> None:
        """Forget every active buff without reverting (session restart)."""
        self.active.clear()

    def remaining(self, kind: PowerUpKind) -> int:
        """Ticks left on a buff, 0 if inactive."""
        return self.active.get(kind, 0)

    def is_active(self, kind: PowerUpKind) -> bool:
        return kind in self.active

    def apply(self, session: 'SessionState', kind: PowerUpKind,
              x: float, y: float) -> List[GameEvent]:
        """
        Collect a power-up at (x, y).

        Returns:
            COLLECT event followed by any events the effect produced
        """
        effect = self._effects[kind]
        points = self._tuning.power_up(kind).score

        session.add_score(points)
        session.add_marker(MarkerKind.COLLECT, x, y, value=points)
        events = [session.event(EventKind.COLLECT, x=x, y=y,
                                entity_kind=kind.value, value=points)]
        events.extend(effect.apply(session, x, y))

        duration = effect.duration(self._tuning.effects)
        if duration > 0:
            self.active[kind] = duration

        log.debug("Collected %s (+%d)", kind.value, points)
        return events

    def tick(self, session: 'SessionState') -> List[PowerUpKind]:
        """
        Advance every active countdown by one tick.

        Returns:
            Kinds whose effect was reverted this tick
        """
        expired: List[PowerUpKind] = []
        for kind in list(self.active):
            self.active[kind] -= 1
            if self.active[kind] <= 0:
                del self.active[kind]
                revert = self._effects[kind].revert
                if revert is not None:
                    revert(session)
                expired.append(kind)
                log.debug("%s expired", kind.value)
        return expired
