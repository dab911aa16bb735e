"""
Interaction resolver - the zap.

A zap tests a vertical band above every active avatar. Hazards are
processed before power-ups; each collection is walked in reverse so a
matched entity can be removed in place. All avatars share the live,
mutating collections, so an entity consumed by the primary avatar's pass
is never seen by the duplicate's.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List

from pipeline_defense.events import EventKind, GameEvent
from pipeline_defense.logging import get_logger
from pipeline_defense.models.enums import MarkerKind
from pipeline_defense.models.primitives import Point2D
from pipeline_defense.sim.registry import iter_reversed

if TYPE_CHECKING:
    from pipeline_defense.sim.session import SessionState

log = get_logger('resolver')


@dataclass(frozen=True)
class EffectRegion:
    """
    Band above an avatar's reference point.

    An entity at (x, y) is inside when |x - origin.x| < half_width and
    0 < origin.y - y < reach (strictly above the reference point).
    """
    origin: Point2D
    half_width: float
    reach: float

    def contains(self, x: float, y: float) -> bool:
        above = self.origin.y - y
        return abs(x - self.origin.x) < self.half_width and 0 < above < self.reach


def effect_regions(session: 'SessionState') -> List[EffectRegion]:
    """Current effect region of every active avatar, primary first."""
    player = session.player
    reach = session.tuning.action.vertical_reach
    return [
        EffectRegion(player.tip_for(avatar_x), session.zap_range, reach)
        for avatar_x in player.avatar_xs(session.duplicate_active, session.tuning.effects)
    ]


def _resolve_region(session: 'SessionState', region: EffectRegion) -> List[GameEvent]:
    events: List[GameEvent] = []
    registry = session.registry

    for i, hazard in iter_reversed(registry.hazards):
        if region.contains(hazard.x, hazard.y):
            del registry.hazards[i]
            points = session.tuning.hazard(hazard.kind).score
            session.add_score(points)
            session.add_marker(MarkerKind.HIT, hazard.x, hazard.y, value=points)
            events.append(session.event(EventKind.HIT, x=hazard.x, y=hazard.y,
                                        entity_kind=hazard.kind.value, value=points))

    # Indices stay valid even if an effect (area clear, wave clear) edits
    # the hazard list; power-ups themselves are only removed here.
    for i, power_up in iter_reversed(registry.power_ups):
        if region.contains(power_up.x, power_up.y):
            del registry.power_ups[i]
            events.extend(session.power_ups.apply(session, power_up.kind,
                                                  power_up.x, power_up.y))

    return events


def trigger_action(session: 'SessionState') -> List[GameEvent]:
    """
    Fire the zap if it is off cooldown.

    Returns:
        ZAP followed by HIT / COLLECT / AREA_CLEAR events; empty while
        the cooldown is running
    """
    if session.cooldown > 0:
        return []

    session.cooldown = session.tuning.action.cooldown_ticks
    regions = effect_regions(session)

    events: List[GameEvent] = []
    for region in regions:
        session.add_marker(MarkerKind.ZAP, region.origin.x, region.origin.y,
                           value=region.half_width)
    events.append(session.event(EventKind.ZAP, x=regions[0].origin.x,
                                y=regions[0].origin.y, value=len(regions)))

    for region in regions:
        events.extend(_resolve_region(session, region))

    log.trace("Zap at tick %d produced %d events", session.tick, len(events) - 1)
    return events
