"""
Pipeline Defense Event Types

Defines the discrete events the simulation core emits each tick:
- EventKind: closed set of event kinds
- GameEvent: immutable record of one occurrence
- EventDispatcher: fans events out to presentation collaborators

Events are the contract between the core and its collaborators (audio,
visual effects, HUD, structured logs). The core never calls a collaborator
directly; it returns events from step() and the host dispatches them.
"""

from enum import Enum
from typing import Callable, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from pipeline_defense.logging import emit_record, get_logger

log = get_logger('events')


class EventKind(str, Enum):
    """Kinds of events produced by the simulation core."""
    ZAP = "zap"
    HIT = "hit"
    COLLECT = "collect"
    DAMAGE = "damage"
    AREA_CLEAR = "area_clear"
    LEVEL_UP = "level_up"
    EXPLOSION = "explosion"
    GAME_OVER = "game_over"
    PAUSED = "paused"
    RESUMED = "resumed"
    RESTART = "restart"


class GameEvent(BaseModel):
    """
    One discrete occurrence inside a tick.

    Coordinates are field (screen) pixels. `entity_kind` carries the hazard
    or power-up kind value where relevant; `value` carries the points
    awarded, damage dealt, hazards cleared or new level depending on kind.
    """
    kind: EventKind = Field(..., description="What happened")
    tick: int = Field(..., ge=0, description="Session tick at which it happened")
    x: Optional[float] = Field(default=None, description="Field x coordinate")
    y: Optional[float] = Field(default=None, description="Field y coordinate")
    entity_kind: Optional[str] = Field(default=None, description="Hazard or power-up kind")
    value: float = Field(default=0.0, description="Points, damage, count or level")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        extra = f" {self.entity_kind}" if self.entity_kind else ""
        return f"GameEvent({self.kind.value}{extra} @t={self.tick}, value={self.value:g})"


EventListener = Callable[[GameEvent], None]


class EventDispatcher:
    """
    Delivers core events to presentation collaborators.

    A listener or record sink that raises is logged, counted in
    `failures` and skipped. The remaining listeners still receive the
    event and the exception never reaches the caller, so a broken audio
    collaborator or a full disk cannot halt the simulation.

    Examples:
        >>> dispatcher = EventDispatcher()
        >>> seen = []
        >>> dispatcher.subscribe(seen.append)
        >>> dispatcher.dispatch([GameEvent(kind=EventKind.ZAP, tick=1)])
        1
        >>> seen[0].kind
        <EventKind.ZAP: 'zap'>
    """

    def __init__(self, record_module: Optional[str] = 'events'):
        """
        Args:
            record_module: Structured-log module that receives every event
                (None to disable record emission)
        """
        self._listeners: List[EventListener] = []
        self._record_module = record_module
        self.failures = 0

    def subscribe(self, listener: EventListener) -> None:
        """Register a listener (called once per event, in order)."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        """Remove a previously registered listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def dispatch(self, events: Iterable[GameEvent]) -> int:
        """
        Deliver events to every listener.

        Returns:
            Number of events delivered
        """
        count = 0
        for event in events:
            count += 1
            if self._record_module:
                try:
                    emit_record(self._record_module, event.model_dump(mode='json'))
                except Exception:
                    self.failures += 1
                    log.exception("Recording %s to '%s' failed", event, self._record_module)
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception:
                    self.failures += 1
                    log.exception("Listener %r failed on %s", listener, event)
        return count
