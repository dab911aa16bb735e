"""
Simulation entities.

Hazards and power-ups fall from the top boundary toward the pipeline.
Effect markers are short-lived records of something that just happened
(a zap, a blast) that the presentation layer can decorate.

Entities are mutable: the core advances them in place once per tick.
"""

import itertools
import math
from dataclasses import dataclass, field

from pipeline_defense.models.enums import HazardKind, MarkerKind, PowerUpKind

_ids = itertools.count(1)


def _next_id() -> int:
    return next(_ids)


@dataclass(eq=False)
class Hazard:
    """A falling water drop or rust monster.

    Rare hazards oscillate laterally around the column they spawned in.
    """
    x: float
    y: float
    kind: HazardKind
    speed: float  # pixels per tick
    damage: float
    size: float = 20.0
    wiggle_amplitude: float = 0.0
    wiggle_step: float = 0.0
    wiggle_phase: float = 0.0
    origin_x: float = field(init=False)
    id: int = field(default_factory=_next_id)

    def __post_init__(self):
        self.origin_x = self.x

    def update(self) -> None:
        """Advance one tick: fall, then wiggle."""
        self.y += self.speed
        if self.wiggle_amplitude > 0:
            self.wiggle_phase += self.wiggle_step
            self.x = self.origin_x + math.sin(self.wiggle_phase) * self.wiggle_amplitude

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Hazard#{self.id}({self.kind.value}, x={self.x:.1f}, y={self.y:.1f})"


@dataclass(eq=False)
class PowerUp:
    """A falling collectible.

    `age` counts ticks since spawn; presentation derives pulse and
    rotation from it.
    """
    x: float
    y: float
    kind: PowerUpKind
    speed: float
    despawn_margin: float = 0.0
    age: int = 0
    id: int = field(default_factory=_next_id)

    def update(self) -> None:
        """Advance one tick."""
        self.y += self.speed
        self.age += 1

    def has_left(self, field_height: float) -> bool:
        """True once the power-up has fallen past the bottom of the field."""
        return self.y > field_height + self.despawn_margin

    def __str__(self) -> str:
        return f"PowerUp#{self.id}({self.kind.value}, x={self.x:.1f}, y={self.y:.1f})"


@dataclass(eq=False)
class EffectMarker:
    """Transient marker for a visual effect owned by the presentation layer."""
    kind: MarkerKind
    x: float
    y: float
    ttl: int
    value: float = 0.0
    id: int = field(default_factory=_next_id)

    def update(self) -> bool:
        """Count down one tick. Returns False when the marker expires."""
        self.ttl -= 1
        return self.ttl > 0
