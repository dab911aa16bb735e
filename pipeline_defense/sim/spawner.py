"""
Spawn scheduler - one countdown per entity category.

Every category (hazards plus each power-up kind) owns a tick countdown.
Each tick the countdowns are decremented; a countdown that reaches zero
spawns one entity at the top boundary and re-arms with a fresh interval
drawn from that category's range.

Hazard intervals derive from the level's spawn rate (expected spawns per
tick), so raising the rate shortens the mean gap between hazards.
"""

from typing import Dict, List, Optional, Tuple, Union

from pipeline_defense.logging import get_logger
from pipeline_defense.models.enums import HazardKind, PowerUpKind
from pipeline_defense.sim.entities import Hazard, PowerUp
from pipeline_defense.sim.random_source import RandomSource
from pipeline_defense.sim.registry import EntityRegistry
from pipeline_defense.tuning import TuningConfig

log = get_logger('spawner')


class SpawnScheduler:
    """
    Independent spawn countdowns for hazards and every power-up kind.

    Attributes:
        hazard_timer: Ticks until the next hazard
        power_up_timers: Ticks until the next power-up, per kind
    """

    def __init__(self, field_width: float, tuning: TuningConfig, rng: RandomSource):
        self._tuning = tuning
        self._rng = rng
        self.field_width = float(field_width)
        self.hazard_timer = 0
        self.power_up_timers: Dict[PowerUpKind, int] = {}
        self.reset(tuning.hazards.base_spawn_rate)

    def reset(self, spawn_rate: float) -> None:
        """Re-arm every countdown for a fresh session."""
        self.hazard_timer = self.hazard_interval(spawn_rate)
        self.power_up_timers = {
            kind: self._tuning.power_up(kind).initial_timer for kind in PowerUpKind
        }

    # ------------------------------------------------------------------
    # Draws
    # ------------------------------------------------------------------

    def hazard_interval_range(self, spawn_rate: float) -> Tuple[float, float]:
        """[min, max] ticks between hazards for a spawn rate."""
        spread = self._tuning.hazards.interval_spread
        mean = 1.0 / spawn_rate
        return mean * (1.0 - spread), mean * (1.0 + spread)

    def hazard_interval(self, spawn_rate: float) -> int:
        lo, hi = self.hazard_interval_range(spawn_rate)
        return self._rng.interval(lo, hi)

    def power_up_interval(self, kind: PowerUpKind) -> int:
        entry = self._tuning.power_up(kind)
        return self._rng.interval(entry.respawn_min, entry.respawn_max)

    def spawn_x(self) -> float:
        """Uniform x inside the field, keeping the edge margin free."""
        margin = self._tuning.field.spawn_margin
        return self._rng.uniform(margin, self.field_width - margin)

    def choose_hazard_kind(self) -> HazardKind:
        """Weighted kind choice, independent of the interval draw."""
        if self._rng.chance(self._tuning.hazards.rare_probability):
            return HazardKind.RARE
        return HazardKind.COMMON

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------

    def spawn_hazard(self, registry: EntityRegistry, hazard_speed: float,
                     kind: Optional[HazardKind] = None) -> Hazard:
        """Create a hazard at the top boundary and register it."""
        kind = kind or self.choose_hazard_kind()
        stats = self._tuning.hazard(kind)
        hazard = Hazard(
            x=self.spawn_x(),
            y=self._tuning.field.spawn_y,
            kind=kind,
            speed=hazard_speed * stats.speed_factor,
            damage=stats.damage,
            size=stats.size,
            wiggle_amplitude=stats.wiggle_amplitude,
            wiggle_step=stats.wiggle_step,
        )
        log.trace("Spawned %s", hazard)
        return registry.add_hazard(hazard)

    def spawn_power_up(self, registry: EntityRegistry, kind: PowerUpKind) -> PowerUp:
        """Create a power-up at the top boundary and register it."""
        entry = self._tuning.power_up(kind)
        power_up = PowerUp(
            x=self.spawn_x(),
            y=self._tuning.field.spawn_y,
            kind=kind,
            speed=entry.fall_speed,
            despawn_margin=entry.despawn_margin,
        )
        log.debug("Spawned %s", power_up)
        return registry.add_power_up(power_up)

    def reset_timer(self, kind: PowerUpKind) -> None:
        """Zero a power-up countdown so it spawns on the next tick."""
        self.power_up_timers[kind] = 0

    def tick(
        self,
        registry: EntityRegistry,
        hazard_speed: float,
        spawn_rate: float,
        speed_multiplier: float = 1.0,
    ) -> List[Union[Hazard, PowerUp]]:
        """
        Advance every countdown by one tick and spawn what is due.

        The hazard countdown is frozen while the speed multiplier sits
        below the suspend threshold; power-up countdowns always run.

        Returns:
            Entities spawned this tick, hazard first
        """
        spawned: List[Union[Hazard, PowerUp]] = []

        if speed_multiplier >= self._tuning.effects.spawn_suspend_threshold:
            self.hazard_timer = max(0, self.hazard_timer - 1)
            if self.hazard_timer == 0:
                spawned.append(self.spawn_hazard(registry, hazard_speed))
                self.hazard_timer = self.hazard_interval(spawn_rate)

        for kind in PowerUpKind:
            remaining = max(0, self.power_up_timers[kind] - 1)
            if remaining == 0:
                spawned.append(self.spawn_power_up(registry, kind))
                remaining = self.power_up_interval(kind)
            self.power_up_timers[kind] = remaining

        return spawned
