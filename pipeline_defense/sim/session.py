"""
Session state and the level/phase state machine.

SessionState is the single explicit value the tick functions operate on:
phase, level, countdown, score, difficulty, cooldown and buff values, plus
the components that own the remaining timers (spawner, power-up engine)
and the entity registry.

Phase transitions:
    PLAYING  -> PAUSED     toggle_pause()
    PAUSED   -> PLAYING    toggle_pause()
    PLAYING  -> GAME_OVER  enter_game_over(), only from a pipeline explosion
    any      -> PLAYING    restart()
"""

from typing import List, Optional

from pipeline_defense.events import EventKind, GameEvent
from pipeline_defense.logging import get_logger
from pipeline_defense.models.enums import MarkerKind, Phase
from pipeline_defense.models.primitives import Resolution
from pipeline_defense.sim.entities import EffectMarker
from pipeline_defense.sim.health import StructureHealth
from pipeline_defense.sim.player import PlayerController
from pipeline_defense.sim.powerups import PowerUpEngine
from pipeline_defense.sim.random_source import RandomSource
from pipeline_defense.sim.registry import EntityRegistry
from pipeline_defense.sim.spawner import SpawnScheduler
from pipeline_defense.tuning import TuningConfig

log = get_logger('session')


class SessionState:
    """
    Complete mutable state of one play session.

    Attributes:
        bounds: Playfield dimensions
        tuning: Gameplay constants
        phase: PLAYING, PAUSED or GAME_OVER
        tick: Simulated ticks since (re)start
        level: Current level, starting at 1
        time_left: Seconds left in the current level
        score: Non-decreasing score
        hazard_speed: Fall speed for newly spawned hazards (px/tick)
        spawn_rate: Expected hazard spawns per tick
        cooldown: Ticks until the zap can fire again
        zap_range: Current effect half-width
        duplicate_active: Whether the second technician is present
        speed_multiplier: Global scale for elapsed-time countdowns
    """

    def __init__(
        self,
        bounds: Resolution,
        tuning: Optional[TuningConfig] = None,
        rng: Optional[RandomSource] = None,
    ):
        self.bounds = bounds
        self.tuning = tuning or TuningConfig()
        self.rng = rng or RandomSource()

        self.registry = EntityRegistry()
        self.player = PlayerController(bounds.width, bounds.height, self.tuning.player)
        self.health = StructureHealth()
        self.spawner = SpawnScheduler(bounds.width, self.tuning, self.rng)
        self.power_ups = PowerUpEngine(self.tuning)

        self._init_counters()

    def _init_counters(self) -> None:
        self.phase = Phase.PLAYING
        self.tick = 0
        self.level = 1
        self.time_left = self.tuning.level.duration_seconds
        self.score = 0
        self.hazard_speed = self.tuning.hazards.base_speed
        self.spawn_rate = self.tuning.hazards.base_spawn_rate
        self.cooldown = 0
        self.zap_range = self.tuning.action.base_range
        self.duplicate_active = False
        self.speed_multiplier = 1.0

    # ------------------------------------------------------------------
    # Derived geometry
    # ------------------------------------------------------------------

    @property
    def damage_line_y(self) -> float:
        """Hazards below this line hit the pipeline."""
        return self.bounds.height - self.tuning.field.damage_line_offset

    @property
    def is_playing(self) -> bool:
        return self.phase == Phase.PLAYING

    # ------------------------------------------------------------------
    # Mutation helpers
    # ------------------------------------------------------------------

    def add_score(self, points: int) -> int:
        """Award points. Score never decreases."""
        if points < 0:
            raise ValueError(f"Score can only increase, got {points}")
        self.score += points
        return self.score

    def event(self, kind: EventKind, x: Optional[float] = None, y: Optional[float] = None,
              entity_kind: Optional[str] = None, value: float = 0.0) -> GameEvent:
        """Build an event stamped with the current tick."""
        return GameEvent(kind=kind, tick=self.tick, x=x, y=y,
                         entity_kind=entity_kind, value=value)

    def add_marker(self, kind: MarkerKind, x: float, y: float, value: float = 0.0) -> EffectMarker:
        """Leave a transient effect marker for the presentation layer."""
        ttl = getattr(self.tuning.markers, f"{kind.value}_ticks")
        return self.registry.add_marker(EffectMarker(kind=kind, x=x, y=y, ttl=ttl, value=value))

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def toggle_pause(self) -> Optional[GameEvent]:
        """Flip PLAYING <-> PAUSED. Ignored in GAME_OVER."""
        if self.phase == Phase.PLAYING:
            self.phase = Phase.PAUSED
            log.info("Paused at tick %d", self.tick)
            return self.event(EventKind.PAUSED)
        if self.phase == Phase.PAUSED:
            self.phase = Phase.PLAYING
            log.info("Resumed at tick %d", self.tick)
            return self.event(EventKind.RESUMED)
        return None

    def enter_game_over(self, x: float, y: float) -> List[GameEvent]:
        """Pipeline explosion: the only path to GAME_OVER."""
        self.phase = Phase.GAME_OVER
        log.info("Game over: level %d, score %d", self.level, self.score)
        return [
            self.event(EventKind.EXPLOSION, x=x, y=y),
            self.event(EventKind.GAME_OVER, value=self.score),
        ]

    def advance_level(self) -> GameEvent:
        """Start the next level: harder hazards, fresh countdown."""
        level_tuning = self.tuning.level
        self.level += 1
        self.time_left = level_tuning.duration_seconds
        self.hazard_speed += level_tuning.speed_increment
        self.spawn_rate += level_tuning.spawn_rate_increment
        for kind in level_tuning.reset_spawn_timers:
            self.spawner.reset_timer(kind)

        center_x, center_y = self.bounds.width / 2, self.bounds.height / 2
        self.add_marker(MarkerKind.LEVEL_UP, center_x, center_y, value=self.level)
        log.info("Level %d: hazard speed %.2f, spawn rate %.3f",
                 self.level, self.hazard_speed, self.spawn_rate)
        return self.event(EventKind.LEVEL_UP, x=center_x, y=center_y, value=self.level)

    def restart(self) -> GameEvent:
        """Reset every session value and entity, then resume PLAYING."""
        self.registry.clear()
        self.player.reset()
        self.health.reset()
        self.power_ups.reset()
        self._init_counters()
        self.spawner.reset(self.spawn_rate)
        log.info("Session restarted")
        return self.event(EventKind.RESTART)

    def __repr__(self) -> str:
        return (f"SessionState({self.phase.value}, level={self.level}, tick={self.tick}, "
                f"score={self.score}, health={self.health.value:.0f})")
