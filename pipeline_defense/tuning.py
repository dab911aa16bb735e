"""
Gameplay tuning - Pydantic v2 models with YAML loading.

Every gameplay constant lives here so the simulation core stays free of
magic numbers and difficulty can be tweaked from a YAML file. All tick
values assume the host drives the simulation at 60 ticks per second.

Examples:
    >>> tuning = load_tuning(None)
    >>> tuning.action.base_range
    50.0
    >>> tuning.hazard(HazardKind.RARE).score
    100
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from pipeline_defense.models.enums import HazardKind, PowerUpKind


class FieldTuning(BaseModel):
    """Playfield geometry relative to the supplied bounds."""
    model_config = {"frozen": True}

    damage_line_offset: float = Field(
        default=100.0,
        description="Distance of the damage line above the bottom edge",
        gt=0.0
    )
    spawn_y: float = Field(
        default=-20.0,
        description="Vertical spawn position (top boundary, may be off-screen)"
    )
    spawn_margin: float = Field(
        default=20.0,
        description="Horizontal margin (entity half-width) kept free at both edges",
        ge=0.0
    )


class PlayerTuning(BaseModel):
    """Technician avatar size, speed and zap origin."""
    model_config = {"frozen": True}

    width: float = Field(default=40.0, gt=0.0)
    height: float = Field(default=60.0, gt=0.0)
    speed: float = Field(
        default=5.0,
        description="Keyboard movement per tick in pixels",
        gt=0.0
    )
    baseline_offset: float = Field(
        default=80.0,
        description="Distance of the avatar's feet above the bottom edge",
        gt=0.0
    )
    tip_offset_x: float = Field(
        default=10.0,
        description="Horizontal offset of the cane tip from the avatar center"
    )
    tip_offset_y: float = Field(
        default=30.0,
        description="Height of the cane tip above the avatar's head",
        ge=0.0
    )


class ActionTuning(BaseModel):
    """Zap (area-effect action) parameters."""
    model_config = {"frozen": True}

    cooldown_ticks: int = Field(default=10, ge=1)
    base_range: float = Field(
        default=50.0,
        description="Half-width of the effect region without buffs",
        gt=0.0
    )
    vertical_reach: float = Field(
        default=150.0,
        description="How far above the cane tip the effect region extends",
        gt=0.0
    )


class HazardKindTuning(BaseModel):
    """Per-kind hazard properties."""
    model_config = {"frozen": True}

    damage: float = Field(gt=0.0)
    score: int = Field(ge=0)
    speed_factor: float = Field(
        default=1.0,
        description="Multiplier applied to the level's hazard speed",
        gt=0.0
    )
    size: float = Field(default=20.0, gt=0.0)
    wiggle_amplitude: float = Field(
        default=0.0,
        description="Lateral oscillation amplitude in pixels (0 = falls straight)",
        ge=0.0
    )
    wiggle_step: float = Field(
        default=0.0,
        description="Oscillation phase advance per tick",
        ge=0.0
    )


def _default_common() -> HazardKindTuning:
    return HazardKindTuning(damage=10.0, score=50, speed_factor=1.0, size=20.0)


def _default_rare() -> HazardKindTuning:
    return HazardKindTuning(
        damage=15.0, score=100, speed_factor=1.3, size=15.0,
        wiggle_amplitude=8.0, wiggle_step=0.1,
    )


class HazardTuning(BaseModel):
    """Hazard spawning and difficulty baseline."""
    model_config = {"frozen": True}

    base_speed: float = Field(
        default=1.2,
        description="Fall speed at level 1 in pixels per tick",
        gt=0.0
    )
    base_spawn_rate: float = Field(
        default=0.020,
        description="Expected hazard spawns per tick at level 1",
        gt=0.0,
        le=1.0
    )
    rare_probability: float = Field(
        default=0.4,
        description="Chance a spawned hazard is rare",
        ge=0.0,
        le=1.0
    )
    interval_spread: float = Field(
        default=0.5,
        description="Spawn interval is drawn from [(1-s)/rate, (1+s)/rate] ticks",
        ge=0.0,
        lt=1.0
    )
    common: HazardKindTuning = Field(default_factory=_default_common)
    rare: HazardKindTuning = Field(default_factory=_default_rare)


class PowerUpKindTuning(BaseModel):
    """Per-kind power-up spawning properties."""
    model_config = {"frozen": True}

    fall_speed: float = Field(gt=0.0)
    initial_timer: int = Field(
        description="Ticks before the first spawn of a session",
        ge=0
    )
    respawn_min: int = Field(ge=1)
    respawn_max: int = Field(ge=1)
    despawn_margin: float = Field(
        default=0.0,
        description="Distance below the bottom edge at which the power-up leaves the field",
        ge=0.0
    )
    score: int = Field(default=250, ge=0)

    @model_validator(mode='after')
    def validate_respawn_range(self) -> 'PowerUpKindTuning':
        """Ensure respawn_min <= respawn_max."""
        if self.respawn_min > self.respawn_max:
            raise ValueError("respawn_min must not exceed respawn_max")
        return self


def _default_power_ups() -> Dict[PowerUpKind, PowerUpKindTuning]:
    return {
        PowerUpKind.RANGE_BOOST: PowerUpKindTuning(
            fall_speed=1.8, initial_timer=300, respawn_min=1125, respawn_max=1575),
        PowerUpKind.AREA_CLEAR: PowerUpKindTuning(
            fall_speed=1.5, initial_timer=600, respawn_min=2700, respawn_max=4050),
        PowerUpKind.AVATAR_DUPLICATE: PowerUpKindTuning(
            fall_speed=1.5, initial_timer=900, respawn_min=1350, respawn_max=1350,
            despawn_margin=50.0),
        PowerUpKind.HEAL: PowerUpKindTuning(
            fall_speed=1.3, initial_timer=1200, respawn_min=2025, respawn_max=2700,
            despawn_margin=50.0),
        PowerUpKind.WAVE_CLEAR: PowerUpKindTuning(
            fall_speed=2.0, initial_timer=1800, respawn_min=5400, respawn_max=7200,
            despawn_margin=50.0),
    }


class EffectTuning(BaseModel):
    """Power-up effect magnitudes and durations."""
    model_config = {"frozen": True}

    range_multiplier: float = Field(default=2.0, gt=0.0)
    range_boost_ticks: int = Field(default=600, ge=1)
    duplicate_ticks: int = Field(default=600, ge=1)
    duplicate_offset: float = Field(default=100.0, gt=0.0)
    duplicate_edge_margin: float = Field(
        default=50.0,
        description="Duplicate mirrors to the left when it would pass width - margin",
        ge=0.0
    )
    area_clear_radius: float = Field(default=200.0, gt=0.0)
    area_clear_bonus: int = Field(
        default=5,
        description="Score per hazard removed by an area clear",
        ge=0
    )
    heal_amount: float = Field(default=10.0, gt=0.0)
    slowdown_ticks: int = Field(default=300, ge=1)
    slowdown_multiplier: float = Field(default=0.1, gt=0.0, le=1.0)
    spawn_suspend_threshold: float = Field(
        default=0.5,
        description="Hazards stop spawning while the speed multiplier is below this",
        gt=0.0,
        le=1.0
    )


class LevelTuning(BaseModel):
    """Level progression."""
    model_config = {"frozen": True}

    duration_seconds: float = Field(default=30.0, gt=0.0)
    speed_increment: float = Field(default=0.3, ge=0.0)
    spawn_rate_increment: float = Field(default=0.004, ge=0.0)
    reset_spawn_timers: List[PowerUpKind] = Field(
        default_factory=lambda: [PowerUpKind.AVATAR_DUPLICATE, PowerUpKind.HEAL],
        description="Power-up spawn timers zeroed on level up so they reappear early"
    )


class MarkerTuning(BaseModel):
    """Lifetimes of transient effect markers, in ticks."""
    model_config = {"frozen": True}

    zap_ticks: int = Field(default=10, ge=1)
    hit_ticks: int = Field(default=30, ge=1)
    collect_ticks: int = Field(default=40, ge=1)
    blast_ticks: int = Field(default=45, ge=1)
    wave_ticks: int = Field(default=120, ge=1)
    damage_ticks: int = Field(default=30, ge=1)
    level_up_ticks: int = Field(default=90, ge=1)


class TuningConfig(BaseModel):
    """
    Complete gameplay tuning.

    Nested sections mirror the simulation components: field geometry,
    player, action, hazards, power-ups, effects, levels and markers.
    """
    model_config = {"frozen": True}

    ticks_per_second: int = Field(default=60, ge=1)
    field: FieldTuning = Field(default_factory=FieldTuning)
    player: PlayerTuning = Field(default_factory=PlayerTuning)
    action: ActionTuning = Field(default_factory=ActionTuning)
    hazards: HazardTuning = Field(default_factory=HazardTuning)
    power_ups: Dict[PowerUpKind, PowerUpKindTuning] = Field(default_factory=_default_power_ups)
    effects: EffectTuning = Field(default_factory=EffectTuning)
    level: LevelTuning = Field(default_factory=LevelTuning)
    markers: MarkerTuning = Field(default_factory=MarkerTuning)

    @model_validator(mode='after')
    def validate_power_up_table(self) -> 'TuningConfig':
        """Every power-up kind needs a spawn entry."""
        missing = [k.value for k in PowerUpKind if k not in self.power_ups]
        if missing:
            raise ValueError(f"power_ups is missing entries for: {', '.join(missing)}")
        return self

    def hazard(self, kind: HazardKind) -> HazardKindTuning:
        """Per-kind hazard table lookup."""
        return {HazardKind.COMMON: self.hazards.common, HazardKind.RARE: self.hazards.rare}[kind]

    def power_up(self, kind: PowerUpKind) -> PowerUpKindTuning:
        """Per-kind power-up table lookup."""
        return self.power_ups[kind]


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_tuning(path: Optional[Union[str, Path]] = None) -> TuningConfig:
    """Load tuning from a YAML file, layered over the defaults.

    The YAML may be partial; any omitted section or field keeps its default.

    Args:
        path: YAML file path, or None for pure defaults

    Returns:
        Validated TuningConfig instance

    Raises:
        FileNotFoundError: If the YAML file doesn't exist
        ValueError: If the YAML content is malformed or fails validation

    Examples:
        >>> load_tuning(None).level.duration_seconds
        30.0
    """
    if path is None:
        return TuningConfig()

    yaml_path = Path(path)
    if not yaml_path.exists():
        raise FileNotFoundError(f"Tuning file not found: {yaml_path}")

    try:
        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML file '{yaml_path}': {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Tuning file '{yaml_path}' must contain a mapping")

    defaults = TuningConfig().model_dump(mode='json')
    try:
        return TuningConfig(**_deep_merge(defaults, data))
    except ValidationError as e:
        raise ValueError(f"Invalid tuning configuration in '{yaml_path}':\n{e}") from e
