"""
Entity and session enumerations.

Closed sets of kinds used for table-driven dispatch in the spawner,
resolver and power-up engine.
"""

from enum import Enum


class HazardKind(str, Enum):
    """Falling hazards that damage the pipeline.

    Attributes:
        COMMON: Water drop, slower and weaker
        RARE: Rust monster, faster, wiggles and hits harder
    """
    COMMON = "common"
    RARE = "rare"


class PowerUpKind(str, Enum):
    """Collectible power-ups.

    Attributes:
        RANGE_BOOST: Battery, doubles zap half-width for a while
        AREA_CLEAR: Bullhorn, blasts hazards near the collection point
        AVATAR_DUPLICATE: Survey manager, adds a second technician
        HEAL: CartoPac, repairs the pipeline
        WAVE_CLEAR: AI bomb, clears every hazard and slows the game
    """
    RANGE_BOOST = "range_boost"
    AREA_CLEAR = "area_clear"
    AVATAR_DUPLICATE = "avatar_duplicate"
    HEAL = "heal"
    WAVE_CLEAR = "wave_clear"


class MarkerKind(str, Enum):
    """Transient effect markers left in the registry for the presentation layer."""
    ZAP = "zap"
    HIT = "hit"
    COLLECT = "collect"
    BLAST = "blast"
    WAVE = "wave"
    DAMAGE = "damage"
    LEVEL_UP = "level_up"


class Phase(str, Enum):
    """Session phases.

    Only PLAYING runs the simulation; PAUSED and GAME_OVER freeze it.
    """
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
