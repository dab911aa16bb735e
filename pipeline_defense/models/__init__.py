"""
Data models shared by the simulation core and the front end.

- primitives: Pydantic geometric types (Point2D, Resolution)
- enums: closed entity/session kinds (HazardKind, PowerUpKind, MarkerKind, Phase)

Usage:
    >>> from pipeline_defense.models import Point2D, Resolution, HazardKind
"""

from .primitives import (
    Point2D,
    Resolution,
)
from .enums import (
    HazardKind,
    PowerUpKind,
    MarkerKind,
    Phase,
)

__all__ = [
    "Point2D",
    "Resolution",
    "HazardKind",
    "PowerUpKind",
    "MarkerKind",
    "Phase",
]
