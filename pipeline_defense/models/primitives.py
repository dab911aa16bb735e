"""
Shared primitive data types.

Basic geometric types used by the simulation core and the pygame
presentation layer.
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Point2D(BaseModel):
    """Immutable 2D point for positions in field (screen) coordinates.

    Attributes:
        x: X coordinate (horizontal, grows right)
        y: Y coordinate (vertical, grows down)

    Examples:
        >>> Point2D(x=100.0, y=200.0).y
        200.0
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"


class Resolution(BaseModel):
    """Playfield dimensions supplied at session start.

    Attributes:
        width: Width in pixels (must be positive)
        height: Height in pixels (must be positive)

    Examples:
        >>> field = Resolution(width=800, height=600)
        >>> field.aspect_ratio
        1.3333333333333333
    """
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    @computed_field
    @property
    def aspect_ratio(self) -> float:
        """Calculate aspect ratio (width / height)."""
        return self.width / self.height

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Resolution({self.width}x{self.height})"
