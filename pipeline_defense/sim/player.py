"""
Player controller - maps normalized input to the technician's position.

The technician only moves horizontally. Keyboard intent wins over the
pointer: pressing a direction drops pointer mode until the pointer moves
again, matching how players switch between keys and mouse mid-game.
"""

from typing import List

from pipeline_defense.models.primitives import Point2D
from pipeline_defense.sim.inputs import TickInput
from pipeline_defense.tuning import EffectTuning, PlayerTuning


class PlayerController:
    """
    Horizontal avatar with bounded position.

    Attributes:
        x: Center x of the avatar
        y: Feet y of the avatar (fixed for the session)
        using_pointer: Pointer precedence flag
    """

    def __init__(self, field_width: float, field_height: float, tuning: PlayerTuning):
        self._tuning = tuning
        self.field_width = float(field_width)
        self.width = tuning.width
        self.height = tuning.height
        self.speed = tuning.speed
        self.y = float(field_height) - tuning.baseline_offset
        self.x = self.field_width / 2
        self.using_pointer = False
        self.pointer_x = self.x

    @property
    def min_x(self) -> float:
        return self.width / 2

    @property
    def max_x(self) -> float:
        return self.field_width - self.width / 2

    def clamp(self, x: float) -> float:
        """Clamp an avatar center x to the field."""
        return max(self.min_x, min(self.max_x, x))

    def reset(self) -> None:
        """Return to the field center with keyboard precedence."""
        self.x = self.field_width / 2
        self.using_pointer = False
        self.pointer_x = self.x

    def update(self, inp: TickInput) -> None:
        """Apply one tick of movement intent."""
        if inp.pointer_x is not None:
            self.pointer_x = inp.pointer_x
            self.using_pointer = True
        if inp.keyboard_moving:
            self.using_pointer = False

        if inp.left:
            self.x -= self.speed
        if inp.right:
            self.x += self.speed

        if self.using_pointer and not inp.keyboard_moving:
            self.x = self.pointer_x

        self.x = self.clamp(self.x)

    def duplicate_x(self, effects: EffectTuning) -> float:
        """Center x of the duplicate avatar.

        Sits to the right of the primary, mirrored to the left when that
        would crowd the right edge, and always clamped on-field.
        """
        x = self.x + effects.duplicate_offset
        if x > self.field_width - effects.duplicate_edge_margin:
            x = self.x - effects.duplicate_offset
        return self.clamp(x)

    def tip_for(self, avatar_x: float) -> Point2D:
        """Zap reference point (cane tip) for an avatar centered at avatar_x."""
        return Point2D(
            x=avatar_x + self._tuning.tip_offset_x,
            y=self.y - self.height - self._tuning.tip_offset_y,
        )

    def avatar_xs(self, duplicate_active: bool, effects: EffectTuning) -> List[float]:
        """Centers of every active avatar, primary first."""
        xs = [self.x]
        if duplicate_active:
            xs.append(self.duplicate_x(effects))
        return xs

    def __repr__(self) -> str:
        mode = "pointer" if self.using_pointer else "keys"
        return f"PlayerController(x={self.x:.1f}, y={self.y:.1f}, {mode})"
