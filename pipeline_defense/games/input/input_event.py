"""
Input Event - Represents a single input action.

Input sources translate raw device events into InputEvents; the
InputManager folds one frame's events into a TickInput for the core.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class InputAction(str, Enum):
    """Player actions an input source can report.

    MOVE_LEFT / MOVE_RIGHT are held intents, reported every frame the key
    is down. The rest are discrete and reported once per press.
    """
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    POINTER = "pointer"
    TRIGGER = "trigger"
    PAUSE = "pause"
    RESTART = "restart"
    QUIT = "quit"


@dataclass(frozen=True)
class InputEvent:
    """Immutable input event from any source.

    Attributes:
        action: What the player asked for
        timestamp: Time when the event occurred (seconds, from monotonic clock)
        x: Pointer x in screen coordinates (POINTER events only)
    """
    action: InputAction
    timestamp: float
    x: Optional[float] = None

    def __post_init__(self):
        """Validate timestamp and pointer payload."""
        if self.timestamp < 0:
            raise ValueError(f'Timestamp must be non-negative, got {self.timestamp}')
        if self.action == InputAction.POINTER and self.x is None:
            raise ValueError('POINTER events need an x coordinate')

    def __str__(self) -> str:
        """String representation for debugging."""
        pos = f", x={self.x:.1f}" if self.x is not None else ""
        return f"InputEvent({self.action.value}{pos}, t={self.timestamp:.3f})"
