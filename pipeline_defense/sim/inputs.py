"""
Normalized per-tick input consumed by the simulation core.

Input sources (keyboard, mouse, tests) build one TickInput per frame;
the core never sees raw device events.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TickInput:
    """Everything the player asked for during one tick.

    Attributes:
        left: Move-left intent is held
        right: Move-right intent is held
        pointer_x: Absolute pointer x if the pointer moved this tick, else None
        trigger: Discrete zap request
        pause_toggle: Discrete pause/resume request
        restart: Discrete restart request
    """
    left: bool = False
    right: bool = False
    pointer_x: Optional[float] = None
    trigger: bool = False
    pause_toggle: bool = False
    restart: bool = False

    @property
    def keyboard_moving(self) -> bool:
        """True if any directional key is held."""
        return self.left or self.right

    def __str__(self) -> str:
        """String representation for debugging."""
        flags = [name for name in ('left', 'right', 'trigger', 'pause_toggle', 'restart')
                 if getattr(self, name)]
        pointer = f", pointer={self.pointer_x:.1f}" if self.pointer_x is not None else ""
        return f"TickInput({'|'.join(flags) or 'idle'}{pointer})"


IDLE = TickInput()
