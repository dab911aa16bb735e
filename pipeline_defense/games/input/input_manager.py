"""
Input Manager - Collects input from a source and builds per-tick input.
"""
from typing import Iterable, List, Optional

from pipeline_defense.games.input.input_event import InputAction, InputEvent
from pipeline_defense.games.input.sources.base import InputSource
from pipeline_defense.sim.inputs import TickInput


def to_tick_input(events: Iterable[InputEvent]) -> TickInput:
    """Fold one frame of input events into a TickInput.

    The last pointer position of the frame wins; any discrete action seen
    during the frame is reported once.
    """
    actions = set()
    pointer_x: Optional[float] = None
    for event in events:
        actions.add(event.action)
        if event.action == InputAction.POINTER:
            pointer_x = event.x

    return TickInput(
        left=InputAction.MOVE_LEFT in actions,
        right=InputAction.MOVE_RIGHT in actions,
        pointer_x=pointer_x,
        trigger=InputAction.TRIGGER in actions,
        pause_toggle=InputAction.PAUSE in actions,
        restart=InputAction.RESTART in actions,
    )


class InputManager:
    """Manages the input source and collects events.

    Swapping the source (keyboard/mouse, scripted playback) never changes
    game logic; everything downstream only sees InputEvents.
    """

    def __init__(self, source: Optional[InputSource] = None):
        """Initialize with an optional input source."""
        self._source = source
        self.quit_requested = False

    def set_source(self, source: InputSource) -> None:
        """Set the input source."""
        self._source = source

    def get_source(self) -> Optional[InputSource]:
        """Get the currently active input source."""
        return self._source

    def has_source(self) -> bool:
        """Check if an input source is currently active."""
        return self._source is not None

    def update(self, dt: float) -> None:
        """Update the active input source.

        Args:
            dt: Delta time in seconds since last update.
        """
        if self._source is not None:
            self._source.update(dt)

    def get_events(self) -> List[InputEvent]:
        """Get collected events since last update.

        QUIT events are consumed here and latch quit_requested.
        """
        if self._source is None:
            return []
        events = []
        for event in self._source.poll_events():
            if event.action == InputAction.QUIT:
                self.quit_requested = True
            else:
                events.append(event)
        return events

    def clear_events(self) -> None:
        """Clear any pending events from the active source."""
        if self._source is not None:
            self._source.poll_events()
