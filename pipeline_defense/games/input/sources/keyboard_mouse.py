"""
Keyboard and mouse input source.

Keys:
    Left/A, Right/D   move (held)
    Z, Space          zap
    P                 pause / resume
    R                 restart
    Esc               quit

Mouse motion moves the technician; the left button zaps.
"""
import time
from typing import List, Optional

import pygame

from pipeline_defense.games.input.input_event import InputAction, InputEvent
from pipeline_defense.games.input.sources.base import InputSource

LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)

KEY_ACTIONS = {
    pygame.K_z: InputAction.TRIGGER,
    pygame.K_SPACE: InputAction.TRIGGER,
    pygame.K_p: InputAction.PAUSE,
    pygame.K_r: InputAction.RESTART,
    pygame.K_ESCAPE: InputAction.QUIT,
}


class KeyboardMouseInputSource(InputSource):
    """Converts pygame keyboard and mouse events into InputEvents.

    Consumes the whole pygame event queue, so the main loop does not
    call pygame.event.get() itself.
    """

    def __init__(self):
        self._event_queue: List[InputEvent] = []

    def poll_events(self) -> List[InputEvent]:
        """Get new input events since last poll."""
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def _push(self, action: InputAction, x: Optional[float] = None) -> None:
        self._event_queue.append(InputEvent(action=action, timestamp=time.monotonic(), x=x))

    def update(self, dt: float) -> None:
        """Process pygame events and sample held movement keys."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._push(InputAction.QUIT)
            elif event.type == pygame.KEYDOWN:
                action = KEY_ACTIONS.get(event.key)
                if action is not None:
                    self._push(action)
            elif event.type == pygame.MOUSEMOTION:
                self._push(InputAction.POINTER, x=float(event.pos[0]))
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._push(InputAction.TRIGGER)

        pressed = pygame.key.get_pressed()
        if any(pressed[key] for key in LEFT_KEYS):
            self._push(InputAction.MOVE_LEFT)
        if any(pressed[key] for key in RIGHT_KEYS):
            self._push(InputAction.MOVE_RIGHT)

    def clear(self) -> None:
        """Clear the event queue."""
        self._event_queue.clear()
