"""
Input abstraction layer.

Input sources produce InputEvents; the InputManager folds a frame's
events into the TickInput the simulation core consumes.
"""

from pipeline_defense.games.input.input_event import InputAction, InputEvent
from pipeline_defense.games.input.input_manager import InputManager, to_tick_input

__all__ = ['InputAction', 'InputEvent', 'InputManager', 'to_tick_input']
