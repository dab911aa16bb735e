"""Input sources."""

from pipeline_defense.games.input.sources.base import InputSource
from pipeline_defense.games.input.sources.keyboard_mouse import KeyboardMouseInputSource

__all__ = ['InputSource', 'KeyboardMouseInputSource']
