"""
Pygame front end for Pipeline Defense.

- base_game / game_state: game mode interface
- game_mode: PipelineDefenseMode, renders snapshots and drives the core
- feedback: sounds and particles driven by core events
- input: keyboard/mouse capture folded into per-tick input
- main: standalone entry point
"""

from pipeline_defense.games.game_state import GameState

__all__ = ['GameState']
