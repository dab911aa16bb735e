"""Standard GameState enum for the pygame front end.

The host loop only needs to know whether the game is running, frozen by
the player, or over. The simulation's Phase maps onto these one-to-one.
"""
from enum import Enum


class GameState(Enum):
    """Externally reported game states.

    States:
        PLAYING: Active gameplay in progress
        PAUSED: Game temporarily paused (manual pause)
        GAME_OVER: Pipeline exploded; waiting for restart or quit
    """
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
