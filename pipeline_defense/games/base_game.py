"""Base class for pygame game modes.

Game metadata (NAME, DESCRIPTION, etc.) and CLI arguments (ARGUMENTS)
are declared as class attributes so the entry point can build its
argument parser from the game class.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

import pygame

from pipeline_defense.games.game_state import GameState
from pipeline_defense.logging import get_logger

log = get_logger('base_game')


class BaseGame(ABC):
    """Abstract base class for game modes.

    Class Attributes (metadata):
        NAME: Display name for the game
        DESCRIPTION: Short description of gameplay
        VERSION: Semantic version string
        AUTHOR: Author/team name
        ARGUMENTS: List of CLI argument definitions for argparse

    Subclasses must implement:
        - _get_internal_state() -> GameState: Map internal state to standard state
        - get_score() -> int: Return current score
        - handle_input(events): Process input events
        - update(dt): Update game logic
        - render(screen): Draw the game

    Optional overrides:
        - reset(): Reset game to initial state
    """

    NAME: str = "Unnamed Game"
    DESCRIPTION: str = "No description"
    VERSION: str = "1.0.0"
    AUTHOR: str = "Unknown"

    # CLI argument definitions for argparse
    # Each entry is a dict with keys: name, type, default, help, action (optional)
    ARGUMENTS: List[Dict[str, Any]] = []

    @classmethod
    def get_arguments(cls) -> List[Dict[str, Any]]:
        """Get CLI arguments for this game, de-duplicated by name."""
        seen_names = set()
        result = []
        for arg in cls.ARGUMENTS:
            name = arg.get('name', '')
            if name and name not in seen_names:
                seen_names.add(name)
                result.append(arg)
        return result

    @classmethod
    def get_info(cls) -> Dict[str, Any]:
        """Get game metadata as a dictionary.

        Returns:
            Dict with keys: name, description, version, author, arguments
        """
        return {
            'name': cls.NAME,
            'description': cls.DESCRIPTION,
            'version': cls.VERSION,
            'author': cls.AUTHOR,
            'arguments': cls.get_arguments(),
        }

    @property
    def state(self) -> GameState:
        """Current game state (standard interface).

        Games should not override this - override _get_internal_state instead.
        """
        return self._get_internal_state()

    @abstractmethod
    def _get_internal_state(self) -> GameState:
        """Map internal game state to standard GameState."""

    @abstractmethod
    def get_score(self) -> int:
        """Get current score."""

    @abstractmethod
    def handle_input(self, events: List) -> None:
        """Process input events.

        Args:
            events: List of input events from the InputManager
        """

    @abstractmethod
    def update(self, dt: float) -> None:
        """Update game logic.

        Args:
            dt: Delta time in seconds since last update
        """

    @abstractmethod
    def render(self, screen: pygame.Surface) -> None:
        """Draw the game.

        Args:
            screen: Pygame surface to draw on
        """

    def reset(self) -> None:
        """Reset game to initial state. Default does nothing."""
        log.debug("%s.reset() not implemented", type(self).__name__)
