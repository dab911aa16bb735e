"""Shared fixtures for Pipeline Defense tests."""
import os

# Headless pygame for every test module
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

from typing import Iterable, Optional

import pygame
import pytest

from pipeline_defense.models.enums import PowerUpKind
from pipeline_defense.sim.random_source import RandomSource
from pipeline_defense.sim.simulation import new_session
from pipeline_defense.tuning import TuningConfig

# Far enough out that nothing spawns during a test
NEVER = 10 ** 9


class ScriptedRandom(RandomSource):
    """RandomSource that replays scripted draws.

    uniform() returns the next scripted value, or the low bound once the
    script runs out; chance() does the same with False.
    """

    def __init__(self, uniforms: Iterable[float] = (), chances: Iterable[bool] = ()):
        super().__init__(seed=0)
        self.uniforms = list(uniforms)
        self.chances = list(chances)

    def uniform(self, lo: float, hi: float) -> float:
        if self.uniforms:
            return self.uniforms.pop(0)
        return lo

    def chance(self, probability: float) -> bool:
        if self.chances:
            return self.chances.pop(0)
        return False


def silence_spawner(session) -> None:
    """Push every spawn countdown out of reach."""
    session.spawner.hazard_timer = NEVER
    for kind in PowerUpKind:
        session.spawner.power_up_timers[kind] = NEVER


@pytest.fixture
def scripted_random():
    """The ScriptedRandom class, for tests that script their own draws."""
    return ScriptedRandom


@pytest.fixture
def make_session():
    """Factory for 800x600 sessions.

    Spawning is silenced unless spawns=True, so tests only see the
    entities they place themselves.
    """
    def _make(width: int = 800, height: int = 600, tuning: Optional[TuningConfig] = None,
              rng: Optional[RandomSource] = None, spawns: bool = False):
        session = new_session(width, height, tuning=tuning, rng=rng or ScriptedRandom())
        if not spawns:
            silence_spawner(session)
        return session
    return _make


@pytest.fixture
def session(make_session):
    """Quiet 800x600 session with default tuning."""
    return make_session()


@pytest.fixture
def pygame_init():
    """Initialize pygame with a dummy display for testing."""
    pygame.init()
    pygame.display.set_mode((800, 600))
    yield
    pygame.quit()


@pytest.fixture
def screen(pygame_init):
    """Off-screen surface the size of the default field."""
    return pygame.Surface((800, 600))
