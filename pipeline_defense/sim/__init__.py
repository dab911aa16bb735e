"""
Headless simulation core.

Usage:
    >>> from pipeline_defense.sim import new_session, step, TickInput
    >>> session = new_session(800, 600, seed=1)
    >>> events = step(session, TickInput(trigger=True))
    >>> events[0].kind.value
    'zap'
"""

from pipeline_defense.sim.inputs import IDLE, TickInput
from pipeline_defense.sim.random_source import RandomSource
from pipeline_defense.sim.session import SessionState
from pipeline_defense.sim.simulation import Snapshot, new_session, snapshot, step

__all__ = [
    'IDLE',
    'TickInput',
    'RandomSource',
    'SessionState',
    'Snapshot',
    'new_session',
    'snapshot',
    'step',
]
