"""Tests for PipelineDefenseMode."""

from unittest.mock import Mock

import pytest

from pipeline_defense import logging as pd_logging
from pipeline_defense.events import EventDispatcher, EventKind
from pipeline_defense.games.feedback import FeedbackManager
from pipeline_defense.games.game_mode import PipelineDefenseMode
from pipeline_defense.games.game_state import GameState
from pipeline_defense.games.input.input_event import InputAction, InputEvent
from pipeline_defense.models.enums import HazardKind, MarkerKind, PowerUpKind
from pipeline_defense.sim.entities import Hazard, PowerUp

DT = 1 / 60


def _input(action, x=None):
    return InputEvent(action=action, timestamp=0.0, x=x)


@pytest.fixture
def game(pygame_init):
    game = PipelineDefenseMode(width=800, height=600, seed=1, audio_enabled=False,
                               dispatcher=EventDispatcher(record_module=None))
    return game


class TestGameInfo:
    """Class metadata."""

    def test_info(self):
        info = PipelineDefenseMode.get_info()
        assert info['name'] == "Pipeline Defense"
        names = [a['name'] for a in info['arguments']]
        assert names == ['--seed', '--tuning', '--no-audio']


class TestGameFlow:
    """Input, update and state mapping."""

    def test_starts_playing(self, game):
        assert game.state == GameState.PLAYING
        assert game.get_score() == 0

    def test_trigger_fires_zap(self, game):
        game.session.registry.add_hazard(
            Hazard(x=410, y=400, kind=HazardKind.COMMON, speed=1.0, damage=10))

        game.handle_input([_input(InputAction.TRIGGER)])
        game.update(DT)

        assert EventKind.ZAP in [e.kind for e in game.last_events]
        assert game.get_score() == 50

    def test_input_consumed_once(self, game):
        game.handle_input([_input(InputAction.PAUSE)])
        game.update(DT)
        game.update(DT)
        assert game.state == GameState.PAUSED

    def test_pointer_moves_technician(self, game):
        game.handle_input([_input(InputAction.POINTER, x=150.0)])
        game.update(DT)
        assert game.session.player.x == 150.0

    def test_game_over_state(self, game):
        game.session.health.value = 10
        game.session.registry.add_hazard(
            Hazard(x=300, y=499.5, kind=HazardKind.COMMON, speed=1.0, damage=10))
        game.update(DT)
        assert game.state == GameState.GAME_OVER

    def test_reset_restarts(self, game):
        game.session.score = 500
        game.reset()
        game.update(DT)
        assert game.get_score() == 0

    def test_events_reach_feedback(self, game):
        game.feedback.on_event = Mock()
        dispatcher = EventDispatcher(record_module=None)
        dispatcher.subscribe(game.feedback.on_event)
        game.dispatcher = dispatcher

        game.handle_input([_input(InputAction.TRIGGER)])
        game.update(DT)

        assert game.feedback.on_event.call_args_list[0][0][0].kind == EventKind.ZAP

    def test_broken_feedback_does_not_stop_simulation(self, pygame_init):
        """Collaborator failures are logged; the core keeps running."""
        feedback = FeedbackManager(audio_enabled=False)
        feedback.on_event = Mock(side_effect=RuntimeError("boom"))
        feedback.update = Mock(side_effect=RuntimeError("boom"))
        game = PipelineDefenseMode(seed=1, audio_enabled=False, feedback=feedback,
                                   dispatcher=EventDispatcher(record_module=None))
        game.session.registry.add_hazard(
            Hazard(x=410, y=400, kind=HazardKind.COMMON, speed=1.0, damage=10))

        game.handle_input([_input(InputAction.TRIGGER)])
        game.update(DT)
        game.update(DT)

        assert game.get_score() == 50
        assert game.session.tick == 2
        assert game.dispatcher.failures >= 1

    def test_failing_event_log_does_not_stop_simulation(self, pygame_init):
        """An unwritable event log is reported, not raised into the loop."""
        class FullDiskSink(pd_logging.LogSink):
            def emit(self, module, record):
                raise OSError("disk full")

            def close(self):
                pass

        pd_logging.register_sink('events', FullDiskSink())
        try:
            game = PipelineDefenseMode(seed=1, audio_enabled=False)
            game.handle_input([_input(InputAction.TRIGGER)])
            game.update(DT)
            game.update(DT)
        finally:
            pd_logging.close_all_sinks()

        assert game.session.tick == 2
        assert game.dispatcher.failures >= 1


class TestRendering:
    """Rendering smoke tests on an off-screen surface."""

    def test_render_everything(self, game, screen):
        session = game.session
        session.registry.add_hazard(
            Hazard(x=100, y=100, kind=HazardKind.COMMON, speed=1.0, damage=10))
        session.registry.add_hazard(
            Hazard(x=200, y=150, kind=HazardKind.RARE, speed=1.0, damage=15))
        for i, kind in enumerate(PowerUpKind):
            session.registry.add_power_up(PowerUp(x=100 + 120 * i, y=250, kind=kind, speed=1.0))
        for kind in MarkerKind:
            session.add_marker(kind, 400, 300, value=50)
        session.duplicate_active = True
        session.health.damage(30)

        game.render(screen)

    def test_render_overlays(self, game, screen):
        game.handle_input([_input(InputAction.PAUSE)])
        game.update(DT)
        game.render(screen)

        game.handle_input([_input(InputAction.RESTART)])
        game.update(DT)
        game.session.health.value = 10
        game.session.registry.add_hazard(
            Hazard(x=300, y=499.5, kind=HazardKind.COMMON, speed=1.0, damage=10))
        game.update(DT)
        game.render(screen)
        assert game.state == GameState.GAME_OVER

    def test_render_failure_contained(self, game, screen):
        game.feedback.render = Mock(side_effect=RuntimeError("broken"))
        game._render_world = Mock(side_effect=RuntimeError("broken"))
        game.render(screen)
        game.update(DT)
        assert game.state == GameState.PLAYING
