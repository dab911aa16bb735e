"""
Tests for FeedbackManager.

Actual sound playback is hard to test, so audio tests check that
generation works and that failures disable audio gracefully.
"""

from unittest.mock import MagicMock, patch

import numpy as np
import pygame
import pytest

from pipeline_defense.events import EventKind, GameEvent
from pipeline_defense.games.feedback import SAMPLE_RATE, SOUND_SPECS, FeedbackManager, generate_tone


def _event(kind, x=100.0, y=200.0, **kwargs):
    return GameEvent(kind=kind, tick=1, x=x, y=y, **kwargs)


class TestGenerateTone:
    """Procedural sound generation."""

    def test_shape_and_dtype(self):
        samples = generate_tone(440.0, 880.0, 0.1)
        assert samples.shape == (int(SAMPLE_RATE * 0.1), 2)
        assert samples.dtype == np.int16

    @pytest.mark.parametrize('waveform', ['sine', 'square', 'sawtooth'])
    def test_waveforms_within_gain(self, waveform):
        samples = generate_tone(300.0, 100.0, 0.2, waveform=waveform, gain=0.5)
        assert np.abs(samples).max() <= int(32767 * 0.5) + 1

    def test_unknown_waveform(self):
        with pytest.raises(ValueError):
            generate_tone(440.0, 440.0, 0.1, waveform='triangle')


class TestAudio:
    """Audio initialization and playback."""

    def test_audio_disabled(self, pygame_init):
        manager = FeedbackManager(audio_enabled=False)
        assert manager.audio_enabled is False
        assert manager.sounds == {}
        manager.play(EventKind.HIT)

    @patch('pipeline_defense.games.feedback.pygame.mixer')
    def test_audio_init_failure_graceful(self, mock_mixer, pygame_init):
        """A missing audio device disables audio instead of crashing."""
        mock_mixer.init.side_effect = Exception("Audio device not available")

        manager = FeedbackManager(audio_enabled=True)

        assert manager.audio_enabled is False
        assert manager.sounds == {}

    @patch('pipeline_defense.games.feedback.pygame.sndarray')
    @patch('pipeline_defense.games.feedback.pygame.mixer')
    def test_one_sound_per_kind(self, mock_mixer, mock_sndarray, pygame_init):
        mock_sndarray.make_sound.side_effect = lambda samples: MagicMock()

        manager = FeedbackManager(audio_enabled=True, volume=0.5)

        assert set(manager.sounds) == set(SOUND_SPECS)
        manager.sounds[EventKind.HIT].set_volume.assert_called_once_with(0.5)

    def test_event_plays_matching_sound(self, pygame_init):
        manager = FeedbackManager(audio_enabled=False)
        manager.audio_enabled = True
        sound = MagicMock()
        manager.sounds = {EventKind.LEVEL_UP: sound}

        manager.on_event(_event(EventKind.LEVEL_UP))

        sound.play.assert_called_once()

    def test_playback_failure_swallowed(self, pygame_init):
        manager = FeedbackManager(audio_enabled=False)
        manager.audio_enabled = True
        sound = MagicMock()
        sound.play.side_effect = pygame.error("mixer closed")
        manager.sounds = {EventKind.ZAP: sound}

        manager.play(EventKind.ZAP)


class TestVisualEffects:
    """Particles, flash and shake."""

    def test_hit_spawns_particles(self):
        manager = FeedbackManager(audio_enabled=False)
        manager.on_event(_event(EventKind.HIT))
        assert len(manager.particles) == 12

    def test_event_without_position_spawns_nothing(self):
        manager = FeedbackManager(audio_enabled=False)
        manager.on_event(GameEvent(kind=EventKind.HIT, tick=1))
        assert manager.particles == []

    def test_explosion_flashes_and_shakes(self):
        manager = FeedbackManager(audio_enabled=False)
        manager.on_event(_event(EventKind.EXPLOSION))
        assert manager.flash > 0
        assert manager.shake > 0
        assert len(manager.particles) == 60

    def test_wave_clear_flashes(self):
        manager = FeedbackManager(audio_enabled=False)
        manager.on_event(_event(EventKind.AREA_CLEAR, entity_kind='wave_clear'))
        assert manager.flash > 0

    def test_effects_expire(self):
        manager = FeedbackManager(audio_enabled=False)
        manager.on_event(_event(EventKind.EXPLOSION))
        for _ in range(300):
            manager.update(1 / 60)
        assert manager.particles == []
        assert manager.flash == 0
        assert manager.shake_offset() == (0, 0)

    def test_render(self, screen):
        manager = FeedbackManager(audio_enabled=False)
        manager.on_event(_event(EventKind.EXPLOSION))
        manager.update(1 / 60)
        manager.render(screen)

    def test_clear(self):
        manager = FeedbackManager(audio_enabled=False)
        manager.on_event(_event(EventKind.EXPLOSION))
        manager.clear()
        assert manager.particles == []
        assert manager.flash == 0
