"""
Visual and audio feedback for Pipeline Defense.

FeedbackManager is an event listener: the game mode subscribes it to the
EventDispatcher and it turns core events into procedurally generated
sounds, particles, screen flash and screen shake. All particle lifecycles
live here; the simulation core never sees them.

Classes:
    Particle: One short-lived spark
    FeedbackManager: Owns sounds and particles, reacts to GameEvents
"""

import math
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
import pygame

from pipeline_defense import config
from pipeline_defense.events import EventKind, GameEvent
from pipeline_defense.logging import get_logger

log = get_logger('feedback')

SAMPLE_RATE = 22050

# (start Hz, end Hz, seconds, waveform, gain)
SOUND_SPECS: Dict[EventKind, Tuple[float, float, float, str, float]] = {
    EventKind.ZAP: (800.0, 1200.0, 0.10, 'square', 0.15),
    EventKind.HIT: (1200.0, 400.0, 0.15, 'sine', 0.25),
    EventKind.COLLECT: (523.25, 1046.5, 0.25, 'sine', 0.30),
    EventKind.DAMAGE: (200.0, 120.0, 0.30, 'sawtooth', 0.25),
    EventKind.AREA_CLEAR: (300.0, 60.0, 0.50, 'sawtooth', 0.35),
    EventKind.LEVEL_UP: (440.0, 880.0, 0.40, 'sine', 0.30),
    EventKind.EXPLOSION: (150.0, 40.0, 1.00, 'sawtooth', 0.40),
}

PARTICLE_COLORS = {
    EventKind.HIT: (0, 255, 255),
    EventKind.COLLECT: (255, 215, 0),
    EventKind.DAMAGE: (255, 80, 0),
    EventKind.AREA_CLEAR: (255, 140, 0),
    EventKind.EXPLOSION: (255, 60, 0),
}


@dataclass
class Particle:
    """A spark that drifts, falls and fades."""
    x: float
    y: float
    vx: float
    vy: float
    life: float
    color: Tuple[int, int, int]
    max_life: float = 0.0

    def __post_init__(self):
        self.max_life = self.life

    def update(self, dt: float) -> bool:
        """Advance the spark. Returns False when it has burned out."""
        self.x += self.vx * dt
        self.y += self.vy * dt
        self.vy += 300.0 * dt
        self.life -= dt
        return self.life > 0


def generate_tone(start_hz: float, end_hz: float, duration: float,
                  waveform: str = 'sine', gain: float = 0.3) -> np.ndarray:
    """Render a frequency sweep as a stereo int16 sample array.

    Args:
        start_hz: Frequency at the start of the sweep
        end_hz: Frequency at the end of the sweep
        duration: Length in seconds
        waveform: 'sine', 'square' or 'sawtooth'
        gain: Peak amplitude as a fraction of full scale

    Returns:
        Array of shape (samples, 2)
    """
    num_samples = max(1, int(SAMPLE_RATE * duration))
    frequencies = np.geomspace(start_hz, end_hz, num_samples)
    phase = np.cumsum(2.0 * np.pi * frequencies / SAMPLE_RATE)

    if waveform == 'square':
        wave = np.sign(np.sin(phase))
    elif waveform == 'sawtooth':
        wave = 2.0 * (phase / (2.0 * np.pi) % 1.0) - 1.0
    elif waveform == 'sine':
        wave = np.sin(phase)
    else:
        raise ValueError(f"Unknown waveform: {waveform}")

    # Exponential decay envelope with a short attack
    envelope = np.exp(-4.0 * np.linspace(0.0, 1.0, num_samples))
    attack = min(num_samples, int(SAMPLE_RATE * 0.005))
    if attack > 0:
        envelope[:attack] *= np.linspace(0.0, 1.0, attack)

    wave = (wave * envelope * 32767 * gain).astype(np.int16)
    return np.column_stack((wave, wave))


class FeedbackManager:
    """Turns GameEvents into sound and particles.

    Attributes:
        particles: Active sparks
        sounds: Generated sound per event kind
        audio_enabled: Whether audio is enabled
        flash: Seconds of white screen flash left
        shake: Seconds of screen shake left

    Examples:
        >>> manager = FeedbackManager(audio_enabled=False)
        >>> manager.on_event(GameEvent(kind=EventKind.HIT, tick=1, x=10.0, y=10.0))
        >>> len(manager.particles) > 0
        True
    """

    def __init__(self, audio_enabled: bool = True, volume: Optional[float] = None,
                 rng: Optional[random.Random] = None):
        """
        Args:
            audio_enabled: Whether to enable audio feedback
            volume: Effect volume 0-1 (defaults to SFX_VOLUME)
            rng: Random generator for particle spread (cosmetic only)
        """
        self.particles: List[Particle] = []
        self.sounds: Dict[EventKind, pygame.mixer.Sound] = {}
        self.audio_enabled = audio_enabled
        self.volume = config.SFX_VOLUME if volume is None else volume
        self.flash = 0.0
        self.shake = 0.0
        self._rng = rng or random.Random()

        if self.audio_enabled:
            self._init_audio()

    def _init_audio(self) -> None:
        """Initialize the mixer and generate one sound per event kind."""
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512)
            for kind, tone in SOUND_SPECS.items():
                sound = pygame.sndarray.make_sound(generate_tone(*tone))
                sound.set_volume(self.volume)
                self.sounds[kind] = sound
        except Exception as e:
            # If audio initialization fails, disable audio
            log.warning("Audio initialization failed: %s", e)
            self.audio_enabled = False
            self.sounds = {}

    def play(self, kind: EventKind) -> None:
        """Play the sound for an event kind.

        Safe to call even if audio is disabled or sound generation failed.
        """
        sound = self.sounds.get(kind)
        if self.audio_enabled and sound is not None:
            try:
                sound.play()
            except Exception as e:
                log.warning("Could not play %s sound: %s", kind.value, e)

    def burst(self, x: float, y: float, color: Tuple[int, int, int],
              count: int = 12, speed: float = 160.0, life: float = 0.6) -> None:
        """Spawn a radial burst of sparks."""
        for _ in range(count):
            angle = self._rng.uniform(0.0, 2.0 * math.pi)
            magnitude = self._rng.uniform(0.3, 1.0) * speed
            self.particles.append(Particle(
                x=x, y=y,
                vx=math.cos(angle) * magnitude,
                vy=math.sin(angle) * magnitude - speed * 0.5,
                life=self._rng.uniform(0.5, 1.0) * life,
                color=color,
            ))

    def on_event(self, event: GameEvent) -> None:
        """EventDispatcher listener."""
        self.play(event.kind)

        color = PARTICLE_COLORS.get(event.kind)
        if color is not None and event.x is not None and event.y is not None:
            if event.kind == EventKind.EXPLOSION:
                self.burst(event.x, event.y, color, count=60, speed=320.0, life=1.5)
            else:
                self.burst(event.x, event.y, color)

        if event.kind == EventKind.EXPLOSION:
            self.flash = 1.0
            self.shake = 2.0
        elif event.kind == EventKind.AREA_CLEAR and event.entity_kind == 'wave_clear':
            self.flash = 1.0
            self.shake = 2.0
        elif event.kind == EventKind.DAMAGE:
            self.shake = max(self.shake, 0.25)

    def update(self, dt: float) -> None:
        """Age particles and screen effects."""
        self.particles = [p for p in self.particles if p.update(dt)]
        self.flash = max(0.0, self.flash - dt)
        self.shake = max(0.0, self.shake - dt)

    def shake_offset(self) -> Tuple[int, int]:
        """Current screen-shake offset in pixels."""
        if self.shake <= 0:
            return 0, 0
        amount = int(min(self.shake, 1.0) * 8)
        return self._rng.randint(-amount, amount), self._rng.randint(-amount, amount)

    def render(self, screen: pygame.Surface) -> None:
        """Draw sparks and the screen flash."""
        for p in self.particles:
            alpha = max(0.0, p.life / p.max_life) if p.max_life > 0 else 0.0
            radius = max(1, int(3 * alpha) + 1)
            pygame.draw.circle(screen, p.color, (int(p.x), int(p.y)), radius)

        if self.flash > 0:
            overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
            overlay.fill((255, 255, 255, int(min(self.flash, 1.0) * 120)))
            screen.blit(overlay, (0, 0))

    def clear(self) -> None:
        """Drop every active effect (session restart)."""
        self.particles.clear()
        self.flash = 0.0
        self.shake = 0.0
