"""
Pipeline Defense game mode.

Wraps a headless SessionState behind the BaseGame interface: input events
become one TickInput per frame, update() advances the core by one tick and
hands the resulting events to the EventDispatcher, and render() draws a
snapshot. Rendering and feedback failures are logged and never reach the
simulation.
"""

import math
from typing import List, Optional

import pygame

from pipeline_defense import config
from pipeline_defense.events import EventDispatcher, GameEvent
from pipeline_defense.games.base_game import BaseGame
from pipeline_defense.games.feedback import FeedbackManager
from pipeline_defense.games.game_state import GameState
from pipeline_defense.games.input.input_event import InputEvent
from pipeline_defense.games.input.input_manager import to_tick_input
from pipeline_defense.logging import get_logger
from pipeline_defense.models.enums import HazardKind, MarkerKind, Phase, PowerUpKind
from pipeline_defense.sim.inputs import IDLE, TickInput
from pipeline_defense.sim.simulation import (
    AvatarView,
    HazardView,
    MarkerView,
    PowerUpView,
    Snapshot,
    new_session,
    snapshot,
    step,
)
from pipeline_defense.tuning import TuningConfig

log = get_logger('game_mode')

PHASE_TO_STATE = {
    Phase.PLAYING: GameState.PLAYING,
    Phase.PAUSED: GameState.PAUSED,
    Phase.GAME_OVER: GameState.GAME_OVER,
}

POWER_UP_LABELS = {
    PowerUpKind.RANGE_BOOST: "B",
    PowerUpKind.AREA_CLEAR: "!",
    PowerUpKind.AVATAR_DUPLICATE: "S",
    PowerUpKind.HEAL: "+",
    PowerUpKind.WAVE_CLEAR: "AI",
}

# Longest frame the level countdown may absorb (window drags, breakpoints)
MAX_FRAME_SECONDS = 0.1


class PipelineDefenseMode(BaseGame):
    """
    Pipeline Defense game mode.

    Water drops and rust monsters fall toward the pipeline. Zap them from
    below before they hit it, and grab power-ups on the way.
    """

    NAME = "Pipeline Defense"
    DESCRIPTION = "Zap falling hazards before they reach the pipeline."
    VERSION = "1.0.0"
    AUTHOR = "Pipeline Defense Team"

    ARGUMENTS = [
        {
            'name': '--seed',
            'type': int,
            'default': None,
            'help': 'Random seed for reproducible spawns'
        },
        {
            'name': '--tuning',
            'type': str,
            'default': None,
            'help': 'Path to a YAML tuning file'
        },
        {
            'name': '--no-audio',
            'action': 'store_true',
            'default': False,
            'help': 'Disable sound effects'
        },
    ]

    def __init__(
        self,
        width: int = config.SCREEN_WIDTH,
        height: int = config.SCREEN_HEIGHT,
        tuning: Optional[TuningConfig] = None,
        seed: Optional[int] = None,
        audio_enabled: bool = config.AUDIO_ENABLED,
        feedback: Optional[FeedbackManager] = None,
        dispatcher: Optional[EventDispatcher] = None,
    ):
        """
        Initialize game mode.

        Args:
            width: Playfield width in pixels
            height: Playfield height in pixels
            tuning: Gameplay constants (defaults if None)
            seed: Random seed for the session
            audio_enabled: Whether to play sounds
            feedback: Feedback collaborator (created if None)
            dispatcher: Event dispatcher (created if None)
        """
        self.session = new_session(width, height, tuning=tuning, seed=seed)
        self.dispatcher = dispatcher or EventDispatcher()
        self.feedback = feedback or FeedbackManager(audio_enabled=audio_enabled)
        self.dispatcher.subscribe(self.feedback.on_event)

        self._pending: TickInput = IDLE
        self.last_events: List[GameEvent] = []

        self._font: Optional[pygame.font.Font] = None
        self._font_large: Optional[pygame.font.Font] = None

    def _get_font(self) -> pygame.font.Font:
        """Get or create font."""
        if self._font is None:
            self._font = pygame.font.Font(None, 32)
        return self._font

    def _get_font_large(self) -> pygame.font.Font:
        """Get or create large font."""
        if self._font_large is None:
            self._font_large = pygame.font.Font(None, 72)
        return self._font_large

    def _get_internal_state(self) -> GameState:
        return PHASE_TO_STATE[self.session.phase]

    def get_score(self) -> int:
        return self.session.score

    def reset(self) -> None:
        """Queue a restart for the next update."""
        self._pending = TickInput(restart=True)

    def handle_input(self, events: List[InputEvent]) -> None:
        """
        Collect this frame's input events for the next update.

        Args:
            events: List of input events
        """
        self._pending = to_tick_input(events)

    def update(self, dt: float) -> None:
        """
        Advance the simulation by one tick and dispatch its events.

        Args:
            dt: Delta time in seconds
        """
        inp, self._pending = self._pending, IDLE
        dt = min(max(dt, 0.0), MAX_FRAME_SECONDS)

        self.last_events = step(self.session, inp, dt)
        if inp.restart:
            self.feedback.clear()
        self.dispatcher.dispatch(self.last_events)

        try:
            self.feedback.update(dt)
        except Exception:
            log.exception("Feedback update failed")

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, screen: pygame.Surface) -> None:
        """
        Render the game.

        Args:
            screen: Pygame surface to draw on
        """
        snap = snapshot(self.session)
        try:
            self._render_world(screen, snap)
        except Exception:
            log.exception("World rendering failed")

        try:
            self.feedback.render(screen)
        except Exception:
            log.exception("Feedback rendering failed")

        try:
            self._render_ui(screen, snap)
            if snap.phase == Phase.PAUSED:
                self._render_paused(screen, snap)
            elif snap.phase == Phase.GAME_OVER:
                self._render_game_over(screen, snap)
        except Exception:
            log.exception("UI rendering failed")

    def _render_world(self, screen: pygame.Surface, snap: Snapshot) -> None:
        width, height = snap.width, snap.height
        dx, dy = self.feedback.shake_offset()

        screen.fill(config.SKY_COLOR)
        ground_top = int(snap.damage_line_y) + dy
        pygame.draw.rect(screen, config.GROUND_COLOR, (0, ground_top, width, height - ground_top))

        self._draw_pipeline(screen, snap, dx, dy)

        for hazard in snap.hazards:
            self._draw_hazard(screen, hazard, dx, dy)
        for power_up in snap.power_ups:
            self._draw_power_up(screen, power_up, dx, dy)
        for avatar in snap.avatars:
            self._draw_avatar(screen, avatar, snap, dx, dy)
        for marker in snap.markers:
            self._draw_marker(screen, marker, snap)

    def _draw_pipeline(self, screen: pygame.Surface, snap: Snapshot, dx: int, dy: int) -> None:
        """Pipeline along the damage line; rust spreads as health drops."""
        top = int(snap.damage_line_y) + dy
        pipe = pygame.Rect(dx, top, snap.width, 24)
        rust = 1.0 - snap.health / 100.0
        color = tuple(
            int(a + (b - a) * rust)
            for a, b in zip(config.PIPELINE_COLOR, config.PIPELINE_RUST_COLOR)
        )
        pygame.draw.rect(screen, color, pipe)
        pygame.draw.line(screen, (60, 60, 70), (pipe.left, pipe.top), (pipe.right, pipe.top), 2)

        # One crack per hit, spaced deterministically along the pipe
        for i in range(min(snap.hits_taken, 40)):
            cx = (i * 97 + 31) % max(1, snap.width)
            pygame.draw.line(screen, (40, 30, 20), (cx + dx, top + 4), (cx + dx + 6, top + 18), 2)

    def _draw_hazard(self, screen: pygame.Surface, hazard: HazardView, dx: int, dy: int) -> None:
        x, y = int(hazard.x) + dx, int(hazard.y) + dy
        size = int(hazard.size)
        if hazard.kind == HazardKind.RARE:
            pygame.draw.circle(screen, config.RUST_COLOR, (x, y), size)
            pygame.draw.circle(screen, (255, 60, 0), (x - size // 3, y - size // 4), 3)
            pygame.draw.circle(screen, (255, 60, 0), (x + size // 3, y - size // 4), 3)
        else:
            points = [(x, y - size), (x - size // 2, y + size // 4), (x + size // 2, y + size // 4)]
            pygame.draw.polygon(screen, config.WATER_COLOR, points)
            pygame.draw.circle(screen, config.WATER_COLOR, (x, y + size // 4), size // 2)

    def _draw_power_up(self, screen: pygame.Surface, power_up: PowerUpView, dx: int, dy: int) -> None:
        color = config.POWER_UP_COLORS[power_up.kind.value]
        pulse = 1.0 + 0.15 * math.sin(power_up.age * 0.1)
        radius = int(16 * pulse)
        center = (int(power_up.x) + dx, int(power_up.y) + dy)
        pygame.draw.circle(screen, color, center, radius)
        pygame.draw.circle(screen, (255, 255, 255), center, radius, 2)

        label = self._get_font().render(POWER_UP_LABELS[power_up.kind], True, (0, 0, 0))
        screen.blit(label, label.get_rect(center=center))

    def _draw_avatar(self, screen: pygame.Surface, avatar: AvatarView, snap: Snapshot,
                     dx: int, dy: int) -> None:
        x, feet = int(avatar.x) + dx, int(avatar.y) + dy
        w, h = int(avatar.width), int(avatar.height)
        body_color = (147, 112, 219) if avatar.duplicate else config.TECHNICIAN_COLOR
        pygame.draw.rect(screen, body_color, (x - w // 2, feet - h, w, h))
        pygame.draw.circle(screen, config.HEAD_COLOR, (x, feet - h - 10), 10)

        # Cane from the hand up to the zap reference point
        tuning = self.session.tuning.player
        tip = (x + int(tuning.tip_offset_x), feet - h - int(tuning.tip_offset_y))
        pygame.draw.line(screen, config.CANE_COLOR, (x + w // 2, feet - h // 2), tip, 3)
        if snap.cooldown == 0:
            pygame.draw.circle(screen, config.ZAP_COLOR, tip, 3)

    def _draw_marker(self, screen: pygame.Surface, marker: MarkerView, snap: Snapshot) -> None:
        x, y = int(marker.x), int(marker.y)
        if marker.kind == MarkerKind.ZAP:
            reach = int(self.session.tuning.action.vertical_reach)
            half = int(marker.value)
            bolt = [(x, y)]
            for i in range(1, 6):
                offset = half // 3 if i % 2 else -half // 3
                bolt.append((x + offset, y - reach * i // 5))
            pygame.draw.lines(screen, config.ZAP_COLOR, False, bolt, 3)
        elif marker.kind in (MarkerKind.HIT, MarkerKind.COLLECT):
            text = self._get_font().render(f"+{int(marker.value)}", True, (255, 255, 0))
            screen.blit(text, text.get_rect(center=(x, y - (40 - marker.ttl))))
        elif marker.kind == MarkerKind.BLAST:
            total = self.session.tuning.markers.blast_ticks
            radius = int(marker.value * (1.0 - marker.ttl / total)) + 1
            pygame.draw.circle(screen, (255, 140, 0), (x, y), radius, 4)
        elif marker.kind == MarkerKind.WAVE:
            total = self.session.tuning.markers.wave_ticks
            radius = int(max(snap.width, snap.height) * (1.0 - marker.ttl / total)) + 1
            pygame.draw.circle(screen, (220, 20, 60), (x, y), radius, 6)
        elif marker.kind == MarkerKind.DAMAGE:
            pygame.draw.circle(screen, (255, 80, 0), (x, y), max(2, marker.ttl // 2), 2)
        elif marker.kind == MarkerKind.LEVEL_UP:
            text = self._get_font_large().render(f"LEVEL {int(marker.value)}", True, (255, 255, 0))
            screen.blit(text, text.get_rect(center=(x, y)))

    def _render_ui(self, screen: pygame.Surface, snap: Snapshot) -> None:
        """Render HUD: level, timer, score, health bar and active buffs."""
        font = self._get_font()
        color = config.HUD_TEXT_COLOR

        screen.blit(font.render(f"Level: {snap.level}", True, color), (10, 10))
        screen.blit(font.render(f"Time: {int(math.ceil(snap.time_left))}", True, color), (10, 40))
        score_text = font.render(f"Score: {snap.score}", True, color)
        screen.blit(score_text, (snap.width - score_text.get_width() - 10, 10))

        bar = pygame.Rect(snap.width - 210, 45, 200, 16)
        fill = bar.copy()
        fill.width = int(bar.width * snap.health / 100.0)
        bar_color = config.HEALTH_GOOD_COLOR if snap.health > 30 else config.HEALTH_LOW_COLOR
        pygame.draw.rect(screen, (40, 40, 40), bar)
        pygame.draw.rect(screen, bar_color, fill)
        pygame.draw.rect(screen, color, bar, 1)

        buffs = []
        if snap.range_boosted:
            buffs.append("RANGE x2")
        if snap.duplicate_active:
            buffs.append("BACKUP")
        if snap.slowed:
            buffs.append("SLOW-MO")
        if buffs:
            screen.blit(font.render("  ".join(buffs), True, (255, 215, 0)), (10, 70))

    def _overlay(self, screen: pygame.Surface, snap: Snapshot) -> None:
        overlay = pygame.Surface((snap.width, snap.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 128))
        screen.blit(overlay, (0, 0))

    def _render_paused(self, screen: pygame.Surface, snap: Snapshot) -> None:
        self._overlay(screen, snap)
        text = self._get_font_large().render("PAUSED", True, (255, 255, 255))
        screen.blit(text, text.get_rect(center=(snap.width // 2, snap.height // 2 - 20)))
        hint = self._get_font().render("Press P to resume", True, (200, 200, 200))
        screen.blit(hint, hint.get_rect(center=(snap.width // 2, snap.height // 2 + 30)))

    def _render_game_over(self, screen: pygame.Surface, snap: Snapshot) -> None:
        """Render game over screen."""
        self._overlay(screen, snap)
        text = self._get_font_large().render("PIPELINE EXPLODED", True, (255, 0, 0))
        screen.blit(text, text.get_rect(center=(snap.width // 2, snap.height // 2 - 50)))

        font = self._get_font()
        score_text = font.render(f"Final Score: {snap.score}  Level: {snap.level}", True, (255, 255, 255))
        screen.blit(score_text, score_text.get_rect(center=(snap.width // 2, snap.height // 2 + 20)))
        hint = font.render("Press R to restart", True, (200, 200, 200))
        screen.blit(hint, hint.get_rect(center=(snap.width // 2, snap.height // 2 + 60)))
