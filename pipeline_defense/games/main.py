#!/usr/bin/env python3
"""
Pipeline Defense - Standalone entry point.

Usage:
    pipeline-defense
    pipeline-defense --fullscreen
    pipeline-defense --width 1280 --height 720 --seed 42
    pipeline-defense --tuning hard.yaml --no-audio
"""

import argparse
import sys
from typing import List, Optional

import pygame

from pipeline_defense import config
from pipeline_defense.events import EventDispatcher
from pipeline_defense.games.game_mode import PipelineDefenseMode
from pipeline_defense.games.game_state import GameState
from pipeline_defense.games.input.input_manager import InputManager
from pipeline_defense.games.input.sources.keyboard_mouse import KeyboardMouseInputSource
from pipeline_defense.logging import close_all_sinks, create_sink_for_module, get_logger, register_sink
from pipeline_defense.tuning import load_tuning

log = get_logger('main')


def build_parser() -> argparse.ArgumentParser:
    """Argument parser: display options plus the game's own ARGUMENTS."""
    parser = argparse.ArgumentParser(description=PipelineDefenseMode.DESCRIPTION)
    parser.add_argument('--width', type=int, default=config.SCREEN_WIDTH, help='Screen width')
    parser.add_argument('--height', type=int, default=config.SCREEN_HEIGHT, help='Screen height')
    parser.add_argument('--fullscreen', action='store_true', help='Run fullscreen')

    for arg in PipelineDefenseMode.get_arguments():
        kwargs = {k: v for k, v in arg.items() if k != 'name'}
        parser.add_argument(arg['name'], **kwargs)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run Pipeline Defense."""
    args = build_parser().parse_args(argv)

    tuning_path = args.tuning or config.TUNING_FILE or None
    try:
        tuning = load_tuning(tuning_path)
    except (FileNotFoundError, ValueError) as e:
        log.error("Could not load tuning: %s", e)
        return 1

    seed = args.seed if args.seed is not None else config.RANDOM_SEED

    pygame.init()

    if args.fullscreen:
        screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        width, height = screen.get_size()
    else:
        width, height = args.width, args.height
        screen = pygame.display.set_mode((width, height))

    pygame.display.set_caption(PipelineDefenseMode.NAME)

    register_sink('events', create_sink_for_module('events'))

    input_manager = InputManager(KeyboardMouseInputSource())
    game = PipelineDefenseMode(
        width=width,
        height=height,
        tuning=tuning,
        seed=seed,
        audio_enabled=config.AUDIO_ENABLED and not args.no_audio,
        dispatcher=EventDispatcher(),
    )

    print("=" * 50)
    print("PIPELINE DEFENSE")
    print("=" * 50)
    print("\nProtect the pipeline from water and rust!")
    print("\nControls:")
    print("  - Left/Right or A/D (or the mouse) to move")
    print("  - Z, SPACE or click to zap")
    print("  - P to pause")
    print("  - R to restart")
    print("  - ESC to quit")
    print("=" * 50)

    clock = pygame.time.Clock()
    reported_game_over = False

    try:
        while not input_manager.quit_requested:
            dt = clock.tick(config.FPS) / 1000.0

            input_manager.update(dt)
            game.handle_input(input_manager.get_events())
            game.update(dt)

            game.render(screen)
            pygame.display.flip()

            if game.state == GameState.GAME_OVER and not reported_game_over:
                print(f"\nGAME OVER! Score: {game.get_score()}  Level: {game.session.level}")
                reported_game_over = True
            elif game.state != GameState.GAME_OVER:
                reported_game_over = False
    finally:
        close_all_sinks()
        pygame.quit()

    return 0


if __name__ == "__main__":
    sys.exit(main())
