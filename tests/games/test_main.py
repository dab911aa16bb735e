"""Tests for the standalone entry point."""

from unittest.mock import MagicMock, PropertyMock, patch

from pipeline_defense.games import main as main_module


class TestArgumentParser:
    """CLI arguments."""

    def test_defaults(self):
        args = main_module.build_parser().parse_args([])
        assert args.seed is None
        assert args.tuning is None
        assert args.no_audio is False
        assert args.fullscreen is False

    def test_game_arguments(self):
        args = main_module.build_parser().parse_args(
            ['--seed', '3', '--no-audio', '--width', '1024', '--height', '768'])
        assert args.seed == 3
        assert args.no_audio is True
        assert (args.width, args.height) == (1024, 768)


class TestMain:
    """main() wiring."""

    def test_missing_tuning_file_exits_nonzero(self, tmp_path):
        assert main_module.main(['--tuning', str(tmp_path / 'missing.yaml')]) == 1

    def test_runs_until_quit(self, pygame_init):
        manager = MagicMock()
        type(manager).quit_requested = PropertyMock(side_effect=[False, False, True])
        manager.get_events.return_value = []

        with patch.object(main_module, 'InputManager', return_value=manager):
            assert main_module.main(['--no-audio', '--seed', '1']) == 0

        assert manager.update.call_count == 2
