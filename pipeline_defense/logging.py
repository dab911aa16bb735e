"""
Pipeline Defense logging.

Two channels:

    Console  get_logger(module) returns a GameLogger that prints
             "[module] LEVEL: message" lines, filtered per module.
    Records  emit_record(module, dict) hands a JSON-ready dict to the sink
             registered for that module. The game streams every GameEvent
             through the 'events' module so a session can be replayed or
             analysed offline.

Environment:
    PD_LOG_LEVEL=DEBUG                 default console level
    PD_LOG_SPAWNER=TRACE               per-module console level
    PD_LOG_DIR=~/pd-logs               where record files go
    PD_LOGGING_EVENTS_ENABLED=true     write the 'events' records to disk

Example:
    >>> log = get_logger('doctest')
    >>> log.is_enabled_for(LogLevel.OFF)
    True
"""

import json
import os
import time
import traceback
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import IO, Any, Dict, Optional, Set

from pipeline_defense import __version__


class LogLevel(IntEnum):
    """Console levels; values line up with the stdlib logging module."""
    TRACE = 5      # Per-tick detail (spawns, zaps)
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    OFF = 100


_LEVEL_NAMES = {
    'TRACE': LogLevel.TRACE,
    'DEBUG': LogLevel.DEBUG,
    'INFO': LogLevel.INFO,
    'WARNING': LogLevel.WARNING,
    'WARN': LogLevel.WARNING,
    'ERROR': LogLevel.ERROR,
    'OFF': LogLevel.OFF,
}


def _level_from_string(name: str) -> LogLevel:
    return _LEVEL_NAMES.get(name.strip().upper(), LogLevel.INFO)


# =============================================================================
# Settings
# =============================================================================

_settings: Dict[str, Any] = {
    'level': LogLevel.INFO,
    'module_levels': {},     # module -> LogLevel
    'log_dir': None,         # None = PD_LOG_DIR or the XDG data dir
    'record_modules': set(), # modules whose records go to a FileSink
}


def _load_env() -> None:
    """Read PD_LOG_* and PD_LOGGING_*_ENABLED variables."""
    for key, value in os.environ.items():
        if key == 'PD_LOG_LEVEL':
            _settings['level'] = _level_from_string(value)
        elif key == 'PD_LOG_DIR':
            _settings['log_dir'] = value
        elif key.startswith('PD_LOG_'):
            _settings['module_levels'][key[len('PD_LOG_'):].lower()] = _level_from_string(value)
        elif key.startswith('PD_LOGGING_') and key.endswith('_ENABLED'):
            module = key[len('PD_LOGGING_'):-len('_ENABLED')].lower()
            if value.strip().lower() in ('true', '1', 'yes', 'on'):
                _settings['record_modules'].add(module)


_load_env()


def configure_logging(
    level: Optional[str] = None,
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
    records: Optional[Set[str]] = None,
) -> None:
    """
    Override the environment settings.

    Args:
        level: Default console level ('TRACE' ... 'OFF')
        modules: module -> level overrides
        log_dir: Directory for record files
        records: Modules whose records should be written to disk
    """
    if level is not None:
        _settings['level'] = _level_from_string(level)
    for module, module_level in (modules or {}).items():
        _settings['module_levels'][module.lower()] = _level_from_string(module_level)
    if log_dir is not None:
        _settings['log_dir'] = log_dir
    if records is not None:
        _settings['record_modules'] = {m.lower() for m in records}


def get_log_dir() -> Path:
    """Record directory: configured, PD_LOG_DIR, else $XDG_DATA_HOME/pipeline-defense/logs."""
    if _settings['log_dir']:
        return Path(_settings['log_dir']).expanduser()
    data_home = os.environ.get('XDG_DATA_HOME') or str(Path.home() / '.local' / 'share')
    return Path(data_home) / 'pipeline-defense' / 'logs'


# =============================================================================
# Console
# =============================================================================

class GameLogger:
    """Console logger for one module, with %-style arguments."""

    def __init__(self, module: str):
        self.module = module

    @property
    def level(self) -> LogLevel:
        return _settings['module_levels'].get(self.module.lower(), _settings['level'])

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(self, level: LogLevel, label: str, msg: str, args: tuple) -> None:
        if not self.is_enabled_for(level):
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label}: {msg}")

    def trace(self, msg: str, *args) -> None:
        self._log(LogLevel.TRACE, 'TRACE', msg, args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, 'ERROR', msg, args)

    def exception(self, msg: str, *args) -> None:
        """ERROR line followed by the active traceback."""
        self._log(LogLevel.ERROR, 'ERROR', msg, args)
        tb = traceback.format_exc()
        if tb.strip() != 'NoneType: None':
            for line in tb.rstrip().splitlines():
                self._log(LogLevel.ERROR, 'ERROR', line, ())


@lru_cache(maxsize=64)
def get_logger(module: str) -> GameLogger:
    """Cached logger for a module name such as 'session' or 'spawner'."""
    return GameLogger(module)


# =============================================================================
# Structured records
# =============================================================================

class LogSink(ABC):
    """Destination for structured records."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write one JSON-serializable record."""

    @abstractmethod
    def close(self) -> None:
        """Release the destination."""


class FileSink(LogSink):
    """
    JSON Lines file per module: <log_dir>/<session_name>_<module>.jsonl.

    The first line of each file is a header naming the game version and
    session; every record after it is stamped with wall-clock time.
    """

    def __init__(self, log_dir: Optional[str] = None, session_name: Optional[str] = None):
        self.log_dir = Path(log_dir) if log_dir else get_log_dir()
        self.session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, IO[str]] = {}

    def path_for(self, module: str) -> Path:
        return self.log_dir / f"{self.session_name}_{module}.jsonl"

    def _open(self, module: str) -> IO[str]:
        if module not in self._files:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            f = open(self.path_for(module), 'a')
            f.write(json.dumps({
                'type': 'header',
                'game': 'pipeline-defense',
                'version': __version__,
                'session_name': self.session_name,
                'module': module,
            }) + "\n")
            self._files[module] = f
        return self._files[module]

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        f = self._open(module)
        f.write(json.dumps({'wall_time': time.time(), **record}) + "\n")
        f.flush()

    def close(self) -> None:
        for f in self._files.values():
            f.close()
        self._files.clear()


class NullSink(LogSink):
    """Discards records (module not enabled)."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def close(self) -> None:
        pass


_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    """Route a module's records to a sink, replacing any previous one."""
    _sinks[module] = sink


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Send a record to the module's sink.

    Returns:
        False if no sink is registered for the module

    Raises:
        Whatever the sink raises (e.g. OSError on a full disk)
    """
    sink = _sinks.get(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    """Close and unregister every sink (end of session)."""
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()


def create_sink_for_module(module: str, session_name: Optional[str] = None) -> LogSink:
    """FileSink if PD_LOGGING_<MODULE>_ENABLED is set (or configured), else NullSink."""
    if module.lower() in _settings['record_modules']:
        return FileSink(session_name=session_name)
    return NullSink()
