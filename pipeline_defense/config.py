"""
Pipeline Defense - Runtime configuration.

Loads display and runtime settings from a .env file in the package
directory, with sensible defaults. Create a .env.local file to override
settings without modifying .env. Real environment variables always win.

Gameplay constants live in tuning.py; this module only covers the host.
"""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PACKAGE_DIR = Path(__file__).parent

# .env.local first so its values are set before the shared defaults
load_dotenv(PACKAGE_DIR / '.env.local')
load_dotenv(PACKAGE_DIR / '.env')


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes', 'on')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


def _get_str(key: str, default: str = '') -> str:
    """Get string from environment."""
    return os.getenv(key, default)


def _get_optional_int(key: str) -> Optional[int]:
    """Get an integer that may be left unset."""
    val = os.getenv(key, '').strip()
    return int(val) if val else None


# Display
SCREEN_WIDTH: int = _get_int('SCREEN_WIDTH', 800)
SCREEN_HEIGHT: int = _get_int('SCREEN_HEIGHT', 600)
FPS: int = _get_int('FPS', 60)

# Audio
AUDIO_ENABLED: bool = _get_bool('AUDIO_ENABLED', True)
SFX_VOLUME: float = _get_float('SFX_VOLUME', 0.6)

# Simulation
TUNING_FILE: str = _get_str('TUNING_FILE')  # empty = built-in defaults
RANDOM_SEED: Optional[int] = _get_optional_int('RANDOM_SEED')

# Colors (not configurable via .env)
SKY_COLOR = (135, 206, 235)
GROUND_COLOR = (110, 90, 60)
PIPELINE_COLOR = (120, 120, 130)
PIPELINE_RUST_COLOR = (139, 69, 19)
WATER_COLOR = (30, 144, 255)
RUST_COLOR = (139, 69, 19)
TECHNICIAN_COLOR = (65, 105, 225)
HEAD_COLOR = (253, 188, 180)
CANE_COLOR = (139, 69, 19)
ZAP_COLOR = (0, 255, 255)
HUD_TEXT_COLOR = (255, 255, 255)
HEALTH_GOOD_COLOR = (60, 200, 80)
HEALTH_LOW_COLOR = (220, 50, 50)
POWER_UP_COLORS = {
    'range_boost': (255, 215, 0),
    'area_clear': (255, 140, 0),
    'avatar_duplicate': (147, 112, 219),
    'heal': (46, 139, 87),
    'wave_clear': (220, 20, 60),
}
