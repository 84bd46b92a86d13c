"""Engine configuration management."""

import logging
from functools import lru_cache
from pathlib import Path

from .constants import DEFAULT_JUNK_VALUES
from .schemas import EngineConfig
from .utils import load_json

logger = logging.getLogger('golftrip.config')

CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'engine_config.json'


@lru_cache(maxsize=1)
def get_config() -> EngineConfig:
    """
    Load engine configuration from data/engine_config.json.

    Configuration is cached after first load. A missing file falls back to
    the defaults of EngineConfig; an invalid one raises.

    Returns:
        EngineConfig object with validated settings

    Raises:
        ValueError: If config file has invalid structure

    Example:
        from golftrip.config import get_config
        config = get_config()
        print(f"Echo window: {config.echo_window_seconds}s")
    """
    if not CONFIG_PATH.exists():
        logger.debug(f'No config at {CONFIG_PATH}, using defaults')
        return EngineConfig()
    return load_json(CONFIG_PATH, schema=EngineConfig)


def get_max_gross() -> int:
    """Get the highest gross score accepted on a hole."""
    return get_config().max_gross


def get_echo_window_seconds() -> float:
    """Get the self-echo suppression window."""
    return get_config().echo_window_seconds


def get_default_skin_value() -> float:
    return get_config().default_skin_value


def get_auto_press_threshold() -> int:
    """Get the holes-down count that triggers a Nassau auto-press."""
    return get_config().auto_press_threshold


def get_lone_wolf_multiplier() -> float:
    return get_config().lone_wolf_multiplier


def get_stableford_combine() -> str:
    """Get the team Stableford combine mode ('best_ball' or 'aggregate')."""
    return get_config().stableford_combine


def get_junk_values() -> dict[str, float]:
    """Get junk values, config overrides on top of the defaults."""
    return {**DEFAULT_JUNK_VALUES, **get_config().junk_values}


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
