"""Pool configuration management."""

import os
from functools import lru_cache
from pathlib import Path

from .constants import CONFIG_FILE
from .schemas import PoolConfig
from .utils import load_json

DEFAULT_DATA_DIR = 'data'


def get_data_dir() -> Path:
    """Data directory from $PICKEM_DATA_DIR, falling back to ./data."""
    return Path(os.environ.get('PICKEM_DATA_DIR', DEFAULT_DATA_DIR))


@lru_cache(maxsize=4)
def get_config(data_dir: str | Path | None = None) -> PoolConfig:
    """
    Load pool configuration from <data_dir>/pool_config.json.

    A missing file yields the defaults. $PICKEM_VENDOR_API_KEY overrides
    the vendor API key. Configuration is cached per data directory.

    Returns:
        PoolConfig object with validated settings

    Raises:
        ValueError: If the config file has an invalid structure

    Example:
        from pickem.config import get_config
        config = get_config('data')
        print(f"Season: {config.season}")
    """
    data_dir = Path(data_dir) if data_dir is not None else get_data_dir()
    config_path = data_dir / CONFIG_FILE

    if config_path.exists():
        config = load_json(config_path, schema=PoolConfig)
    else:
        config = PoolConfig()

    api_key = os.environ.get('PICKEM_VENDOR_API_KEY')
    if api_key:
        config = config.model_copy(update={'vendor_api_key': api_key})
    return config


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
