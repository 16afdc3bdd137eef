"""Application settings management."""

import os
from functools import lru_cache
from pathlib import Path

from .schemas import AppSettings
from .utils import load_json

CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'app_config.json'

# env var -> settings field
ENV_OVERRIDES = {
    'OOTP_ENV': 'environment',
    'CRON_SECRET': 'cron_secret',
    'OOTP_DATA_DIR': 'data_dir',
    'OOTP_COMPETITIVE_URL': 'competitive_url',
    'OOTP_MIN_START_TIME': 'min_start_time',
}


def load_settings(config_path: Path | str | None = None, environ: dict | None = None) -> AppSettings:
    """
    Build settings from an optional JSON file plus environment overrides.

    VERCEL_ENV is honoured for the environment name when OOTP_ENV is unset.

    Args:
        config_path: JSON file with AppSettings fields (default: data/app_config.json)
        environ: Environment mapping (default: os.environ)

    Returns:
        Validated AppSettings

    Raises:
        ValueError: If the config file or an override has an invalid value
    """
    environ = os.environ if environ is None else environ
    config_path = Path(config_path) if config_path else CONFIG_PATH

    values = {}
    if config_path.exists():
        values = load_json(config_path, schema=AppSettings).model_dump()

    if environ.get('VERCEL_ENV'):
        values['environment'] = environ['VERCEL_ENV']
    for env_key, field_name in ENV_OVERRIDES.items():
        if environ.get(env_key):
            values[field_name] = environ[env_key]

    return AppSettings(**values)


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """
    Load settings once per process.

    Example:
        from ootpstats.config import get_settings
        settings = get_settings()
        print(settings.competitive_url)
    """
    return load_settings()


def clear_settings_cache() -> None:
    """Forget cached settings so the next get_settings() reloads them."""
    get_settings.cache_clear()
