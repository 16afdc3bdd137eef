"""Tests for settings loading."""

import json

import pytest

from ootpstats.config import clear_settings_cache, get_settings, load_settings
from ootpstats.constants import COMPETITIVE_URL, MIN_START_TIME


class TestLoadSettings:
    """Tests for config file and environment overrides."""

    def test_defaults(self, tmp_path):
        settings = load_settings(tmp_path / 'missing.json', environ={})
        assert settings.environment == 'development'
        assert settings.competitive_url == COMPETITIVE_URL
        assert settings.min_start_time == MIN_START_TIME
        assert settings.batch_size == 100
        assert not settings.is_production

    def test_config_file(self, tmp_path):
        config_path = tmp_path / 'app_config.json'
        config_path.write_text(json.dumps({'data_dir': '/srv/ootp', 'site_origin': 'https://example.com/'}))

        settings = load_settings(config_path, environ={})
        assert settings.data_dir == '/srv/ootp'
        assert settings.site_origin == 'https://example.com'

    def test_environment_overrides(self, tmp_path):
        settings = load_settings(tmp_path / 'missing.json', environ={
            'VERCEL_ENV': 'production',
            'CRON_SECRET': 's3cret',
            'OOTP_MIN_START_TIME': '100',
        })
        assert settings.is_production
        assert settings.cron_secret == 's3cret'
        assert settings.min_start_time == 100

    def test_ootp_env_beats_vercel_env(self, tmp_path):
        settings = load_settings(tmp_path / 'missing.json', environ={'VERCEL_ENV': 'preview', 'OOTP_ENV': 'production'})
        assert settings.environment == 'production'

    def test_invalid_config(self, tmp_path):
        config_path = tmp_path / 'app_config.json'
        config_path.write_text(json.dumps({'batch_size': 0}))
        with pytest.raises(ValueError):
            load_settings(config_path, environ={})


def test_get_settings_cached():
    clear_settings_cache()
    assert get_settings() is get_settings()
    clear_settings_cache()
