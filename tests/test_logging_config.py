"""Tests for logging setup."""

import logging

from ootpstats.logging_config import get_logger, setup_logging


def test_get_logger_namespaced():
    assert get_logger('cli').name == 'ootpstats.cli'
    assert get_logger('ootpstats.store').name == 'ootpstats.store'
    assert get_logger().name == 'ootpstats'


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv('OOTP_LOG_LEVEL', 'debug')
    logger = setup_logging()
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_unknown_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv('OOTP_LOG_LEVEL', 'chatty')
    assert setup_logging().level == logging.INFO


def test_log_file_written(tmp_path):
    logger = setup_logging(log_dir=tmp_path / 'logs', level=logging.INFO, log_to_file=True, log_to_console=False)
    logger.info('hello')
    for handler in logger.handlers:
        handler.flush()

    files = list((tmp_path / 'logs').glob('ootpstats_*.log'))
    assert len(files) == 1
    assert 'hello' in files[0].read_text()
    setup_logging(log_to_console=False)
