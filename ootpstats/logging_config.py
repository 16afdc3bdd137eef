"""Logging setup shared by the serverless handlers and the CLIs."""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = 'ootpstats'
LEVEL_ENV_VAR = 'OOTP_LOG_LEVEL'

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
CONSOLE_FORMAT = '%(levelname)s: %(message)s'

# Chatty libraries kept at WARNING unless we are debugging
NOISY_LOGGERS = ('urllib3', 'requests')


def _resolve_level(level: Optional[int]) -> int:
    if level is not None:
        return level
    name = os.environ.get(LEVEL_ENV_VAR, '').upper()
    resolved = logging.getLevelName(name) if name else logging.INFO
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    log_dir: Optional[Path] = None,
    level: Optional[int] = None,
    log_to_file: bool = False,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure the 'ootpstats' logger, replacing any handlers it already has.

    Serverless handlers log to stdout only, where the platform collects it.
    The CLIs can also keep a timestamped file per run.

    Args:
        log_dir: Directory for log files (default: ./logs)
        level: Logging level (default: $OOTP_LOG_LEVEL, else INFO)
        log_to_file: Whether to write a log file (default: False)
        log_to_console: Whether to log to stdout (default: True)

    Returns:
        Configured logger instance

    Example:
        from ootpstats.logging_config import setup_logging
        logger = setup_logging(log_to_file=True)
        logger.info('Starting leaderboard update')
    """
    level = _resolve_level(level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers = []

    if log_to_file:
        log_dir = Path(log_dir or 'logs')
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f'{LOGGER_NAME}_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    third_party_level = level if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Logger under the ootpstats namespace ('cli' -> 'ootpstats.cli')."""
    if name != LOGGER_NAME and not name.startswith(f'{LOGGER_NAME}.'):
        name = f'{LOGGER_NAME}.{name}'
    return logging.getLogger(name)
