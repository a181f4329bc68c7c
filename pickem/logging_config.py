"""Logging for the pool's upload and scoring runs.

Every module logs through a child of the 'pickem' logger (for example
'pickem.week_scorer' or 'pickem.adapters'), so one call to setup_logging
decides where rejected rows and standings updates end up.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Attach handlers to the 'pickem' logger.

    The console handler prints short 'LEVEL: message' lines to stdout, next
    to the CLI's status output. The file handler writes one
    pickem_<timestamp>.log per run with module and line numbers, which is
    what you want when a week's scores did not match its spreads. pool.py
    only turns the file on when --log-dir is given, and --quiet drops the
    level to WARNING so only rejected rows and spread warnings show.

    Calling it again replaces the earlier handlers.

    Args:
        log_dir: Where run logs go (default: ./logs)
        level: Level for the logger and both handlers
        log_to_file: Write a per-run log file
        log_to_console: Echo to stdout

    Returns:
        The 'pickem' logger
    """
    logger = logging.getLogger('pickem')
    logger.setLevel(level)

    # Replace handlers from an earlier call
    logger.handlers = []

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    simple_formatter = logging.Formatter('%(levelname)s: %(message)s')

    if log_to_file:
        if log_dir is None:
            log_dir = Path('logs')
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / f'pickem_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(simple_formatter)
        logger.addHandler(console_handler)

    return logger
