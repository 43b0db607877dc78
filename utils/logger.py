"""
Logging configuration for Map Studio Ingest.

All ingest modules log under the ``mapstudio`` logger. Console output carries
user-facing progress; the log file carries inference decisions, skipped rows
and degraded markup handling. Both levels come from the ``settings`` section of
ingest_config.json (``console_log_level`` / ``file_log_level``).

Constants:
    ROOT_LOGGER_NAME: Parent logger of every ingest module
    LOG_FILE_PREFIX: File name prefix of per-run log files

Functions:
    resolve_level: Turn a configured level name into a logging level
    setup_logging: Attach console and per-run file handlers
    get_logger: Get a logger instance for a specific module

Example:
    >>> from utils.logger import setup_logging, get_logger
    >>> log_file = setup_logging(Path('logs'), file_level='info')
    >>> logger = get_logger(__name__)
    >>> logger.info("Ingest started")
"""

import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional, Union

ROOT_LOGGER_NAME = 'mapstudio'
LOG_FILE_PREFIX = 'mapstudio'

CONSOLE_FORMAT = '%(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def resolve_level(level: Union[int, str, None], default: int = logging.INFO) -> int:
    """
    Numeric logging level for a configured value.

    Accepts ints and case-insensitive names (``"debug"``, ``"WARNING"``);
    blank or unknown names give ``default``.
    """
    if isinstance(level, int):
        return level
    if not level:
        return default
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else default


def setup_logging(
    log_dir: Optional[Path] = None,
    console_level: Union[int, str] = logging.INFO,
    file_level: Union[int, str] = logging.DEBUG
) -> Path:
    """
    Attach a console handler and a timestamped file handler to ``mapstudio``.

    Handlers from an earlier call are closed first, so repeated runs in one
    process write to their own log file only.

    Parameters:
    -----------
    log_dir : Optional[Path]
        Directory for log files. Defaults to PROJECT_ROOT/logs
    console_level : Union[int, str]
        Console threshold, e.g. 'info'
    file_level : Union[int, str]
        Log file threshold, e.g. 'debug'

    Returns:
    --------
    Path
        Path to the created log file
    """
    if log_dir is None:
        log_dir = Path(__file__).parent.parent / 'logs'
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f'{LOG_FILE_PREFIX}_{timestamp}.log'

    console_threshold = resolve_level(console_level, logging.INFO)
    file_threshold = resolve_level(file_level, logging.DEBUG)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(min(console_threshold, file_threshold))

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(console_threshold)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(file_threshold)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))

    logger.addHandler(console)
    logger.addHandler(file_handler)

    logger.debug(f"Logging initialized: {log_file}")

    return log_file


def get_logger(name: str) -> logging.Logger:
    """
    Logger for one module, a child of ``mapstudio``.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("Column types inferred")
    """
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
