import sys
import logging
from pathlib import Path

logger = logging.getLogger("wikiclient")

_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

_console_handler = None


def config_console_logger(level=None, stream=None):
    """
    Attach a console handler to the ``wikiclient`` logger, replacing the one
    installed by a previous call.
    """
    global _console_handler
    level = level or logging.INFO

    if _console_handler is not None:
        logger.removeHandler(_console_handler)

    # Console (stdout) handler
    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    console_handler.setLevel(level)
    logger.addHandler(console_handler)
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)
    _console_handler = console_handler
    return console_handler


def config_file_logger(log_dir_path, level=logging.INFO):
    """
    Attach file handlers writing every record to ``app.log`` and only
    ERROR/CRITICAL records to ``errors.log`` inside ``log_dir_path``.
    """
    log_dir = Path(log_dir_path)
    log_dir.mkdir(parents=True, exist_ok=True)

    # Handler for all logs
    all_handler = logging.FileHandler(log_dir / "app.log", encoding="utf-8")
    all_handler.setLevel(level)
    all_handler.setFormatter(logging.Formatter(_FORMAT))

    # Handler for only ERROR and CRITICAL
    error_handler = logging.FileHandler(log_dir / "errors.log", encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(_FORMAT))

    logger.addHandler(all_handler)
    logger.addHandler(error_handler)
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)
    return all_handler, error_handler
