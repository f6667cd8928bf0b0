"""File logging helper shared by modules using the standard logging API."""

from logging import INFO, Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

from blogapi.configs.settings import settings

_MAX_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 5


def file_logger(logger: Logger) -> Logger:
    """
    Attach a rotating JSON file handler to ``logger`` when file logging is on.

    Calling this twice for the same logger does not add a second handler.

    Args:
        logger: Logger returned by ``logging.getLogger``.

    Returns:
        The same logger, for ``logger = file_logger(getLogger(__name__))``.
    """
    if not settings.LOG_TO_FILE:
        return logger

    if any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        return logger

    log_file = Path(settings.LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(log_file, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT)
    handler.setLevel(INFO)
    handler.setFormatter(JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger
