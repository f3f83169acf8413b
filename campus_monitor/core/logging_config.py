import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from campus_monitor.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

# Сторонние логгеры, которым хватает предупреждений
_QUIET_LOGGERS = ("sqlalchemy.engine", "apscheduler.executors.default")


def setup_logging() -> str:
    """
    Логи приложения: файл с ротацией (10 МБ × 5) в LOG_DIR и stdout.
    Возвращает путь к файлу лога.
    """
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    log_path = os.path.join(settings.LOG_DIR, settings.LOG_FILENAME)

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [
        RotatingFileHandler(log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"),
        logging.StreamHandler(sys.stdout),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        handlers=handlers,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging to %s (env=%s)", log_path, settings.ENV)
    return log_path
