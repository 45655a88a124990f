import logging
from logging.handlers import RotatingFileHandler
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3

# Sentry is a process-wide singleton
_sentry_initialized = False


def init_sentry(
    dsn: str,
    environment: str = "development",
    traces_sample_rate: float = 1.0,
) -> bool:
    """
    Initialize the Sentry SDK once for the whole process.

    Nothing happens when no DSN is configured or when Sentry has already been
    initialized, so calling this from module import time is safe.

    Args:
        dsn (str): Sentry DSN. An empty string disables Sentry.
        environment (str): Environment name reported to Sentry.
        traces_sample_rate (float): Performance tracing sample rate (0.0 to 1.0).

    Returns:
        bool: True if Sentry was initialized by this call, False otherwise.
    """
    global _sentry_initialized

    if _sentry_initialized or not dsn:
        return False

    try:
        import sentry_sdk
        from sentry_sdk.integrations.asyncio import AsyncioIntegration
        from sentry_sdk.integrations.logging import LoggingIntegration
    except ImportError:
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        traces_sample_rate=traces_sample_rate,
        integrations=[
            # INFO and above become breadcrumbs, ERROR and above become events
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
            AsyncioIntegration(),
        ],
    )
    _sentry_initialized = True
    return True


def setup_logger(
    name: str,
    log_file: str,
    level: int = logging.INFO,
    sentry_tag: Optional[str] = None,
) -> logging.Logger:
    """
    Create (or fetch) a named logger writing to a rotating file and the console.

    Each component of the application gets its own logger and log file so that
    authentication, database and email problems can be read in isolation. When
    Sentry is active, ``sentry_tag`` is attached as the ``component`` tag.

    Calling this twice with the same name returns the same logger without
    attaching duplicate handlers.

    Args:
        name (str): Logger name, e.g. ``"auth_logger"``.
        log_file (str): Path of the rotating log file, e.g. ``"logs/auth.log"``.
        level (int, optional): Logging level. Defaults to logging.INFO.
        sentry_tag (str, optional): Component tag used to filter events in Sentry.

    Returns:
        logging.Logger: The configured logger.
    """
    if sentry_tag and _sentry_initialized:
        try:
            import sentry_sdk

            sentry_sdk.set_tag("component", sentry_tag)
        except ImportError:
            pass

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
