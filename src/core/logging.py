import sys
from loguru import logger
from .config import settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level> | {extra}"
)


def setup_logging():
    """
    Configure the loguru sink for the dashboard service.

    LOG_LEVEL controls verbosity; LOG_JSON switches to serialized records
    for log shipping. Returns the shared loguru logger.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=LOG_FORMAT,
        serialize=settings.log_json,
        backtrace=False,
        diagnose=settings.app_env == "dev",
    )
    return logger
