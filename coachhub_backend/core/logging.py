import sys
from loguru import logger

from coachhub_backend.core.config import LOG_LEVEL, LOG_FILE

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

_configured = False


def configure_logging():
    """Install the stderr sink (and the optional rotating file sink) once per process."""
    global _configured
    if _configured:
        return

    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=LOG_LEVEL)
    if LOG_FILE:
        logger.add(LOG_FILE, rotation="1 day", retention="30 days", level="DEBUG")

    _configured = True
