import os
import sys

from loguru import logger

from utils.constants import LOG_FILE

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(data_folder: str | None = None) -> None:
    """Replace loguru's default sink with stderr + a rotating file next to the DB."""
    level = os.getenv("MONIVERA_LOG_LEVEL", "INFO")
    log_path = os.path.join(data_folder, LOG_FILE) if data_folder else LOG_FILE

    logger.remove()
    logger.add(sys.stderr, format=_FORMAT, level=level)
    logger.add(log_path, rotation="1 MB", retention=5, level=level)
