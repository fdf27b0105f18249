# chlorisafe/core/logger.py
import sys

from loguru import logger
from chlorisafe.core.config import settings

LOG_FILE_NAME = "chlorisafe.log"


def setup_logging() -> str:
    """
    Initialise loguru sinks.
    - Console: settings.LOG_LEVEL and above (stderr)
    - File: DEBUG and above, rotated daily (only when settings.LOG_TO_FILE)

    Returns the log file path, or "" when the file sink is disabled.
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    )

    if not settings.LOG_TO_FILE:
        return ""

    log_dir = settings.log_dir_path
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    # rotate at midnight, keep 10 days, zip old files
    logger.add(
        str(log_file),
        rotation="00:00",
        retention="10 days",
        compression="zip",
        level="DEBUG",
        enqueue=True,
        encoding="utf-8",
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} - {message}",
    )

    return str(log_file)
