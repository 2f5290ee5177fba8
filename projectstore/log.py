import sys

from loguru import logger

from projectstore.config import settings


def setup_logging(level: str = None) -> None:
    """Replaces loguru's default sink with one honouring LOG_LEVEL."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=(level or settings.LOG_LEVEL).upper(),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
    )
