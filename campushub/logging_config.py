import logging
import sys

from campushub.config import settings


def setup_logging(level: str = None):
    """Configure application logging"""

    logger = logging.getLogger()
    logger.setLevel(level or settings.LOG_LEVEL)

    # Remove existing handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    )
    logger.addHandler(console_handler)

    # Silence noisy libraries
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy').setLevel(logging.WARNING)
    logging.getLogger('databases').setLevel(logging.WARNING)
    logging.getLogger('apscheduler').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)


def store_trace_logger() -> logging.Logger:
    """Logger handed to the document store and registration service for call tracing"""
    trace_logger = logging.getLogger("campushub.trace")
    trace_logger.setLevel(logging.INFO if settings.API_LOGGING else logging.WARNING)
    return trace_logger
