"""Logging configuration for the Hyperliquid proxy."""
import sys

from loguru import logger

from .config import PROJECT_ROOT, config

LOG_DIR = PROJECT_ROOT / "logs"

# Remove default handler
logger.remove()

# Console handler
logger.add(
    sys.stdout,
    format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    level=config.log_level,
    colorize=True,
)

# Serverless file systems are read-only, so file sinks are opt-in
if config.log_to_file:
    LOG_DIR.mkdir(exist_ok=True)

    logger.add(
        LOG_DIR / "hlproxy_{time:YYYY-MM-DD}.log",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        level="DEBUG",
        rotation="1 day",
        retention="30 days",
        compression="zip",
    )

    # Upstream log - separate file for failed upstream calls
    logger.add(
        LOG_DIR / "upstream_{time:YYYY-MM-DD}.log",
        format="{time:YYYY-MM-DD HH:mm:ss} | {message}",
        level="WARNING",
        filter=lambda record: "upstream" in record["extra"],
        rotation="1 day",
        retention="90 days",
    )


def get_logger(name: str):
    """Get a logger with the specified name."""
    return logger.bind(name=name)


def log_upstream_failure(message: str):
    """Log a failed upstream call to the dedicated upstream log."""
    logger.bind(upstream=True).error(message)
