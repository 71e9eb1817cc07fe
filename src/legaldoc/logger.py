import logging

from legaldoc import config

default_level = config.LOGGING_LEVEL

logging.basicConfig(
    level=getattr(logging, default_level, logging.DEBUG),
    format="%(asctime)s [%(levelname)s] [%(name)s.%(funcName)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger("legaldoc")

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Shortcut aliases
debug = logger.debug
info = logger.info
warning = logger.warning
error = logger.error
exception = logger.exception


def get_logger():
    if default_level in VALID_LEVELS:
        logger.setLevel(getattr(logging, default_level))
    return logger


def set_logging_level(level: str):
    normalized_level = level.upper()
    if normalized_level not in VALID_LEVELS:
        logging.getLogger().warning(
            f"Invalid logging level: {level}. Level not changed."
        )
        return
    new_level = getattr(logging, normalized_level)
    logging.getLogger().setLevel(new_level)
    logger.setLevel(new_level)
    logging.getLogger().info(f"Logging level changed to: {normalized_level}")
