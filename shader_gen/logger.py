import logging
import sys

# Parent of every module logger in the package
LOGGER_NAME = "shader_gen"


def get_logger() -> logging.Logger:
    """Get the package logger."""
    return logging.getLogger(LOGGER_NAME)


def setup_logger(level=logging.INFO):
    """
    Send shader generator logging to stdout.

    Generation failures that are not fatal (a missing optional feature, a
    skipped varying) are reported at DEBUG; pass logging.DEBUG to see why a
    feature dropped out of a generated shader.

    Args:
        level: Logging level (default: INFO)
    """
    logger = get_logger()
    logger.setLevel(level)

    # Replace handlers from an earlier call
    if logger.handlers:
        logger.handlers.clear()

    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level)
    ch.setFormatter(logging.Formatter(f'[{LOGGER_NAME}] [%(levelname)s] %(message)s'))
    logger.addHandler(ch)

    return logger
