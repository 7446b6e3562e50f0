import logging
import sys

from config.settings import LOG_LEVEL


def get_logger(name: str):
    logger = logging.getLogger(name)

    # Uvicorn installs its own handlers; only attach ours once
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    # Follow uvicorn's level when it is configured, else LOG_LEVEL
    uvicorn_level = logging.getLogger("uvicorn").level
    logger.setLevel(uvicorn_level or logging.getLevelName(LOG_LEVEL.upper()))

    logger.propagate = False

    return logger
