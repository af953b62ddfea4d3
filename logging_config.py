# logging_config.py
# Logging setup for the game and its tools.

import logging
import os
import sys

LOG_LEVEL_ENV = "ASCII_CAVERN_LOG_LEVEL"


def configure_logging(level=logging.INFO):
    """
    Installs a single stdout handler on the root logger.

    The ASCII_CAVERN_LOG_LEVEL environment variable, when set, wins over the
    level passed in. Existing handlers are removed so repeated calls do not
    duplicate output.
    """
    level_name = os.getenv(LOG_LEVEL_ENV)
    if level_name:
        level = getattr(logging, level_name.upper(), level)

    handler = logging.StreamHandler(stream=sys.stdout)
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    return level
