# shaderkit/log.py
from __future__ import annotations

import logging
import os

logger = logging.getLogger("shaderkit")


def _set_log_level() -> None:
    logger.setLevel(logging.WARN)
    level = os.getenv("SHADERKIT_LOG_LEVEL", "")
    if level:
        try:
            if level.isnumeric():
                logger.setLevel(int(level))
            else:
                logger.setLevel(level.upper())
        except ValueError:
            logger.warning(f"Invalid shaderkit log level: {level}")


_set_log_level()
