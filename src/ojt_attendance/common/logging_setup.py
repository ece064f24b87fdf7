from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | int = "INFO") -> None:
    """Configure the root logger once for the process.

    Engine anomalies (inverted windows, dropped rows, unparseable times) are
    reported through module loggers; this only decides where they go.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # Avoid duplicated handlers when called again
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
