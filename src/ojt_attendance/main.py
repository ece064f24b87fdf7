from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv

from config import get_settings_module

from .common.clock import Clock
from .common.logging_setup import setup_logging
from .container import Container, build_container

logger = logging.getLogger(__name__)


def create_container(*, clock: Optional[Clock] = None) -> Container:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    debug = bool(getattr(settings, "DEBUG", False))
    setup_logging("DEBUG" if debug else getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        timezone=getattr(settings, "TIMEZONE"),
        default_schedule=getattr(settings, "DEFAULT_SCHEDULE", None),
        late_grace_ms=int(getattr(settings, "LATE_GRACE_MS", 60_000)),
        clock=clock,
    )
    logger.info("ojt-attendance settings=%s tz=%s", settings_module, container.tz.key)
    return container
