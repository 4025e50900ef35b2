"""Application bootstrap: settings -> logging -> desk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .core.config import load_settings
from .desk import TradeDesk
from .observability.logger import setup_logging

logger = logging.getLogger(__name__)


def build_desk(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
    *,
    configure_logging: bool = True,
) -> TradeDesk:
    """Load settings and return a ready :class:`TradeDesk`.

    Args:
        config_path: Optional TOML config file.
        overrides: Values applied on top of file and environment.
        configure_logging: Install the structlog handlers.  Front ends that
            own logging themselves pass ``False``.
    """
    settings = load_settings(config_path, overrides)
    if configure_logging:
        setup_logging(
            level=settings.observability.log_level,
            format=settings.observability.log_format,
        )
    logger.info(
        "Trade desk ready (initial_balance=%.2f, storage_key=%s)",
        settings.initial_balance,
        settings.storage_key,
    )
    return TradeDesk(settings)
