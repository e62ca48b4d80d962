"""Standard library logging setup.

Canopy's own events go through logfire. This module only shapes what
third-party libraries (SQLAlchemy, aiosqlite) print through ``logging``.
"""

import logging
import sys

from canopy.config import Settings

# Root level per environment when debug is off
ENVIRONMENT_LEVELS = {
    "test": logging.WARNING,
    "development": logging.INFO,
    "staging": logging.INFO,
    "production": logging.WARNING,
}

# Chatty at INFO; kept at WARNING unless debugging
NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite")


def resolve_level(settings: Settings) -> int:
    """Pick the root log level for the configured environment."""
    if settings.debug:
        return logging.DEBUG
    return ENVIRONMENT_LEVELS.get(settings.environment, logging.INFO)


def setup_logging(settings: Settings) -> None:
    """Configure stdout logging for the process.

    Args:
        settings: Application settings
    """
    level = resolve_level(settings)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    noisy_level = logging.DEBUG if settings.debug else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    logging.getLogger(__name__).debug(
        "Logging configured: environment=%s level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
