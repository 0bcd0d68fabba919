# storebuilder/core/logging.py
import logging

from .settings import settings

ISO_FMT = "%Y-%m-%dT%H:%M:%S%z"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"

# SQL echo stays off unless the app itself runs at DEBUG
_NOISY = ("sqlalchemy.engine", "alembic.runtime.migration")


def configure_logging(level: int | str | None = None) -> None:
    if level is None:
        level = settings.LOG_LEVEL.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=ISO_FMT)

    if logging.getLogger().getEffectiveLevel() > logging.DEBUG:
        for name in _NOISY:
            logging.getLogger(name).setLevel(logging.WARNING)
