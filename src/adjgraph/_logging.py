from __future__ import annotations

"""Logger helpers shared by every adjgraph module."""

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .config import LoggingSettings

ROOT_LOGGER = "adjgraph"

_HANDLER_NAME = "adjgraph-console"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def getLogger(name: str) -> logging.Logger:
    """
    Return a logger living under the ``adjgraph`` namespace.

    Module names inside the package already start with ``adjgraph``; any other
    name is nested below it so that :func:`configure_logging` reaches it.
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(settings: Optional[LoggingSettings] = None) -> logging.Logger:
    """
    Apply level and format from settings to the package root logger.

    Installs a single console handler; calling this again only updates the
    level and formatter of that handler.
    """
    if settings is None:
        from .config import get_settings

        settings = get_settings().logging

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(settings.level)

    handler = next((h for h in root.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        root.addHandler(handler)

    handler.setLevel(settings.level)
    handler.setFormatter(logging.Formatter(settings.format))
    return root
