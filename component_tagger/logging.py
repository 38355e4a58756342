"""Package logger for the component tagger.

Handlers are left to the host build tool; records propagate to its logging
configuration.
"""

from __future__ import annotations

import logging

_LOGGER_NAME = "component_tagger"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the component_tagger hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


__all__ = ["get_logger"]
