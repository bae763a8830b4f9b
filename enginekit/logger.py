"""Debug message output."""

from __future__ import annotations

import logging

_logger = logging.getLogger(__name__)


def log(message: str) -> None:
    """Emit a debug message verbatim."""
    _logger.debug(message)