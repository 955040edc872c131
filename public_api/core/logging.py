"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)`; this only installs the
root handler once.
"""

from __future__ import annotations

import logging

from . import settings

_configured = False


def configure_logging() -> None:
    global _configured
    if _configured:
        return None

    level = getattr(logging, settings.log_level(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    _configured = True
