"""A pallet that logs a greeting when called."""

from __future__ import annotations

import logging

from .runtime import Origin, Pallet, ensure_signed

logger = logging.getLogger(__name__)


class HelloSubstrate(Pallet):
    """Greets whoever calls it."""

    def say_hello(self, origin: Origin) -> None:
        """Log a greeting; the caller must be a signed account."""
        caller = ensure_signed(origin)
        logger.info("Hello World")
        logger.info("Request sent by: %r", caller)