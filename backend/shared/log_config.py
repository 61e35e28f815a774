"""
Logging setup.

Modules log through ``logging.getLogger(__name__)``; this configures the
root handler once at application startup.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging for the API process.

    Safe to call more than once; the last call wins.

    Args:
        level: Log level name (e.g., "DEBUG", "INFO")
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        force=True,
    )
    # httpx logs every request at INFO, which drowns out our own messages
    logging.getLogger("httpx").setLevel(logging.WARNING)
