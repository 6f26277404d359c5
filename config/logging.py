"""
Process-wide logging setup.

Every entry point (producer, worker, API) calls configure_logging() once
at startup; modules just do `logger = logging.getLogger(__name__)`.
"""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    # httpx logs every request at INFO, which drowns out the job lines
    logging.getLogger("httpx").setLevel(logging.WARNING)
