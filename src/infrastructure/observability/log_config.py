"""
Process-wide logging setup, called once by the composition root.
Application and domain modules only ever call ``logging.getLogger(__name__)``.
"""

import logging
import sys

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)
    # yfinance logs unknown symbols at ERROR; an empty series is not an error here
    logging.getLogger("yfinance").setLevel(logging.CRITICAL)
