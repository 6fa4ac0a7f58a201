from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)

    # Reduce werkzeug (Flask dev server) request noise - only show warnings and errors
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
