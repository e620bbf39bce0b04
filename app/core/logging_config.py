from __future__ import annotations

import logging


def configure_logging(level: str = "INFO") -> None:
    """Set the level of the ``app`` logger tree.

    Uvicorn installs its own handlers; when run without it (scripts, tests)
    a basic stderr handler is added so records are not lost.
    """

    normalized = level.upper()
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    app_logger = logging.getLogger("app")
    app_logger.setLevel(normalized)
    app_logger.propagate = True
