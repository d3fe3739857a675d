# freshmarket/utils/logging.py
import logging
import sys

from freshmarket.utils.settings import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def _configure() -> None:
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))

    root = logging.getLogger("freshmarket")
    root.addHandler(handler)
    root.setLevel(LOG_LEVEL)
    # wlasny handler, bez dublowania przez root logger
    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    _configure()
    return logging.getLogger(name)
