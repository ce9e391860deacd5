# backend/config/log_setup.py
import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_LOGGING_CONFIGURED = False


def configure_logging(level: str = "INFO") -> None:
    """
    Install one stdout handler on the root logger.

    Safe to call multiple times; later calls only adjust the level.
    """
    global _LOGGING_CONFIGURED
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if _LOGGING_CONFIGURED:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    _LOGGING_CONFIGURED = True
    logging.getLogger(__name__).info("Logging initialized with level %s", level)
