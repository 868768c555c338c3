import logging
import sys

from storefront.config import settings


def get_logger(name: str) -> logging.Logger:
    """
    Return a named logger writing to stdout with a bracketed prefix,
    e.g. get_logger("gateway") -> "[GATEWAY] message".
    Handlers are attached once, so repeated calls are safe.
    """
    log = logging.getLogger(f"storefront.{name}")
    log.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(f"[{name.upper()}] %(message)s"))
        log.addHandler(h)
        log.propagate = False
    return log
