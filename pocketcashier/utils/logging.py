# pocketcashier/utils/logging.py
import logging
import sys

from pocketcashier.utils.settings import get_settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))

    root = logging.getLogger("pocketcashier")
    root.addHandler(handler)
    root.setLevel(get_settings().log_level.upper())
    _configured = True


def get_logger(name: str) -> logging.Logger:
    _configure_root()
    return logging.getLogger(name)
