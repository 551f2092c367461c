# productsvc/utils/logging.py
import logging

from productsvc.utils.settings import LOG_LEVEL

_ROOT = "productsvc"
_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(_ROOT)
    # only once, even if get_logger is called from many modules
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        root.setLevel(LOG_LEVEL)
    return root


def get_logger(name: str) -> logging.Logger:
    _configure_root()
    if not name.startswith(_ROOT):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
