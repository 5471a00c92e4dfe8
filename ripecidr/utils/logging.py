# ripecidr/utils/logging.py

from __future__ import annotations

import logging
import sys

_ROOT_NAME = "ripecidr"
_FORMAT = "%(message)s"
_VERBOSE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger under the ``ripecidr`` hierarchy.

    Modules call this once at import time (``log = get_logger(__name__)``);
    handlers are attached by configure_logging() on the package root logger.
    """
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + "."):
        name = f"{_ROOT_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Attach a single stderr handler to the package root logger.

    quiet wins over verbose. Calling this again replaces the previous handler,
    so repeated CLI invocations in one process (tests) do not stack output.
    """
    if quiet:
        level, fmt = logging.ERROR, _FORMAT
    elif verbose:
        level, fmt = logging.DEBUG, _VERBOSE_FORMAT
    else:
        level, fmt = logging.INFO, _FORMAT

    root = logging.getLogger(_ROOT_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)
    root.setLevel(level)
    return root
