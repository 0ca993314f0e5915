"""Helpers for setting up the logging output of pysci2 applications."""

import logging

import colorlog

DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR
FATAL = logging.FATAL
CRITICAL = logging.CRITICAL

_fmt = "%(log_color)s%(asctime)s %(name)s [%(levelname)s] %(message)s"
_datefmt = "%H:%M:%S"


def setup(level: int = logging.INFO, logger: logging.Logger = None) -> None:
    """Attach a colored stream handler to `logger` and set its level.

    If `logger` is None, sets up only the ``pysci2`` logger. Calling this
    again on the same logger only changes its level.

    Examples
    --------
    >>> from pysci2 import logging
    >>> logging.setup(level=logging.DEBUG)
    """
    if logger is None:
        logger = colorlog.getLogger("pysci2")

    logger.setLevel(level)

    if any(getattr(h, "_pysci2", False) for h in logger.handlers):
        return

    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(_fmt, datefmt=_datefmt))
    handler._pysci2 = True
    logger.addHandler(handler)
