"""Logging setup for command-line use.

Library modules only create loggers; they never configure handlers.
"""
import logging

__all__ = ["setup_logging"]

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(level="WARNING"):
    """Configure the root logger

    Parameters
    ----------
    level: str
        A level name, e.g. ``"DEBUG"``. Unknown names mean ``WARNING``.
    """
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format=LOG_FORMAT,
    )
