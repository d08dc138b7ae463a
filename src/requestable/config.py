"""Configuration, read from the environment"""
import logging
import os
import typing as t
from dataclasses import dataclass

__all__ = ["Settings", "load_settings"]

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60.0


def _float_env(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("ignoring malformed %s=%r", name, value)
        return default


@dataclass(frozen=True)
class Settings:
    """Caller-side settings.

    Parameters
    ----------
    timeout_seconds: float
        Upper bound on a single exchange, used by
        :class:`~requestable.dispatch.Dispatcher`
    github_token: str or None
        Personal access token for authenticated GitHub calls.
        Never has a built-in default.
    log_level: str
        Level name passed to :func:`~requestable.log.setup_logging`
    """

    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    github_token: t.Optional[str] = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls):
        """Create settings from environment variables

        * ``REQUESTABLE_TIMEOUT``
        * ``GITHUB_TOKEN``
        * ``REQUESTABLE_LOG_LEVEL``
        """
        timeout = _float_env("REQUESTABLE_TIMEOUT", cls.timeout_seconds)
        if timeout <= 0:
            timeout = cls.timeout_seconds
        return cls(
            timeout_seconds=timeout,
            github_token=os.getenv("GITHUB_TOKEN") or None,
            log_level=os.getenv("REQUESTABLE_LOG_LEVEL", cls.log_level),
        )


def load_settings():
    """Load settings from the environment, with defaults"""
    return Settings.from_env()
