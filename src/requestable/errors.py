"""Exceptions raised synchronously, at the call site.

Failures which happen *after* a request is dispatched are never raised:
they are reported as :class:`~requestable.outcome.Outcome` values.
"""

__all__ = [
    "RequestableError",
    "ConstructionError",
    "InvalidURL",
    "SerializationError",
    "OutcomeError",
]


class RequestableError(Exception):
    """Base class for all errors raised by this library"""


class ConstructionError(RequestableError, ValueError):
    """A descriptor could not be built or turned into a request"""


class InvalidURL(ConstructionError):
    """The URL is not a valid absolute http(s) URL

    Parameters
    ----------
    url: str
        The rejected URL
    reason: str
        Why it was rejected
    """

    def __init__(self, url, reason):
        super().__init__("invalid URL {!r}: {}".format(url, reason))
        self.url = url
        self.reason = reason


class SerializationError(ConstructionError):
    """The structured request body could not be serialized"""


class OutcomeError(RequestableError):
    """Raised by :meth:`Outcome.unwrap` for any non-success outcome

    Parameters
    ----------
    outcome: ~requestable.outcome.Outcome
        The failed outcome
    """

    def __init__(self, outcome):
        super().__init__(repr(outcome))
        self.outcome = outcome
