"""The tagged result of dispatching one descriptor"""
import typing as t

from .errors import OutcomeError
from .http import _SlotsMixin

__all__ = [
    "Outcome",
    "Success",
    "HttpError",
    "TransportError",
    "DecodeError",
    "NoResponse",
]

T = t.TypeVar("T")


class Outcome(_SlotsMixin, t.Generic[T]):
    """Base class of all outcomes.
    Exactly one outcome is produced per dispatched descriptor.
    """

    __slots__ = ()
    __hash__ = None
    ok = False

    def _cause(self):
        return None

    def unwrap(self):
        """Return the success value, or raise for a failed outcome

        Raises
        ------
        ~requestable.errors.OutcomeError
            for any outcome other than :class:`Success`
        """
        raise OutcomeError(self) from self._cause()


class Success(Outcome[T]):
    """The response was 2xx and decoded into ``value``"""

    __slots__ = ("value",)
    ok = True

    def __init__(self, value):
        self._set(value=value)

    def unwrap(self):
        return self.value

    def __repr__(self):
        return "Success({!r})".format(self.value)


class HttpError(Outcome[T]):
    """The server responded with a status outside ``[200, 300)``.
    The content is never decoded.

    Parameters
    ----------
    status_code: int
        The HTTP status code
    content: bytes or None
        The raw response content, for inspection
    """

    __slots__ = "status_code", "content"

    def __init__(self, status_code, content=None):
        self._set(status_code=status_code, content=content)

    def __repr__(self):
        return "HttpError({0.status_code}, {0.content!r})".format(self)


class TransportError(Outcome[T]):
    """The exchange failed: connection error, timeout, or cancellation.

    Parameters
    ----------
    cause: BaseException
        The underlying exception
    """

    __slots__ = ("cause",)

    def __init__(self, cause):
        self._set(cause=cause)

    def _cause(self):
        return self.cause

    def __eq__(self, other):
        # exceptions only compare by identity, compare their kind instead
        if isinstance(other, TransportError):
            return _same_exc(self.cause, other.cause)
        return NotImplemented

    def __ne__(self, other):
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def __repr__(self):
        return "TransportError({!r})".format(self.cause)


class DecodeError(Outcome[T]):
    """The response was 2xx, but its content could not be decoded

    Parameters
    ----------
    cause: Exception
        The exception raised by the decoder
    content: bytes
        The content which failed to decode
    """

    __slots__ = "cause", "content"

    def __init__(self, cause, content=None):
        self._set(cause=cause, content=content)

    def _cause(self):
        return self.cause

    def __eq__(self, other):
        if isinstance(other, DecodeError):
            return (
                _same_exc(self.cause, other.cause)
                and self.content == other.content
            )
        return NotImplemented

    def __ne__(self, other):
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def __repr__(self):
        return "DecodeError({!r})".format(self.cause)


class NoResponse(Outcome[T]):
    """The transport finished, but yielded no usable response"""

    __slots__ = ()

    def __repr__(self):
        return "NoResponse()"


def _same_exc(a, b):
    return type(a) is type(b) and a.args == b.args
