"""Basic HTTP abstractions and functionality"""
import enum
from base64 import b64encode
from collections.abc import Mapping
from functools import partial
from itertools import chain
from operator import attrgetter, methodcaller

__all__ = [
    "Method",
    "Request",
    "Response",
    "header_adder",
    "basic_auth",
    "bearer_auth",
]


class Method(str, enum.Enum):
    """The HTTP methods a request may use"""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    def __str__(self):
        return self.value


class _FrozenDict(Mapping):
    __slots__ = "_inner"

    def __init__(self, inner=()):
        self._inner = dict(inner)

    __len__ = property(attrgetter("_inner.__len__"))
    __iter__ = property(attrgetter("_inner.__iter__"))
    __getitem__ = property(attrgetter("_inner.__getitem__"))
    __repr__ = property(attrgetter("_inner.__repr__"))


class _SlotsMixin(object):
    __slots__ = ()

    def _set(self, **kwargs):
        for name, value in kwargs.items():
            object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError(
            "{} objects are immutable".format(type(self).__name__)
        )

    def _asdict(self):
        return {a: getattr(self, a) for a in self.__slots__}

    def __eq__(self, other):
        if isinstance(other, self.__class__):
            return self._asdict() == other._asdict()
        return NotImplemented

    def __ne__(self, other):
        if isinstance(other, self.__class__):
            return self._asdict() != other._asdict()
        return NotImplemented

    def replace(self, **kwargs):
        """Create a copy with replaced fields

        Parameters
        ----------
        **kwargs
            fields and values to replace
        """
        return type(self)(**_merge_maps(self._asdict(), kwargs))


def _merge_maps(m1, m2):
    """merge two Mapping objects, keeping the type of the first mapping"""
    return type(m1)(chain(m1.items(), m2.items()))


class Request(_SlotsMixin):
    """A prepared HTTP request, ready to be handed to a transport.

    Parameters
    ----------
    method: Method or str
        The http method
    url: str
        The requested url
    content: bytes or None
        The request content
    headers: Mapping
        Request headers. These are exactly the headers sent.
    """

    __slots__ = "method", "url", "content", "headers"
    __hash__ = None

    def __init__(self, method, url, content=None, headers=_FrozenDict()):
        self._set(
            method=Method(method),
            url=url,
            content=content,
            headers=_FrozenDict(headers),
        )

    def with_headers(self, headers):
        """Create a new request with added headers

        Parameters
        ----------
        headers: Mapping
            the headers to add
        """
        return self.replace(headers=_merge_maps(self.headers, headers))

    def __repr__(self):
        return "<Request: {0.method} {0.url}, headers={0.headers!r}>".format(
            self
        )


class Response(_SlotsMixin):
    """A simple HTTP response.

    Parameters
    ----------
    status_code: int
        The HTTP status code
    content: bytes or None
        The response content
    headers: Mapping
        The headers of the response.
    """

    __slots__ = "status_code", "content", "headers"
    __hash__ = None

    def __init__(self, status_code, content=None, headers=_FrozenDict()):
        self._set(status_code=status_code, content=content, headers=headers)

    def __repr__(self):
        return "<Response: {0.status_code}, headers={0.headers!r}>".format(
            self
        )


header_adder = partial(methodcaller, "with_headers")
header_adder.__doc__ = """
Make a callable which adds headers to a descriptor or request

Example
-------

>>> func = requestable.header_adder({'Accept': 'application/json'})
>>> func(requestable.GET('https://test.dev')).headers
{'Accept': 'application/json'}
"""


def basic_auth(credentials):
    """Create an HTTP basic authentication callable

    Parameters
    ----------
    credentials: ~typing.Tuple[str, str]
        The (username, password)-tuple

    Returns
    -------
    ~typing.Callable[[Descriptor], Descriptor]
        A callable which adds basic authentication to a descriptor
        (or a :class:`Request`).
    """
    encoded = b64encode(":".join(credentials).encode("ascii")).decode()
    return header_adder({"Authorization": "Basic " + encoded})


def bearer_auth(token):
    """Create a bearer token authentication callable

    Parameters
    ----------
    token: str
        The access token. Supplied by the caller, e.g. from
        :class:`~requestable.config.Settings`.

    Returns
    -------
    ~typing.Callable[[Descriptor], Descriptor]
        A callable which adds the ``Authorization`` header
    """
    return header_adder({"Authorization": "Bearer " + token})
