"""Declarative descriptions of HTTP calls"""
import json
import re
import typing as t
from functools import partial
from urllib.parse import urlsplit

from .errors import ConstructionError, InvalidURL, SerializationError
from .http import Method, Request, _FrozenDict, _merge_maps, _SlotsMixin

__all__ = [
    "Descriptor",
    "raw",
    "json_decoder",
    "json_serializer",
    "GET",
    "POST",
    "PUT",
    "PATCH",
    "DELETE",
]

T = t.TypeVar("T")

_SCHEMES = frozenset(["http", "https"])
# whitespace, control characters, and characters never allowed
# unescaped in a URL (this also catches unfilled ``{templates}``)
_ILLEGAL_URL_CHARS = re.compile(r'[\x00-\x20\x7f<>"{}|\\^`]')


def raw(content):
    """The default decoder: returns the response content unmodified"""
    return content


def _load_json(loader, content):
    return loader(json.loads(content))


def json_decoder(loader=raw):
    """Create a decoder which parses JSON, then applies ``loader``

    Parameters
    ----------
    loader: ~typing.Callable[[~typing.Any], T]
        Turns the parsed JSON into the model.
        Any exception it raises counts as a decode failure.

    Returns
    -------
    ~typing.Callable[[bytes], T]
        a decoder to use with :class:`Descriptor`
    """
    return partial(_load_json, loader)


def json_serializer(obj):
    """Serialize an object to JSON bytes, deterministically"""
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")


def _check_url(url):
    if not isinstance(url, str):
        raise InvalidURL(url, "expected a string")
    if _ILLEGAL_URL_CHARS.search(url):
        raise InvalidURL(url, "contains illegal characters")
    try:
        parts = urlsplit(url)
        parts.port  # raises on malformed ports
    except ValueError as e:
        raise InvalidURL(url, str(e)) from e
    if parts.scheme.lower() not in _SCHEMES:
        raise InvalidURL(url, "scheme must be http or https")
    if not parts.hostname:
        raise InvalidURL(url, "no host")


class Descriptor(_SlotsMixin, t.Generic[T]):
    """An immutable description of one HTTP call and how to decode
    its successful response. Creating one performs no I/O.

    Note
    ----
    Descriptor is a :class:`~typing.Generic`.
    This means you may write ``Descriptor[<modeltype>]``
    as a descriptive type annotation.

    Parameters
    ----------
    method: Method or str
        The http method
    url: str
        An absolute ``http`` or ``https`` URL.
        Invalid URLs raise :class:`~requestable.errors.InvalidURL` here,
        before anything is sent.
    headers: Mapping
        Exactly the headers to send
    content: bytes or None
        A raw request payload
    body: ~typing.Any
        A structured request payload, serialized by ``serialize``
        only when the request is :meth:`prepare`-d.
        Mutually exclusive with ``content``.
    decode: ~typing.Callable[[bytes], T]
        Pure function turning the content of a successful response
        into the model. Any exception it raises is a decode failure.
    serialize: ~typing.Callable[[~typing.Any], bytes]
        Turns ``body`` into bytes. Deterministic JSON by default.

    Example
    -------

    >>> account = requestable.GET(
    ...     'https://api.github.com/users/octocat',
    ...     headers={'Accept': 'application/json'},
    ...     decode=requestable.json_decoder(Account.from_json))
    """

    __slots__ = (
        "method",
        "url",
        "headers",
        "content",
        "body",
        "decode",
        "serialize",
    )
    __hash__ = None

    def __init__(
        self,
        method,
        url,
        headers=_FrozenDict(),
        content=None,
        body=None,
        decode=raw,
        serialize=json_serializer,
    ):
        try:
            method = Method(method)
        except ValueError:
            raise ConstructionError(
                "unsupported method {!r}".format(method)
            ) from None
        _check_url(url)
        if content is not None and body is not None:
            raise ConstructionError("give either content or body, not both")
        if content is not None and not isinstance(content, (bytes, bytearray)):
            raise ConstructionError(
                "content must be bytes, got {}".format(type(content).__name__)
            )
        self._set(
            method=method,
            url=url,
            headers=_FrozenDict(headers),
            content=content,
            body=body,
            decode=decode,
            serialize=serialize,
        )

    def with_headers(self, headers):
        """Create a new descriptor with added headers

        Parameters
        ----------
        headers: Mapping
            the headers to add
        """
        return self.replace(headers=_merge_maps(self.headers, headers))

    def prepare(self):
        """Create the :class:`~requestable.http.Request` to transmit.
        A structured ``body`` is serialized at this point.

        Returns
        -------
        Request
            the request, with exactly this descriptor's headers

        Raises
        ------
        ~requestable.errors.SerializationError
            if the body could not be serialized
        """
        content = self.content
        if self.body is not None:
            try:
                content = self.serialize(self.body)
            except Exception as e:
                raise SerializationError(
                    "could not serialize body: {}".format(e)
                ) from e
            if not isinstance(content, (bytes, bytearray)):
                raise SerializationError(
                    "serializer returned {}, not bytes".format(
                        type(content).__name__
                    )
                )
        return Request(
            self.method,
            self.url,
            content=None if content is None else bytes(content),
            headers=self.headers,
        )

    def __repr__(self):
        return (
            "<Descriptor: {0.method} {0.url}, headers={0.headers!r}>"
        ).format(self)


GET = partial(Descriptor, Method.GET)
GET.__doc__ = "Shortcut for a GET descriptor"
POST = partial(Descriptor, Method.POST)
POST.__doc__ = "Shortcut for a POST descriptor"
PUT = partial(Descriptor, Method.PUT)
PUT.__doc__ = "Shortcut for a PUT descriptor"
PATCH = partial(Descriptor, Method.PATCH)
PATCH.__doc__ = "Shortcut for a PATCH descriptor"
DELETE = partial(Descriptor, Method.DELETE)
DELETE.__doc__ = "Shortcut for a DELETE descriptor"
