"""Functions for dealing with HTTP clients in a unified manner.

Adapters hand over exactly the headers and content of the request.
"""
import asyncio
import urllib.request
from functools import partial, singledispatch
from urllib.error import HTTPError

from .http import Response

__all__ = ["send", "send_async"]


@singledispatch
def send(client, request):
    """Given a client, send a :class:`~requestable.http.Request`,
    returning a :class:`~requestable.http.Response`.

    A :func:`~functools.singledispatch` function.

    Parameters
    ----------
    client: any registered client type
        The client with which to send the request.

        Client types registered by default:

        * :class:`urllib.request.OpenerDirector`
          (e.g. from :func:`~urllib.request.build_opener`)
        * :class:`requests.Session`
          (if `requests <http://docs.python-requests.org/>`_ is installed)
        * :class:`httpx.Client`
          (if `httpx <https://www.python-httpx.org/>`_ is installed)

    request: Request
        The request to send

    Returns
    -------
    Response
        the resulting response


    Example of registering a new HTTP client:

    >>> @send.register(MyClientClass)
    ... def _send(client, request: Request) -> Response:
    ...     r = client.send(request)
    ...     return Response(r.status, r.read(), headers=r.get_headers())
    """
    raise TypeError("client {!r} not registered".format(client))


def _is_registered(func, client):
    return func.dispatch(type(client)) is not func.dispatch(object)


@singledispatch
def send_async(client, request):
    """Given a client, send a :class:`~requestable.http.Request`,
    returning an awaitable :class:`~requestable.http.Response`.

    A :func:`~functools.singledispatch` function.

    Parameters
    ----------
    client: any registered client type
        The client with which to send the request.

        Client types supported by default:

        * :class:`aiohttp.ClientSession`
          (if `aiohttp <http://aiohttp.readthedocs.io/>`_ is installed)
        * :class:`httpx.AsyncClient`
          (if `httpx <https://www.python-httpx.org/>`_ is installed)
        * any client registered with :func:`send`.
          These run on the event loop's default executor,
          so they never block the loop.

    request: Request
        The request to send

    Returns
    -------
    ~typing.Awaitable[Response]
        the resulting response


    Example of registering a new HTTP client:

    >>> @send_async.register(MyClientClass)
    ... async def _send(client, request: Request) -> Response:
    ...     r = await client.send(request)
    ...     return Response(r.status, r.read(), headers=r.get_headers())
    """
    if not _is_registered(send, client):
        raise TypeError("client {!r} not registered".format(client))
    loop = asyncio.get_running_loop()
    return loop.run_in_executor(None, partial(send, client, request))


def _has_content_type(headers):
    return any(h.lower() == "content-type" for h in headers)


class _UrllibRequest(urllib.request.Request):
    """a urllib request without urllib's default Content-Type"""

    def has_header(self, header_name):
        return header_name == "Content-type" or super().has_header(
            header_name
        )


@send.register(urllib.request.OpenerDirector)
def _urllib_send(opener, req, **kwargs):
    """Send a request with an :mod:`urllib` opener"""
    raw_req = _UrllibRequest(
        req.url,
        req.content,
        headers=dict(req.headers),
        method=req.method.value,
    )
    try:
        res = opener.open(raw_req, **kwargs)
    except HTTPError as http_err:
        res = http_err
    with res:
        return Response(
            res.getcode(), content=res.read(), headers=res.headers
        )


try:
    import requests
except ImportError:  # pragma: no cover
    pass
else:

    @send.register(requests.Session)
    def _requests_send(session, req):
        """send a request with the `requests` library"""
        res = session.request(
            req.method.value,
            req.url,
            data=req.content,
            headers=dict(req.headers),
        )
        return Response(res.status_code, res.content, headers=res.headers)


try:
    import aiohttp
except ImportError:  # pragma: no cover
    pass
else:

    @send_async.register(aiohttp.ClientSession)
    async def _aiohttp_send(session, req):
        """send a request with the `aiohttp` library"""
        async with session.request(
            req.method.value,
            req.url,
            data=req.content,
            headers=dict(req.headers),
            skip_auto_headers=(
                () if _has_content_type(req.headers) else ("Content-Type",)
            ),
        ) as resp:
            return Response(
                resp.status, content=await resp.read(), headers=resp.headers
            )


try:
    import httpx
except ImportError:  # pragma: no cover
    pass
else:

    @send.register(httpx.Client)
    def _httpx_send(client, req):
        """send a request with the `httpx` library"""
        res = client.request(
            req.method.value,
            req.url,
            content=req.content,
            headers=dict(req.headers),
        )
        return Response(res.status_code, res.content, headers=res.headers)

    @send_async.register(httpx.AsyncClient)
    async def _httpx_send_async(client, req):
        """send a request asynchronously with the `httpx` library"""
        res = await client.request(
            req.method.value,
            req.url,
            content=req.content,
            headers=dict(req.headers),
        )
        return Response(res.status_code, res.content, headers=res.headers)
