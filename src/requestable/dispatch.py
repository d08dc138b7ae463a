"""Executing descriptors: one exchange, one outcome"""
import asyncio
import logging

from .clients import _is_registered, send, send_async
from .config import load_settings
from .outcome import DecodeError, HttpError, NoResponse, Success, TransportError

__all__ = ["Dispatcher", "Call", "classify"]

logger = logging.getLogger(__name__)


def classify(response, decode):
    """Turn a transport response into an outcome.
    ``decode`` is only called for a 2xx response with content.

    Parameters
    ----------
    response: ~requestable.http.Response or None
        what the transport returned
    decode: ~typing.Callable[[bytes], T]
        the decoder of the descriptor

    Returns
    -------
    Outcome[T]
        the outcome
    """
    status = getattr(response, "status_code", None)
    if status is None:
        return NoResponse()
    content = getattr(response, "content", None)
    if not 200 <= status < 300:
        return HttpError(status, content)
    if content is None:
        return NoResponse()
    try:
        value = decode(content)
    except Exception as e:
        return DecodeError(e, content)
    return Success(value)


class Call(object):
    """Handle on a dispatch started with :meth:`Dispatcher.submit`.

    Awaiting it gives the outcome.
    If the call is cancelled before it completes,
    the outcome is a :class:`~requestable.outcome.TransportError`
    wrapping :class:`asyncio.CancelledError`.
    """

    __slots__ = "_task", "_outcome", "_callback", "_cancelled"

    def __init__(self, task, callback=None):
        self._task = task
        self._cancelled = False
        self._callback = callback
        self._outcome = task.get_loop().create_future()
        task.add_done_callback(self._deliver)

    def _deliver(self, task):
        # the task may still finish normally after a successful cancel()
        if self._cancelled or task.cancelled():
            outcome = TransportError(asyncio.CancelledError())
        elif task.exception() is not None:
            outcome = TransportError(task.exception())
        else:
            outcome = task.result()
        self._outcome.set_result(outcome)
        if self._callback is not None:
            self._callback(outcome)

    def cancel(self):
        """Cancel the call. Has no effect once it has completed.

        Returns
        -------
        bool
            whether the in-flight exchange was cancelled.
            If so, the outcome is always a cancellation
            :class:`~requestable.outcome.TransportError`.
        """
        cancelled = self._task.cancel()
        if cancelled:
            self._cancelled = True
        return cancelled

    def done(self):
        """Whether the outcome is available"""
        return self._outcome.done()

    def result(self):
        """The outcome. Raises :class:`asyncio.InvalidStateError`
        if it is not available yet."""
        return self._outcome.result()

    def __await__(self):
        return asyncio.shield(self._outcome).__await__()


class Dispatcher(object):
    """Executes descriptors with an HTTP client.

    A dispatcher holds no per-call state,
    it may be used for any number of concurrent calls.

    Parameters
    ----------
    client
        The HTTP client to use.
        Its type must have been registered with
        :func:`~requestable.clients.send_async`
        or :func:`~requestable.clients.send`.
    timeout: float or None
        Seconds to wait for a single exchange.
        Defaults to ``timeout_seconds`` of the settings.
    settings: ~requestable.config.Settings or None
        If not given, these are loaded from the environment.

    Example
    -------

    >>> async with aiohttp.ClientSession() as session:
    ...     dispatcher = Dispatcher(session, timeout=10)
    ...     outcome = await dispatcher.send(github.user('octocat'))
    ...
    >>> outcome.unwrap()
    Account(name='The Octocat', bio=None)
    """

    __slots__ = "client", "timeout"

    def __init__(self, client, timeout=None, settings=None):
        if timeout is None:
            timeout = (settings or load_settings()).timeout_seconds
        self.client = client
        self.timeout = timeout

    def _prepare(self, descriptor):
        request = descriptor.prepare()
        if not (
            _is_registered(send_async, self.client)
            or _is_registered(send, self.client)
        ):
            raise TypeError("client {!r} not registered".format(self.client))
        return request

    async def _complete(self, descriptor, request):
        logger.debug("sending %r", request)
        try:
            response = await asyncio.wait_for(
                send_async(self.client, request), self.timeout
            )
        except Exception as e:
            outcome = TransportError(e)
        else:
            outcome = classify(response, descriptor.decode)
        logger.debug("%s %s: %r", descriptor.method, descriptor.url, outcome)
        return outcome

    async def send(self, descriptor):
        """Execute a descriptor, returning its outcome

        Parameters
        ----------
        descriptor: Descriptor[T]
            the call to make

        Returns
        -------
        Outcome[T]
            exactly one outcome. Failures after the request is prepared
            are never raised.

        Raises
        ------
        ~requestable.errors.SerializationError
            if the body can't be serialized. Nothing is sent in that case.
        TypeError
            if the client type is not registered

        Note
        ----
        This is a plain coroutine: cancelling the task awaiting it raises
        :class:`asyncio.CancelledError` in that task, and no outcome is
        produced. Use :meth:`submit` to have a cancellation reported as
        a :class:`~requestable.outcome.TransportError` instead.
        """
        return await self._complete(descriptor, self._prepare(descriptor))

    def submit(self, descriptor, callback=None):
        """Start executing a descriptor in the background.
        Must be called while the event loop is running.

        Preparing the request happens right away,
        so :class:`~requestable.errors.SerializationError`
        is raised here, at the call site.

        Parameters
        ----------
        descriptor: Descriptor[T]
            the call to make
        callback: ~typing.Callable[[Outcome[T]], None] or None
            called exactly once with the outcome,
            also when the call is cancelled.

        Returns
        -------
        Call
            an awaitable handle on the outcome
        """
        request = self._prepare(descriptor)
        task = asyncio.ensure_future(self._complete(descriptor, request))
        return Call(task, callback)

    def __repr__(self):
        return "Dispatcher({!r}, timeout={!r})".format(
            self.client, self.timeout
        )
