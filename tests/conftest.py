import asyncio
import http.server
import json
import threading

import pytest

import requestable


def pytest_addoption(parser):
    parser.addoption(
        "--live",
        action="store_true",
        default=False,
        help="run against live data",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "live: test against live data")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--live"):
        # --live given in cli: do not skip live tests
        return
    skip_live = pytest.mark.skip(reason="need --live option to run")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


class StubClient:
    """an async transport returning a canned response (or raising)"""

    def __init__(self, response=None, error=None, delay=0):
        self.response = response
        self.error = error
        self.delay = delay
        self.requests = []

    async def send(self, req):
        self.requests.append(req)
        await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


class EchoClient:
    """an async transport answering with the requested url"""

    def __init__(self):
        self.requests = []

    async def send(self, req):
        self.requests.append(req)
        # vary completion order between calls
        await asyncio.sleep(0.001 * (len(self.requests) % 7))
        return requestable.Response(200, req.url.encode())


class SyncStubClient:
    """a blocking transport"""

    def __init__(self, response):
        self.response = response
        self.requests = []

    def send(self, req):
        self.requests.append(req)
        return self.response


requestable.send_async.register(StubClient, StubClient.send)
requestable.send_async.register(EchoClient, EchoClient.send)
requestable.send.register(SyncStubClient, SyncStubClient.send)


@pytest.fixture
def stub_client():
    return StubClient


@pytest.fixture
def echo_client():
    return EchoClient()


@pytest.fixture
def sync_stub_client():
    return SyncStubClient


class EchoHandler(http.server.BaseHTTPRequestHandler):
    """answers with the method, headers and body it received, as JSON"""

    def _echo(self):
        body = self.rfile.read(int(self.headers.get("Content-Length", 0)))
        payload = json.dumps(
            {
                "method": self.command,
                "headers": dict(self.headers.items()),
                "body": body.decode("latin-1"),
            }
        ).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_GET = do_POST = do_PUT = do_PATCH = do_DELETE = _echo

    def log_message(self, *args):
        pass


@pytest.fixture
def echo_server():
    server = http.server.ThreadingHTTPServer(("127.0.0.1", 0), EchoHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield "http://127.0.0.1:{}".format(server.server_address[1])
    finally:
        server.shutdown()
        server.server_close()
