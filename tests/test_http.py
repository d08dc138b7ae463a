from collections.abc import Mapping
from operator import attrgetter

import pytest

import requestable


class AlwaysEquals:
    def __eq__(self, other):
        return True

    def __ne__(self, other):
        return False


class FrozenDict(Mapping):
    def __init__(self, inner):
        self._inner = dict(inner)

    __len__ = property(attrgetter("_inner.__len__"))
    __iter__ = property(attrgetter("_inner.__iter__"))
    __getitem__ = property(attrgetter("_inner.__getitem__"))
    __repr__ = property(attrgetter("_inner.__repr__"))


class TestMethod:
    def test_str(self):
        assert str(requestable.Method.PATCH) == "PATCH"

    def test_from_string(self):
        assert requestable.Method("DELETE") is requestable.Method.DELETE

    def test_compares_to_string(self):
        assert requestable.Method.GET == "GET"


class TestRequest:
    def test_defaults(self):
        req = requestable.Request("GET", "https://test.dev/")
        assert req == requestable.Request(
            "GET", "https://test.dev/", content=None, headers={}
        )
        assert req.method is requestable.Method.GET

    def test_with_headers(self):
        req = requestable.Request(
            "GET", "https://test.dev", headers={"foo": "bla"}
        )
        assert req.with_headers({"other-header": "3"}) == requestable.Request(
            "GET",
            "https://test.dev",
            headers={"foo": "bla", "other-header": "3"},
        )

    def test_headers_from_other_mappingtype(self):
        req = requestable.Request(
            "GET", "https://test.dev", headers=FrozenDict({"foo": "bar"})
        )
        assert req.with_headers({"bla": "qux"}).headers == {
            "foo": "bar",
            "bla": "qux",
        }

    def test_immutable(self):
        req = requestable.Request("GET", "https://test.dev")
        with pytest.raises(AttributeError, match="immutable"):
            req.url = "https://other.dev"

    def test_headers_are_copied(self):
        headers = {"foo": "bar"}
        req = requestable.Request("GET", "https://test.dev", headers=headers)
        headers["foo"] = "changed"
        assert req.headers == {"foo": "bar"}

    def test_equality(self):
        req = requestable.Request("GET", "https://test.dev")
        other = req.replace()
        assert req == other
        assert not req != other

        assert not req == req.replace(headers={"foo": "bar"})
        assert req != req.replace(headers={"foo": "bar"})

        assert req == AlwaysEquals()

    def test_repr(self):
        req = requestable.Request("GET", "https://test.dev/x")
        assert "GET https://test.dev/x" in repr(req)


class TestResponse:
    def test_equality(self):
        rsp = requestable.Response(204)
        other = rsp.replace()
        assert rsp == other
        assert not rsp != other

        assert not rsp == rsp.replace(headers={"foo": "bar"})
        assert rsp != rsp.replace(headers={"foo": "bar"})

        assert not rsp == object()
        assert rsp != object()

    def test_repr(self):
        assert "404" in repr(requestable.Response(404))


def test_header_adder():
    req = requestable.Request(
        "GET", "https://test.dev", headers={"Accept": "application/json"}
    )
    adder = requestable.header_adder({"Authorization": "my-auth"})
    assert adder(req).headers == {
        "Accept": "application/json",
        "Authorization": "my-auth",
    }


def test_basic_auth():
    desc = requestable.GET("https://test.dev")
    authed = requestable.basic_auth(("user", "pw"))(desc)
    assert authed.headers == {"Authorization": "Basic dXNlcjpwdw=="}


def test_bearer_auth():
    desc = requestable.GET("https://test.dev", headers={"Accept": "*/*"})
    authed = requestable.bearer_auth("s3cr3t")(desc)
    assert authed.headers == {
        "Accept": "*/*",
        "Authorization": "Bearer s3cr3t",
    }
    assert desc.headers == {"Accept": "*/*"}
