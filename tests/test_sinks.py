from __future__ import annotations

from types import SimpleNamespace

import pytest
from starlette.datastructures import MutableHeaders

from satpam.errors import UnsupportedHeadersError
from satpam.sinks import (
    CaptureCookieSink,
    CookieSink,
    DocumentCookieSink,
    HeaderCookieSink,
    HeaderWriteStrategy,
)


class SetterBag:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def set_header(self, name: str, value: str) -> None:
        self.calls.append((name, value))

    def set(self, name: str, value: str) -> None:  # pragma: no cover - must not be chosen
        raise AssertionError("set_header takes priority over set")


class SetMethodBag:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def set(self, name: str, value: str) -> None:
        self.calls.append((name, value))


def test_probe_prefers_setter_function() -> None:
    assert HeaderWriteStrategy.probe(SetterBag()) is HeaderWriteStrategy.SETTER_FUNCTION
    assert HeaderWriteStrategy.probe(SetMethodBag()) is HeaderWriteStrategy.SET_METHOD
    assert HeaderWriteStrategy.probe({}) is HeaderWriteStrategy.PLAIN_ASSIGNMENT


def test_probe_rejects_read_only_headers() -> None:
    with pytest.raises(UnsupportedHeadersError):
        HeaderWriteStrategy.probe(object())


def test_header_sink_uses_exactly_one_write_path() -> None:
    bag = SetterBag()
    HeaderCookieSink(bag).persist("satpam=abc")

    assert bag.calls == [("Set-Cookie", "satpam=abc")]


def test_header_sink_set_method_and_plain_assignment() -> None:
    method_bag = SetMethodBag()
    HeaderCookieSink(method_bag).persist("satpam=abc")
    assert method_bag.calls == [("Set-Cookie", "satpam=abc")]

    plain: dict[str, str] = {}
    HeaderCookieSink(plain).persist("satpam=abc")
    assert plain == {"Set-Cookie": "satpam=abc"}


def test_header_sink_writes_starlette_mutable_headers() -> None:
    headers = MutableHeaders()
    HeaderCookieSink(headers).persist("satpam=abc")

    assert headers["set-cookie"] == "satpam=abc"


def test_document_and_capture_sinks() -> None:
    document = SimpleNamespace(cookie="")
    DocumentCookieSink(document).persist("satpam=abc")
    assert document.cookie == "satpam=abc"

    capture = CaptureCookieSink()
    assert capture.last is None
    capture.persist("satpam=one")
    capture.persist("satpam=two")
    assert capture.cookies == ["satpam=one", "satpam=two"]
    assert capture.last == "satpam=two"
    assert isinstance(capture, CookieSink)
