from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List

import pytest
import requests

from reqtui.transport import (
    DispatcherBusyError,
    HttpTransport,
    RequestDispatcher,
    RequestSpec,
    Response,
    format_body,
    media_type,
)


@dataclass
class FakeRawResponse:
    status_code: int
    text: str
    headers: Dict[str, str] = field(default_factory=dict)


class FakeSession:
    def __init__(self, response: FakeRawResponse | None = None, error: Exception | None = None):
        self.response = response or FakeRawResponse(200, "")
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def request(self, method: str, url: str, **kwargs: Any) -> FakeRawResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self) -> None:
        self.closed = True


def test_format_body_pretty_prints_json_only() -> None:
    assert format_body('{"a":[1,2]}', "application/json") == (
        '{\n  "a": [\n    1,\n    2\n  ]\n}\n'
    )
    assert format_body('{"a":1}', "application/problem+json") == '{\n  "a": 1\n}\n'
    assert format_body("{broken", "application/json") == "{broken"
    assert format_body('{"a":1}', "text/plain") == '{"a":1}'


def test_media_type_strips_parameters() -> None:
    assert media_type("Application/JSON; charset=utf-8") == "application/json"


def test_send_text_body_with_query_params() -> None:
    session = FakeSession(
        FakeRawResponse(201, '{"id":7}', {"Content-Type": "application/json"})
    )
    transport = HttpTransport(session=session, timeout_s=5.0)

    response = transport.send(
        RequestSpec(
            method="POST",
            url="http://api.test/items",
            headers={"Content-Type": "application/json"},
            query_params=(("dry", "1"),),
            body='{"name":"box"}',
        )
    )

    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["params"] == [("dry", "1")]
    assert call["data"] == b'{"name":"box"}'
    assert call["timeout"] == 5.0
    assert response.status_code == 201
    assert response.text == '{\n  "id": 7\n}\n'
    assert response.content_type == "application/json"
    assert response.ok


def test_send_form_drops_content_type_header() -> None:
    session = FakeSession()
    transport = HttpTransport(session=session)

    transport.send(
        RequestSpec(
            method="PUT",
            url="http://api.test/form",
            headers={"Content-Type": "application/json", "Accept": "*/*"},
            form=(("name", "box"),),
            send_form=True,
        )
    )

    call = session.calls[0]
    assert call["headers"] == {"Accept": "*/*"}
    assert call["data"] == [("name", "box")]
    assert call["params"] is None


def test_network_error_becomes_error_response() -> None:
    session = FakeSession(error=requests.ConnectionError("connection refused"))
    transport = HttpTransport(session=session)

    response = transport.send(RequestSpec(method="GET", url="http://down.test"))

    assert response.status_code == 0
    assert response.error == "connection refused"
    assert not response.ok
    assert response.status_line == "ERROR connection refused"


def test_close_closes_session() -> None:
    session = FakeSession()

    HttpTransport(session=session).close()

    assert session.closed


class GatedTransport:
    def __init__(self) -> None:
        self.release = threading.Event()

    def send(self, spec: RequestSpec) -> Response:
        self.release.wait(timeout=2.0)
        return Response(200, spec.url)


def test_dispatcher_allows_one_request_at_a_time() -> None:
    transport = GatedTransport()
    spec = RequestSpec(method="GET", url="http://api.test")

    with RequestDispatcher(transport) as dispatcher:
        assert dispatcher.poll() is None
        dispatcher.submit(spec)
        assert dispatcher.busy
        with pytest.raises(DispatcherBusyError):
            dispatcher.submit(spec)

        transport.release.set()
        response = dispatcher.wait(timeout=2.0)

        assert response is not None and response.text == "http://api.test"
        assert not dispatcher.busy
        dispatcher.submit(spec)
        assert dispatcher.wait(timeout=2.0) is not None

    assert not dispatcher.running


def test_dispatcher_wait_times_out_without_response() -> None:
    dispatcher = RequestDispatcher(GatedTransport())

    assert dispatcher.wait(timeout=0.01) is None
    dispatcher.stop()


class RaisingTransport:
    def __init__(self) -> None:
        self.calls = 0

    def send(self, spec: RequestSpec) -> Response:
        self.calls += 1
        if self.calls == 1:
            raise ValueError("bad header")
        return Response(200, spec.url)


def test_dispatcher_survives_a_transport_exception() -> None:
    transport = RaisingTransport()
    spec = RequestSpec(method="GET", url="http://api.test")

    with RequestDispatcher(transport) as dispatcher:
        dispatcher.submit(spec)
        response = dispatcher.wait(timeout=2.0)

        assert response is not None
        assert response.status_code == 0
        assert response.error == "bad header"
        assert not dispatcher.busy
        assert dispatcher.running

        dispatcher.submit(spec)
        second = dispatcher.wait(timeout=2.0)
        assert second is not None and second.status_code == 200


def test_unencodable_header_reaches_the_ui_as_an_error() -> None:
    error = UnicodeEncodeError("latin-1", "café", 3, 4, "ordinal not in range(256)")
    transport = HttpTransport(session=FakeSession(error=error))

    with RequestDispatcher(transport) as dispatcher:
        dispatcher.submit(
            RequestSpec(
                method="GET", url="http://api.test", headers={"X-Name": "café"}
            )
        )
        response = dispatcher.wait(timeout=2.0)

    assert response is not None
    assert response.error is not None and "latin-1" in response.error
    assert not dispatcher.busy
