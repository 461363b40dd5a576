import json

import pytest
import requests

from core.ordering import OrderedItem
from infrastructure.todoist.errors import (
    ReorderCommandError,
    ReorderError,
    ReorderTransportError,
    TodoistPermissionError,
)
from infrastructure.todoist.sync_client import SYNC_URL, SyncClient, format_sync_status


class DummyResponse:
    def __init__(self, status_code=200, payload=None, text=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload
        if text is not None:
            self.text = text
        else:
            self.text = json.dumps(payload) if payload is not None else ""

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


class RecordingSession:
    def __init__(self, respond):
        self.respond = respond
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if isinstance(self.respond, Exception):
            raise self.respond
        return self.respond(json)


def ok_response(body):
    command_uuid = body["commands"][0]["uuid"]
    return DummyResponse(200, {"sync_status": {command_uuid: "ok"}})


ITEMS = [OrderedItem("new", 1), OrderedItem("b", 2), OrderedItem("a", 3)]


def make_client(session):
    return SyncClient(session, lambda: "tok", uuid_factory=lambda: "uuid-1")


def test_submit_reorder_posts_single_item_reorder_command():
    session = RecordingSession(ok_response)
    make_client(session).submit_reorder(ITEMS)

    assert len(session.calls) == 1
    call = session.calls[0]
    assert call["url"] == SYNC_URL
    assert call["headers"]["Authorization"] == "Bearer tok"
    assert call["json"] == {
        "commands": [
            {
                "type": "item_reorder",
                "uuid": "uuid-1",
                "args": {
                    "items": [
                        {"id": "new", "child_order": 1},
                        {"id": "b", "child_order": 2},
                        {"id": "a", "child_order": 3},
                    ]
                },
            }
        ]
    }


def test_default_uuid_is_fresh_per_call():
    session = RecordingSession(ok_response)
    client = SyncClient(session, lambda: "tok")
    client.submit_reorder(ITEMS)
    client.submit_reorder(ITEMS)
    first, second = (call["json"]["commands"][0]["uuid"] for call in session.calls)
    assert first and second and first != second


@pytest.mark.parametrize("items", [[], [OrderedItem("only", 1)]])
def test_trivial_sequences_skip_network(items):
    session = RecordingSession(RuntimeError("must not be called"))
    SyncClient(session, lambda: "").submit_reorder(items)
    assert session.calls == []


def test_missing_token_raises_permission_error():
    session = RecordingSession(ok_response)
    with pytest.raises(TodoistPermissionError):
        SyncClient(session, lambda: None).submit_reorder(ITEMS)
    assert session.calls == []


def test_http_failure_is_transport_error():
    session = RecordingSession(lambda body: DummyResponse(500, text="boom", reason="Internal Server Error"))
    with pytest.raises(ReorderTransportError) as exc:
        make_client(session).submit_reorder(ITEMS)
    assert exc.value.status_code == 500
    assert exc.value.body == "boom"
    assert str(exc.value) == "Todoist reorder failed (500 Internal Server Error): boom"


def test_http_failure_without_body():
    session = RecordingSession(lambda body: DummyResponse(503, text="", reason="Service Unavailable"))
    with pytest.raises(ReorderTransportError) as exc:
        make_client(session).submit_reorder(ITEMS)
    assert str(exc.value) == "Todoist reorder failed (503 Service Unavailable)"


def test_network_exception_is_transport_error():
    session = RecordingSession(requests.ConnectionError("connection aborted"))
    with pytest.raises(ReorderTransportError) as exc:
        make_client(session).submit_reorder(ITEMS)
    assert exc.value.status_code is None
    assert isinstance(exc.value.__cause__, requests.ConnectionError)


def test_command_level_error_string():
    session = RecordingSession(lambda body: DummyResponse(200, {"sync_status": {"uuid-1": "some error string"}}))
    with pytest.raises(ReorderCommandError) as exc:
        make_client(session).submit_reorder(ITEMS)
    assert exc.value.detail == "some error string"
    assert exc.value.command_uuid == "uuid-1"
    assert str(exc.value) == "Todoist reorder failed: some error string"
    assert isinstance(exc.value, ReorderError)


def test_command_level_error_structure_is_json_encoded():
    status = {"error_code": 20, "error": "Item not found"}
    session = RecordingSession(lambda body: DummyResponse(200, {"sync_status": {"uuid-1": status}}))
    with pytest.raises(ReorderCommandError) as exc:
        make_client(session).submit_reorder(ITEMS)
    assert json.loads(exc.value.detail) == status


@pytest.mark.parametrize(
    "response",
    [
        DummyResponse(200, text=""),
        DummyResponse(200, text="<html>not json</html>"),
        DummyResponse(200, payload=["unexpected"]),
        DummyResponse(200, payload={"sync_status": {"other-uuid": "failed"}}),
        DummyResponse(200, payload={"sync_status": None}),
    ],
)
def test_missing_status_counts_as_success(response):
    session = RecordingSession(lambda body: response)
    make_client(session).submit_reorder(ITEMS)
    assert len(session.calls) == 1


def test_format_sync_status():
    assert format_sync_status(None) == ""
    assert format_sync_status("ok") == ""
    assert format_sync_status({}) == ""
    assert format_sync_status("nope") == "nope"
    assert format_sync_status({"error": "x"}) == '{"error": "x"}'
    assert format_sync_status({1, 2}) in ("{1, 2}", "{2, 1}")
