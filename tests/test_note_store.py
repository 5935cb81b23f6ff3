from __future__ import annotations

import base64
import json

import httpx
import pytest

from notestore_cli.errors import NoteStoreApiError
from notestore_cli.models import NoteDraft, NoteSearchRequest, ResourceDraft, ResultSpec
from notestore_cli.note_store import NoteStoreClient


def make_client(handler) -> NoteStoreClient:
    return NoteStoreClient(
        base_url="http://notes.test/",
        token="secret",
        transport=httpx.MockTransport(handler),
    )


def test_search_metadata_sends_paging_params() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "notes": [{"guid": "g1", "title": "One", "tag_guids": ["t1"]}],
                "total_notes": 7,
            },
        )

    client = make_client(handler)
    page = client.search_metadata(
        NoteSearchRequest(query="travel", count=5),
        offset=3,
        limit=5,
        result_spec=ResultSpec(),
    )
    client.close()

    assert page.total_notes == 7
    assert page.notes[0].guid == "g1"
    assert page.notes[0].tag_guids == ["t1"]
    params = seen[0].url.params
    assert seen[0].url.path == "/notes/metadata"
    assert params["token"] == "secret"
    assert params["query"] == "travel"
    assert params["order"] == "relevance"
    assert params["offset"] == "3"
    assert params["limit"] == "5"
    assert "tag_guids" in params["fields"].split(",")


def test_lists_and_counts() -> None:
    routes = {
        "/tags": {"items": [{"id": "t1", "name": "work", "parent_id": None}]},
        "/notebooks": {"items": [{"guid": "n1", "name": "Inbox", "service_created": 1000}]},
        "/notes/counts": {"tag_counts": {"t1": 3}},
        "/user": {"id": 2079, "shard_id": "s1"},
        "/notes/g1/content": {"content": "<en-note>hi</en-note>"},
    }

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=routes[request.url.path])

    client = make_client(handler)
    assert client.list_tags()[0].name == "work"
    assert client.list_notebooks()[0].service_created == 1000
    assert client.note_counts_by_tag() == {"t1": 3}
    assert client.get_user().shard_id == "s1"
    assert client.get_note_content("g1") == "<en-note>hi</en-note>"


def test_create_note_encodes_resources() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"guid": "new", "title": "T"})

    draft = NoteDraft(
        title="T",
        content="<en-note/>",
        resources=[ResourceDraft(filename="a.txt", mime="text/plain", data=b"abc", body_hash="h")],
    )
    created = make_client(handler).create_note(draft)

    assert created.guid == "new"
    assert bodies[0]["resources"][0]["data"] == base64.b64encode(b"abc").decode("ascii")
    assert "notebook_guid" not in bodies[0]


def test_error_status_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="bad token\n")

    with pytest.raises(NoteStoreApiError) as excinfo:
        make_client(handler).list_tags()
    assert excinfo.value.status_code == 401
    assert excinfo.value.response_text == "bad token"
    assert "401" in str(excinfo.value)


def test_non_object_json_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[1, 2])

    with pytest.raises(NoteStoreApiError, match="Unexpected JSON type: list"):
        make_client(handler).list_notebooks()


def test_non_json_body_raises_malformed() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>proxy login</html>")

    with pytest.raises(NoteStoreApiError) as excinfo:
        make_client(handler).list_tags()
    assert excinfo.value.malformed
    assert excinfo.value.status_code == 200
    assert "proxy login" in excinfo.value.response_text
    assert str(excinfo.value).startswith("Note service malformed response for GET")
