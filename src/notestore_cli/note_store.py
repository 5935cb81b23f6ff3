"""Client for the note service HTTP/JSON gateway."""

from __future__ import annotations

from typing import Any, Protocol

import httpx

from .errors import NoteStoreApiError
from .models import (
    CreatedNote,
    NoteDraft,
    Notebook,
    NoteSearchPage,
    NoteSearchRequest,
    ResultSpec,
    Tag,
    User,
)


class NoteStore(Protocol):
    """Remote operations the commands depend on."""

    def search_metadata(
        self,
        request: NoteSearchRequest,
        *,
        offset: int,
        limit: int,
        result_spec: ResultSpec,
    ) -> NoteSearchPage: ...

    def list_tags(self) -> list[Tag]: ...

    def list_notebooks(self) -> list[Notebook]: ...

    def note_counts_by_tag(self) -> dict[str, int]: ...

    def get_note_content(self, guid: str) -> str: ...

    def get_user(self) -> User: ...

    def create_note(self, draft: NoteDraft) -> CreatedNote: ...

    def close(self) -> None: ...


class NoteStoreClient:
    """Thin wrapper around the note service's REST API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: str,
        timeout_seconds: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._token = token
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def request_json(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        method = method.upper()
        url_path = path if path.startswith("/") else f"/{path}"
        q = dict(params or {})
        q.setdefault("token", self._token)

        resp = self._client.request(method, url_path, params=q, json=json_body)
        if resp.status_code >= 400:
            raise NoteStoreApiError(
                status_code=resp.status_code,
                method=method,
                url=str(resp.request.url),
                response_text=(resp.text or "").strip(),
            )

        try:
            data = resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:200].strip()
            raise NoteStoreApiError(
                status_code=resp.status_code,
                method=method,
                url=str(resp.request.url),
                response_text=f"Invalid JSON body: {snippet!r}",
                malformed=True,
            ) from exc
        if not isinstance(data, dict):
            raise NoteStoreApiError(
                status_code=resp.status_code,
                method=method,
                url=str(resp.request.url),
                response_text=f"Unexpected JSON type: {type(data).__name__}",
                malformed=True,
            )
        return data

    def search_metadata(
        self,
        request: NoteSearchRequest,
        *,
        offset: int,
        limit: int,
        result_spec: ResultSpec,
    ) -> NoteSearchPage:
        params: dict[str, Any] = {
            "order": request.order,
            "offset": offset,
            "limit": limit,
            "fields": result_spec.fields(),
        }
        if request.query:
            params["query"] = request.query
        raw = self.request_json("GET", "/notes/metadata", params=params)
        return NoteSearchPage.model_validate(raw)

    def list_tags(self) -> list[Tag]:
        raw = self.request_json("GET", "/tags")
        return [Tag.model_validate(item) for item in raw.get("items") or []]

    def list_notebooks(self) -> list[Notebook]:
        raw = self.request_json("GET", "/notebooks")
        return [Notebook.model_validate(item) for item in raw.get("items") or []]

    def note_counts_by_tag(self) -> dict[str, int]:
        # Counts over an empty filter, i.e. every note in the account.
        raw = self.request_json("GET", "/notes/counts")
        return {str(k): int(v) for k, v in (raw.get("tag_counts") or {}).items()}

    def get_note_content(self, guid: str) -> str:
        raw = self.request_json("GET", f"/notes/{guid}/content")
        return raw.get("content") or ""

    def get_user(self) -> User:
        return User.model_validate(self.request_json("GET", "/user"))

    def create_note(self, draft: NoteDraft) -> CreatedNote:
        raw = self.request_json(
            "POST",
            "/notes",
            json_body=draft.model_dump(mode="json", exclude_none=True),
        )
        return CreatedNote.model_validate(raw)
