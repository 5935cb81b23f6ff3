"""Structured models exchanged with the note service."""

from __future__ import annotations

import base64
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer

# Attribute fields printed by `show`, in display order.
NOTE_ATTRIBUTE_FIELDS = (
    "subject_date",
    "latitude",
    "longitude",
    "altitude",
    "author",
    "source",
    "source_url",
    "source_application",
    "share_date",
    "place_name",
    "content_class",
    "application_data",
    "last_edited_by",
    "classifications",
    "creator_id",
    "last_editor_id",
    "shared_with_business",
    "conflict_source_note_guid",
    "note_title_quality",
    "reminder_order",
    "reminder_time",
    "reminder_done_time",
)


class NoteSearchRequest(BaseModel):
    """A metadata search: free-text query, relevance order, target count."""

    model_config = ConfigDict(frozen=True)

    query: str | None = None
    order: Literal["relevance"] = "relevance"
    count: int = Field(default=20, ge=0)


class ResultSpec(BaseModel):
    """Which note summary fields the service should include."""

    model_config = ConfigDict(frozen=True)

    include_title: bool = True
    include_content_length: bool = True
    include_created: bool = True
    include_updated: bool = True
    include_notebook_guid: bool = True
    include_attributes: bool = True
    include_tag_guids: bool = True
    include_largest_resource_mime: bool = True
    include_largest_resource_size: bool = True

    def fields(self) -> str:
        """Comma separated field names, as the service expects them."""
        names = [
            name.removeprefix("include_")
            for name, included in self.model_dump().items()
            if included
        ]
        return ",".join(names)


class NoteAttributes(BaseModel):
    model_config = ConfigDict(frozen=True)

    subject_date: int | None = None
    latitude: float | None = None
    longitude: float | None = None
    altitude: float | None = None
    author: str | None = None
    source: str | None = None
    source_url: str | None = None
    source_application: str | None = None
    share_date: int | None = None
    place_name: str | None = None
    content_class: str | None = None
    application_data: dict[str, str] | None = None
    last_edited_by: str | None = None
    classifications: dict[str, str] | None = None
    creator_id: int | None = None
    last_editor_id: int | None = None
    shared_with_business: bool | None = None
    conflict_source_note_guid: str | None = None
    note_title_quality: int | None = None
    reminder_order: int | None = None
    reminder_time: int | None = None
    reminder_done_time: int | None = None

    def set_fields(self) -> list[tuple[str, object]]:
        return [
            (name, getattr(self, name))
            for name in NOTE_ATTRIBUTE_FIELDS
            if getattr(self, name) is not None
        ]


class NoteSummary(BaseModel):
    """Per-note metadata returned by a metadata search."""

    model_config = ConfigDict(frozen=True)

    guid: str
    title: str | None = None
    content_length: int | None = None
    created: int | None = None
    updated: int | None = None
    notebook_guid: str | None = None
    tag_guids: list[str] = Field(default_factory=list)
    attributes: NoteAttributes = Field(default_factory=NoteAttributes)
    largest_resource_mime: str | None = None
    largest_resource_size: int | None = None


class NoteSearchPage(BaseModel):
    notes: list[NoteSummary] = Field(default_factory=list)
    total_notes: int = Field(default=0, ge=0)


class Notebook(BaseModel):
    guid: str
    name: str
    service_created: int | None = None
    service_updated: int | None = None


class Tag(BaseModel):
    id: str
    name: str
    parent_id: str | None = None


class User(BaseModel):
    id: int
    shard_id: str
    username: str | None = None


class ResourceDraft(BaseModel):
    filename: str
    mime: str
    data: bytes
    body_hash: str

    @field_serializer("data", when_used="json")
    def _serialize_data(self, data: bytes) -> str:
        return base64.b64encode(data).decode("ascii")


class NoteDraft(BaseModel):
    """A note to be created."""

    title: str = "Untitled Note"
    content: str
    notebook_guid: str | None = None
    tag_names: list[str] = Field(default_factory=list)
    source_url: str | None = None
    resources: list[ResourceDraft] = Field(default_factory=list)


class CreatedNote(BaseModel):
    guid: str
    title: str | None = None
