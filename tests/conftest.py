from __future__ import annotations

import sys
from dataclasses import dataclass, field

import pytest
from loguru import logger

from notestore_cli.models import (
    CreatedNote,
    NoteDraft,
    Notebook,
    NoteSearchPage,
    NoteSearchRequest,
    NoteSummary,
    ResultSpec,
    Tag,
    User,
)


@dataclass
class FakeNoteStore:
    """In-memory note store that caps every page at ``page_cap`` notes."""

    notes: list[NoteSummary] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    notebooks: list[Notebook] = field(default_factory=list)
    tag_counts: dict[str, int] = field(default_factory=dict)
    contents: dict[str, str] = field(default_factory=dict)
    user: User = field(default_factory=lambda: User(id=2079, shard_id="s1"))
    page_cap: int = 128
    calls: list[tuple[int, int]] = field(default_factory=list)
    created: list[NoteDraft] = field(default_factory=list)
    closed: bool = False

    def search_metadata(
        self,
        request: NoteSearchRequest,
        *,
        offset: int,
        limit: int,
        result_spec: ResultSpec,
    ) -> NoteSearchPage:
        self.calls.append((offset, limit))
        size = min(limit, self.page_cap)
        return NoteSearchPage(
            notes=self.notes[offset : offset + size],
            total_notes=len(self.notes),
        )

    def list_tags(self) -> list[Tag]:
        return list(self.tags)

    def list_notebooks(self) -> list[Notebook]:
        return list(self.notebooks)

    def note_counts_by_tag(self) -> dict[str, int]:
        return dict(self.tag_counts)

    def get_note_content(self, guid: str) -> str:
        return self.contents.get(guid, "")

    def get_user(self) -> User:
        return self.user

    def create_note(self, draft: NoteDraft) -> CreatedNote:
        self.created.append(draft)
        return CreatedNote(guid="new-guid", title=draft.title)

    def close(self) -> None:
        self.closed = True


def make_notes(n: int) -> list[NoteSummary]:
    return [NoteSummary(guid=f"g{i}", title=f"note {i}") for i in range(n)]


@pytest.fixture
def store() -> FakeNoteStore:
    return FakeNoteStore()


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    # Commands bind a sink to the runner's stderr, which is closed afterwards.
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
