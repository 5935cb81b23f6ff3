"""Per-command snapshot of the account collections a command reads."""

from __future__ import annotations

from dataclasses import dataclass, field

from .models import Notebook, Tag
from .note_store import NoteStore


@dataclass(slots=True)
class CommandContext:
    """Collections fetched once, up front, for the lifetime of one command."""

    store: NoteStore
    notebooks: list[Notebook] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    tag_counts: dict[str, int] = field(default_factory=dict)

    @classmethod
    def load(
        cls,
        store: NoteStore,
        *,
        notebooks: bool = False,
        tags: bool = False,
        tag_counts: bool = False,
    ) -> CommandContext:
        return cls(
            store=store,
            notebooks=store.list_notebooks() if notebooks else [],
            tags=store.list_tags() if tags else [],
            tag_counts=store.note_counts_by_tag() if tag_counts else {},
        )

    def notebook_name(self, guid: str | None) -> str | None:
        for notebook in self.notebooks:
            if notebook.guid == guid:
                return notebook.name
        return None

    def tag_name(self, tag_id: str | None) -> str | None:
        for tag in self.tags:
            if tag.id == tag_id:
                return tag.name
        return None

    def tag_names(self, guids: list[str]) -> list[str]:
        return sorted(tag.name for tag in self.tags if tag.id in guids)
