"""Bounded, resumable fetching of note metadata."""

from __future__ import annotations

from loguru import logger

from .models import NoteSearchPage, NoteSearchRequest, ResultSpec
from .note_store import NoteStore


def fetch_notes(
    store: NoteStore,
    request: NoteSearchRequest,
    result_spec: ResultSpec | None = None,
) -> NoteSearchPage:
    """Fetch up to ``request.count`` note summaries matching ``request``.

    The service caps every call at a page size it does not advertise, so a
    single call may under-return without saying so. Only ``total_notes``
    against the number received reveals it; keep asking from the current
    offset until the target count or the server's total is reached.

    An empty page means the filter is exhausted and ends the loop. Remote
    errors propagate to the caller.
    """
    spec = result_spec or ResultSpec()
    count = request.count

    first = store.search_metadata(request, offset=0, limit=count, result_spec=spec)
    notes = list(first.notes)
    total_notes = first.total_notes
    logger.debug(f"notes returned = {len(notes)}, total notes = {total_notes}")

    # Nothing on the first page means nothing more to retrieve.
    remaining = max(count - len(notes), 0) if notes else 0

    while total_notes > len(notes) and remaining > 0:
        logger.debug(f"getting more notes from offset {len(notes)}")
        page = store.search_metadata(
            request, offset=len(notes), limit=remaining, result_spec=spec
        )
        logger.debug(f"additional result = {len(page.notes)}")
        total_notes = page.total_notes
        if not page.notes:
            remaining = 0
        else:
            notes.extend(page.notes)
            remaining = max(remaining - len(page.notes), 0)
        logger.debug(f"targeting {total_notes}, to go = {remaining}")

    return NoteSearchPage(notes=notes[:count], total_notes=total_notes)
