"""Line formatting helpers for command output."""

from __future__ import annotations

import html
from datetime import datetime

from .models import ResourceDraft

ENML_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE en-note SYSTEM "http://xml.evernote.com/pub/enml2.dtd">
<en-note>
  {body}
</en-note>
"""


def format_date(timestamp_ms: int | None) -> str | None:
    """Epoch milliseconds as local ``YYYY-MM-DD HH:MM:SS``."""
    if timestamp_ms is None:
        return None
    return datetime.fromtimestamp(timestamp_ms // 1000).strftime("%Y-%m-%d %H:%M:%S")


def join_columns(columns: list[str | None]) -> str:
    return " ".join(c for c in columns if c is not None)


def web_client_url(template: str, *, note_guid: str) -> str:
    return template.format(note_guid=note_guid)


def note_link(template: str, *, shard_id: str, user_id: int, note_guid: str) -> str:
    return template.format(shard_id=shard_id, user_id=user_id, note_guid=note_guid)


def media_reference(resource: ResourceDraft) -> str:
    return f'<en-media type="{resource.mime}" hash="{resource.body_hash}"/>'


def enml_document(text: str, resources: list[ResourceDraft]) -> str:
    """Wrap plain text and resource references in an ``en-note`` envelope."""
    parts = [html.escape(text)] if text else []
    parts.extend(media_reference(r) for r in resources)
    return ENML_TEMPLATE.format(body="\n  ".join(parts))
