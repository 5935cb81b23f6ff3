"""Command line interface: create, find, notebook-list, show, tag-list."""

from __future__ import annotations

import contextlib
import hashlib
import mimetypes
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Optional

import httpx
import typer
from loguru import logger
from pydantic import ValidationError

from .context import CommandContext
from .errors import NoteStoreApiError
from .formatting import enml_document, format_date, join_columns, note_link, web_client_url
from .logging_setup import configure_logging
from .models import NoteDraft, NoteSearchRequest, ResourceDraft
from .note_store import NoteStore, NoteStoreClient
from .paging import fetch_notes
from .settings import Settings
from .tag_tree import RenderOptions, build_forest, render_forest, unreachable_ids

QUERY_HELP = "search terms, see https://dev.evernote.com/doc/articles/search_grammar.php"

app = typer.Typer(
    help="Create, search and inspect notes, notebooks and tags.",
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)


@dataclass(slots=True)
class CliState:
    verbose: bool = False


def open_store(settings: Settings) -> NoteStore:
    return NoteStoreClient(
        base_url=str(settings.notestore_base_url),
        token=settings.notestore_token,
        timeout_seconds=settings.http_timeout_seconds,
    )


def _load_settings(ctx: typer.Context) -> Settings:
    settings = Settings()
    state: CliState = ctx.obj
    configure_logging(settings.log_level, verbose=state.verbose, log_file=settings.log_file)
    return settings


@contextlib.contextmanager
def _command_errors() -> Iterator[None]:
    # Remote and configuration failures end the command; nothing is retried.
    try:
        yield
    except (NoteStoreApiError, httpx.HTTPError, ValidationError) as exc:
        logger.error(f"{exc}")
        raise typer.Exit(code=1) from exc


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", help="log progress to stderr")] = False,
) -> None:
    ctx.obj = CliState(verbose=verbose)
    configure_logging(verbose=verbose)


@app.command()
def create(
    ctx: typer.Context,
    title: Annotated[str, typer.Option(help="note title")] = "Untitled Note",
    content: Annotated[str, typer.Option(help="plain text body")] = "",
    tag: Annotated[Optional[list[str]], typer.Option(help="tag name, repeatable")] = None,
    notebook_guid: Annotated[Optional[str], typer.Option(help="target notebook")] = None,
    source_url: Annotated[Optional[str], typer.Option(help="source url attribute")] = None,
    resource: Annotated[
        Optional[list[Path]],
        typer.Option(help="file to attach, repeatable", exists=True, dir_okay=False),
    ] = None,
    dry_run: Annotated[bool, typer.Option(help="print the note instead of creating it")] = False,
) -> None:
    """Create a note, optionally with attachments."""
    resources = [_resource_draft(path) for path in resource or []]
    draft = NoteDraft(
        title=title,
        content=enml_document(content, resources),
        notebook_guid=notebook_guid,
        tag_names=list(tag or []),
        source_url=source_url,
        resources=resources,
    )

    if dry_run:
        typer.echo(
            draft.model_dump_json(indent=2, exclude={"resources": {"__all__": {"data"}}})
        )
        return

    with _command_errors():
        settings = _load_settings(ctx)
        with contextlib.closing(open_store(settings)) as store:
            created = store.create_note(draft)
    logger.debug(f"created note {created!r}")
    typer.echo(f"created: {web_client_url(settings.web_client_url, note_guid=created.guid)}")


def _resource_draft(path: Path) -> ResourceDraft:
    data = path.read_bytes()
    mime, _ = mimetypes.guess_type(path.name)
    return ResourceDraft(
        filename=path.name,
        mime=mime or "application/octet-stream",
        data=data,
        body_hash=hashlib.md5(data).hexdigest(),
    )


@app.command()
def find(
    ctx: typer.Context,
    count: Annotated[int, typer.Option(help="number of notes to retrieve", min=0)] = 20,
    query: Annotated[Optional[str], typer.Option(help=QUERY_HELP)] = None,
    show_ctime: Annotated[bool, typer.Option(help="show creation time")] = False,
    show_guid: Annotated[bool, typer.Option(help="show note guid")] = False,
    show_mtime: Annotated[bool, typer.Option(help="show modification (update) time")] = False,
    show_notebook: Annotated[bool, typer.Option(help="show notebook name")] = False,
    show_tag_guids: Annotated[bool, typer.Option(help="show tag guids")] = False,
    show_tags: Annotated[bool, typer.Option(help="show tag names")] = False,
) -> None:
    """Search notes and print one line per match."""
    with _command_errors():
        settings = _load_settings(ctx)
        with contextlib.closing(open_store(settings)) as store:
            result = fetch_notes(store, NoteSearchRequest(query=query, count=count))
            context = CommandContext.load(store, notebooks=show_notebook, tags=show_tags)

    for note in result.notes:
        logger.debug(f"{note!r}")
        typer.echo(
            join_columns(
                [
                    f"{note.guid:>16}" if show_guid else None,
                    f"[{format_date(note.created) or '':>19}]" if show_ctime else None,
                    f"[{format_date(note.updated) or '':>19}]" if show_mtime else None,
                    f"{note.title or '':<64}",
                    f"{context.notebook_name(note.notebook_guid) or '':<16}"
                    if show_notebook
                    else None,
                    f"{str(note.tag_guids):>16}" if show_tag_guids else None,
                    f"{str(context.tag_names(note.tag_guids)):>16}" if show_tags else None,
                ]
            )
        )


@app.command("notebook-list")
def notebook_list(
    ctx: typer.Context,
    show_ctime: Annotated[bool, typer.Option(help="show creation time")] = False,
    show_guid: Annotated[bool, typer.Option(help="show notebook guid")] = False,
    show_mtime: Annotated[bool, typer.Option(help="show modification (update) time")] = False,
) -> None:
    """List notebooks."""
    with _command_errors():
        settings = _load_settings(ctx)
        with contextlib.closing(open_store(settings)) as store:
            context = CommandContext.load(store, notebooks=True)

    for notebook in context.notebooks:
        typer.echo(
            join_columns(
                [
                    f"{notebook.guid:>16}" if show_guid else None,
                    f"[{format_date(notebook.service_created) or '':>19}]" if show_ctime else None,
                    f"[{format_date(notebook.service_updated) or '':>19}]" if show_mtime else None,
                    f"{notebook.name:<64}",
                ]
            )
        )


@app.command()
def show(
    ctx: typer.Context,
    query: Annotated[Optional[str], typer.Option(help=QUERY_HELP)] = None,
    raw: Annotated[bool, typer.Option(help="show the raw note body")] = False,
) -> None:
    """Show the best matching note."""
    with _command_errors():
        settings = _load_settings(ctx)
        with contextlib.closing(open_store(settings)) as store:
            result = fetch_notes(store, NoteSearchRequest(query=query, count=1))
            if not result.notes:
                return
            note = result.notes[0]
            content = store.get_note_content(note.guid)
            if raw:
                typer.echo(content)
                return
            context = CommandContext.load(store, notebooks=True, tags=True)
            user = store.get_user()

    typer.echo(f"Title: {note.title}")
    typer.echo(f'Notebook: {note.notebook_guid} "{context.notebook_name(note.notebook_guid) or ""}"')
    typer.echo(f"Created: {format_date(note.created) or ''}")
    typer.echo(f"Updated: {format_date(note.updated) or ''}")
    link = note_link(
        settings.note_link_url,
        shard_id=user.shard_id,
        user_id=user.id,
        note_guid=note.guid,
    )
    typer.echo(f"NoteLink: {link}")
    typer.echo(f"WebClientURL: {web_client_url(settings.web_client_url, note_guid=note.guid)}")
    for name, value in note.attributes.set_fields():
        typer.echo(f"attribute.{name}: {value!r}")
    typer.echo(f"Tags: {context.tag_names(note.tag_guids)}")
    typer.echo("Content:")
    typer.echo(content.rstrip("\n"))


@app.command("tag-list")
def tag_list(
    ctx: typer.Context,
    depth: Annotated[
        Optional[int], typer.Option(help="depth of hierarchy, implies --tree", min=1)
    ] = None,
    show_guid: Annotated[bool, typer.Option(help="show tag guid")] = False,
    show_parent: Annotated[bool, typer.Option(help="show tag parent")] = False,
    show_parent_guid: Annotated[bool, typer.Option(help="show tag parent guid")] = False,
    show_note_count: Annotated[bool, typer.Option(help="show count of notes with tag")] = False,
    tree: Annotated[bool, typer.Option(help="display tag hierarchy as tree")] = False,
) -> None:
    """List tags, flat or as a hierarchy."""
    as_tree = tree or depth is not None

    with _command_errors():
        settings = _load_settings(ctx)
        with contextlib.closing(open_store(settings)) as store:
            context = CommandContext.load(store, tags=True, tag_counts=show_note_count)

    tags = sorted(context.tags, key=lambda t: t.name.lower())

    if as_tree:
        forest = build_forest(tags)
        orphans = unreachable_ids(forest)
        if orphans:
            logger.warning(f"tags in a parent cycle are not shown: {', '.join(orphans)}")
        options = RenderOptions(
            max_depth=depth,
            show_count=show_note_count,
            counts=context.tag_counts,
        )
        for line in render_forest(forest, options):
            typer.echo(line)
        return

    for tag in tags:
        if show_parent_guid:
            typer.echo(tag.parent_id or "")
        if show_guid:
            typer.echo(tag.id)
        if show_parent:
            typer.echo(context.tag_name(tag.parent_id) or "")
        count = f" ({context.tag_counts.get(tag.id, 0)})" if show_note_count else ""
        typer.echo(f"{tag.name}{count}")
