"""CLI command implementations"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated, List, Optional
from uuid import UUID

import typer
from sqlmodel import Session, SQLModel

from newsdoc.config import Settings, load_config
from newsdoc.core.convert.convert import convert_markup
from newsdoc.core.models import ArticleDoc, AssembledDoc
from newsdoc.core.pipeline import run_dump, run_export, run_load
from newsdoc.core.render import render_docx
from newsdoc.crud.collections import (
    article_counts,
    create_collection,
    delete_article,
    delete_collection,
    get_articles,
    get_collection,
    list_collections,
    reorder_articles,
    save_article,
)
from newsdoc.crud.database import init_db, make_engine
from newsdoc.errors import NewsdocError


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _uuid(value: str, what: str = "collection") -> UUID:
    try:
        return UUID(value)
    except ValueError:
        _fail(f"Invalid {what} id: {value}")


def _engine(settings: Settings):
    engine = make_engine(settings.db_url)
    init_db(engine)
    return engine


def _echo_outline(doc: AssembledDoc) -> None:
    """Print one line per block: kind, level/ordinal, and text."""
    for block in doc:
        label = block.kind.value
        if block.level is not None:
            label += f" {block.level}"
        typer.echo(f"  [{label}] {block.prefix}{block.text}")


def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Curate article collections and export them to Word documents."""
    try:
        level = "DEBUG" if verbose else load_config().log_level
    except ValueError:
        level = "WARNING"
    logging.basicConfig(level=level, format=LOG_FORMAT)


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        SQLModel.metadata.drop_all(engine)
        typer.echo("Existing data cleared.")
    init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def create_cmd(
    title: Annotated[str, typer.Argument(help="Collection title")],
    description: Annotated[Optional[str], typer.Option("--description", help="Optional description")] = None,
    ):
    """Create a new, empty collection and print its id."""
    engine = _engine(_settings())
    with Session(engine) as session:
        collection = create_collection(session, title, description)
        session.commit()
        typer.echo(f"Created collection {collection.id}")


def list_cmd():
    """List collections, most recently updated first."""
    engine = _engine(_settings())
    with Session(engine) as session:
        collections = list_collections(session)
        if not collections:
            typer.echo("No collections found in database.")
            raise typer.Exit(1)
        counts = article_counts(session)
        for c in collections:
            count = counts.get(c.id, 0)
            typer.echo(f"{c.id}  {c.title}  ({count} article(s), updated {c.updated_at:%Y-%m-%d %H:%M})")


def show_cmd(
    collection_id: Annotated[str, typer.Argument(help="Collection id")],
    ):
    """Show a collection and its articles in display order."""
    cid = _uuid(collection_id)
    engine = _engine(_settings())
    with Session(engine) as session:
        collection = get_collection(session, cid)
        if collection is None:
            _fail(f"Collection {cid} not found")
        typer.echo(collection.title)
        if collection.description:
            typer.echo(f"  {collection.description}")
        for a in get_articles(session, cid):
            typer.echo(f"  {a.order_index}: {a.id}  {a.heading}  ({a.author})")


def add_article_cmd(
    collection_id: Annotated[str, typer.Argument(help="Collection id")],
    heading: Annotated[str, typer.Option("--heading", help="Article heading")],
    author: Annotated[str, typer.Option("--author", help="Article author")] = "",
    subheading: Annotated[str, typer.Option("--subheading", help="Article subheading")] = "",
    media_name: Annotated[Optional[str], typer.Option("--media-name", help="Source publication name")] = None,
    media_url: Annotated[Optional[str], typer.Option("--media-url", help="Source URL")] = None,
    date: Annotated[Optional[datetime], typer.Option("--date", help="Article date")] = None,
    body: Annotated[Optional[str], typer.Option("--body", help="Rich-text body markup")] = None,
    body_file: Annotated[Optional[Path], typer.Option("--body-file", help="File containing the body markup")] = None,
    ):
    """Append an article to a collection."""
    cid = _uuid(collection_id)
    if body is not None and body_file is not None:
        _fail("Use either --body or --body-file, not both")
    if body_file is not None:
        try:
            body = body_file.read_text(encoding='utf-8')
        except OSError as e:
            _fail(f"Cannot read {body_file}", e)

    data = ArticleDoc(
        heading=heading, subheading=subheading, author=author,
        media_name=media_name, media_url=media_url, body=body or "",
        date=date or datetime.now(),
    )
    engine = _engine(_settings())
    try:
        with Session(engine) as session:
            article = save_article(session, cid, data)
            session.commit()
            typer.echo(f"Added article {article.id}")
    except ValueError as e:
        _fail(str(e))


def remove_article_cmd(
    collection_id: Annotated[str, typer.Argument(help="Collection id")],
    article_id: Annotated[str, typer.Argument(help="Article id")],
    ):
    """Remove an article from a collection."""
    cid, aid = _uuid(collection_id), _uuid(article_id, "article")
    engine = _engine(_settings())
    with Session(engine) as session:
        if not delete_article(session, cid, aid):
            _fail(f"Article {aid} not found in collection {cid}")
        session.commit()
    typer.echo(f"Removed article {aid}")


def reorder_cmd(
    collection_id: Annotated[str, typer.Argument(help="Collection id")],
    article_ids: Annotated[List[str], typer.Argument(help="All article ids in the new order")],
    ):
    """Reorder a collection's articles."""
    cid = _uuid(collection_id)
    ids = [_uuid(a, "article") for a in article_ids]
    engine = _engine(_settings())
    try:
        with Session(engine) as session:
            reorder_articles(session, cid, ids)
            session.commit()
    except ValueError as e:
        _fail(str(e))
    typer.echo(f"Reordered {len(ids)} article(s)")


def delete_cmd(
    collection_id: Annotated[str, typer.Argument(help="Collection id")],
    ):
    """Delete a collection and all of its articles."""
    cid = _uuid(collection_id)
    engine = _engine(_settings())
    with Session(engine) as session:
        if not delete_collection(session, cid):
            _fail(f"Collection {cid} not found")
        session.commit()
    typer.echo(f"Deleted collection {cid}")


def export_cmd(
    collection_id: Annotated[str, typer.Argument(help="Collection id")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    ):
    """Export a collection to a Word (.docx) document."""
    cid = _uuid(collection_id)
    settings = _settings(overrides={"output_dir": out})
    engine = _engine(settings)
    try:
        with Session(engine) as session:
            path = run_export(session, cid, Path(settings.output_dir), settings)
    except (ValueError, NewsdocError) as e:
        _fail("Export failed", e)
    typer.echo(f"Exported {cid} -> {path}")


def dump_cmd(
    collection_id: Annotated[str, typer.Argument(help="Collection id")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    ):
    """Write a collection as JSON."""
    cid = _uuid(collection_id)
    settings = _settings(overrides={"output_dir": out})
    engine = _engine(settings)
    try:
        with Session(engine) as session:
            path = run_dump(session, cid, Path(settings.output_dir))
    except (ValueError, NewsdocError) as e:
        _fail("Dump failed", e)
    typer.echo(f"Dumped {cid} -> {path}")


def load_cmd(
    path: Annotated[Path, typer.Argument(help="Collection JSON file")],
    ):
    """Create or update a collection from a JSON dump."""
    if not path.is_file():
        _fail(f"File not found: {path}")
    engine = _engine(_settings())
    try:
        with Session(engine) as session:
            collection, status = run_load(session, path)
            session.commit()
            typer.echo(f"  {status}: {collection.id}")
    except (ValueError, NewsdocError) as e:
        _fail("Load failed", e)


def convert_cmd(
    html_file: Annotated[Path, typer.Argument(help="Rich-text markup file")],
    out: Annotated[Optional[Path], typer.Option("--out", help="Write a .docx here instead of printing")] = None,
    ):
    """Convert a standalone rich-text file and print its block outline or write a .docx."""
    settings = _settings()
    try:
        markup = html_file.read_text(encoding='utf-8')
    except OSError as e:
        _fail(f"Cannot read {html_file}", e)
    try:
        doc = convert_markup(markup, settings.max_depth)
        if out is not None:
            render_docx(doc, out)
    except NewsdocError as e:
        _fail("Conversion failed", e)

    if out is None:
        _echo_outline(doc)
        typer.echo(f"{len(doc)} block(s)")
    else:
        typer.echo(f"Wrote {len(doc)} block(s) to {out}")
