"""Pipeline step functions: export, dump, and load orchestration"""

import logging
from datetime import datetime
from pathlib import Path
from uuid import UUID

from pydantic import ValidationError
from sqlmodel import Session

from newsdoc.config import Settings
from newsdoc.core.export import write_docx
from newsdoc.core.models import CollectionDoc
from newsdoc.core.utils.slug import export_filename
from newsdoc.crud.collections import load_collection, save_collection
from newsdoc.crud.models import Collection
from newsdoc.errors import MalformedInput, PackagingFailed


logger = logging.getLogger(__name__)


def _load_or_fail(session: Session, collection_id: UUID) -> CollectionDoc:
    collection = load_collection(session, collection_id)
    if collection is None:
        raise ValueError(f"Collection {collection_id} not found")
    return collection


def run_export(
    session: Session,
    collection_id: UUID,
    output_dir: Path,
    settings: Settings,
    generated_at: datetime | None = None,
    ) -> Path:
    """Render a stored collection to output_dir/<slug>.docx. Returns the written path."""
    collection = _load_or_fail(session, collection_id)
    return write_docx(
        collection, output_dir,
        generated_at=generated_at,
        date_format=settings.date_format,
        max_depth=settings.max_depth,
    )


def run_dump(session: Session, collection_id: UUID, output_dir: Path) -> Path:
    """Write a stored collection as indented JSON to output_dir/<slug>.json."""
    collection = _load_or_fail(session, collection_id)
    path = output_dir / export_filename(collection.title, "json")
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(collection.model_dump_json(indent=2), encoding='utf-8')
    except OSError as e:
        logger.error("Failed to write %s: %s", path, e)
        raise PackagingFailed(f"Cannot write {path}: {e}") from e
    logger.info("Dumped collection '%s' to %s", collection.title, path)
    return path


def run_load(session: Session, path: Path) -> tuple[Collection, str]:
    """Read a JSON dump and upsert it. Raises MalformedInput if the file is not a valid collection.

    Returns (collection, 'created'|'updated'). Flushes but does not commit.
    """
    try:
        data = CollectionDoc.model_validate_json(path.read_text(encoding='utf-8'))
    except (ValidationError, UnicodeDecodeError, OSError) as e:
        raise MalformedInput(f"Invalid collection file {path}: {e}") from e
    return save_collection(session, data)
