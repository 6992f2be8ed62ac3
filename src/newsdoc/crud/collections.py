"""Collection and article persistence: upsert, ordering, lookup, and deletion"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import func
from sqlmodel import Session, select

from newsdoc.core.models import ArticleDoc, CollectionDoc
from newsdoc.crud.models import Article, Collection


logger = logging.getLogger(__name__)


def _touch(session: Session, collection: Collection) -> None:
    collection.updated_at = datetime.now()
    session.add(collection)


def _apply_article(row: Article, data: ArticleDoc) -> Article:
    """Copy editable article fields from the exchange model onto a table row."""
    row.heading = data.heading
    row.subheading = data.subheading
    row.media_name = data.media_name or None
    row.media_url = data.media_url or None
    row.author = data.author
    row.body = data.body
    row.date = data.date
    row.updated_at = datetime.now()
    return row


def _require_collection(session: Session, collection_id: UUID) -> Collection:
    collection = session.get(Collection, collection_id)
    if collection is None:
        raise ValueError(f"Collection {collection_id} not found")
    return collection


def create_collection(session: Session, title: str, description: str | None = None) -> Collection:
    """Insert a new, empty collection."""
    collection = Collection(title=title, description=description or None)
    session.add(collection)
    session.flush()
    logger.info("Created collection %s (%s)", collection.id, title)
    return collection


def get_collection(session: Session, collection_id: UUID) -> Collection | None:
    """Return the Collection with the given id, or None if not found."""
    return session.get(Collection, collection_id)


def list_collections(session: Session) -> list[Collection]:
    """Return all collections, most recently updated first."""
    return list(session.exec(select(Collection).order_by(Collection.updated_at.desc())).all())


def get_articles(session: Session, collection_id: UUID) -> list[Article]:
    """Return a collection's articles in display order."""
    return list(
        session.exec(
            select(Article)
            .where(Article.collection_id == collection_id)
            .order_by(Article.order_index.asc())
        ).all()
    )


def article_counts(session: Session) -> dict[UUID, int]:
    """Return the number of articles per collection id; empty collections are absent."""
    rows = session.exec(
        select(Article.collection_id, func.count()).group_by(Article.collection_id)
    ).all()
    return {collection_id: count for collection_id, count in rows}


def save_collection(session: Session, data: CollectionDoc) -> tuple[Collection, str]:
    """Upsert a collection and replace its article list.

    Articles are matched by id: existing rows are updated, new ones inserted,
    and rows missing from data.articles are deleted. order_index is renumbered
    0..n-1 following the list order. Returns (collection, 'created'|'updated').
    Raises ValueError if an article id already belongs to another collection.
    Flushes but does not commit; the caller controls the transaction.
    """
    for article in data.articles:
        row = session.get(Article, article.id)
        if row is not None and row.collection_id != data.id:
            raise ValueError(f"Article {article.id} belongs to another collection")

    collection = session.get(Collection, data.id)
    status = 'updated' if collection else 'created'
    if collection is None:
        collection = Collection(id=data.id, title=data.title, created_at=data.created_at)
    collection.title = data.title
    collection.description = data.description or None
    _touch(session, collection)
    session.flush()

    existing = {a.id: a for a in get_articles(session, collection.id)}
    for position, article in enumerate(data.articles):
        row = existing.pop(article.id, None) or Article(id=article.id, collection_id=collection.id)
        _apply_article(row, article)
        row.order_index = position
        session.add(row)
    for stale in existing.values():
        session.delete(stale)
    session.flush()

    logger.info("Saved collection %s (%s, %d article(s))", collection.id, status, len(data.articles))
    return collection, status


def save_article(session: Session, collection_id: UUID, data: ArticleDoc) -> Article:
    """Upsert one article; without an explicit order a new article is appended.

    Raises ValueError if the collection is missing or the article belongs to another collection.
    """
    collection = _require_collection(session, collection_id)
    row = session.get(Article, data.id)
    if row is not None and row.collection_id != collection_id:
        raise ValueError(f"Article {data.id} belongs to another collection")

    if row is None:
        last = session.exec(
            select(func.max(Article.order_index)).where(Article.collection_id == collection_id)
        ).one()
        row = Article(id=data.id, collection_id=collection_id, order_index=0 if last is None else last + 1)
    _apply_article(row, data)
    if data.order is not None:
        row.order_index = data.order
    session.add(row)
    _touch(session, collection)
    session.flush()
    logger.info("Saved article %s in collection %s", row.id, collection_id)
    return row


def delete_article(session: Session, collection_id: UUID, article_id: UUID) -> bool:
    """Delete an article from a collection. Returns False if it does not exist there."""
    row = session.get(Article, article_id)
    if row is None or row.collection_id != collection_id:
        return False
    session.delete(row)
    collection = session.get(Collection, collection_id)
    if collection is not None:
        _touch(session, collection)
    session.flush()
    logger.info("Deleted article %s from collection %s", article_id, collection_id)
    return True


def reorder_articles(session: Session, collection_id: UUID, article_ids: list[UUID]) -> list[Article]:
    """Set each article's order_index to its position in article_ids.

    article_ids must be a permutation of the collection's article ids; raises ValueError otherwise.
    """
    collection = _require_collection(session, collection_id)
    rows = {a.id: a for a in get_articles(session, collection_id)}
    if len(article_ids) != len(set(article_ids)) or set(article_ids) != set(rows):
        raise ValueError(f"Article ids do not match the articles of collection {collection_id}")

    for position, article_id in enumerate(article_ids):
        rows[article_id].order_index = position
        session.add(rows[article_id])
    _touch(session, collection)
    session.flush()
    return [rows[i] for i in article_ids]


def delete_collection(session: Session, collection_id: UUID) -> bool:
    """Delete a collection and all its articles. Returns False if it does not exist."""
    collection = session.get(Collection, collection_id)
    if collection is None:
        return False
    for row in get_articles(session, collection_id):
        session.delete(row)
    session.flush()
    session.delete(collection)
    session.flush()
    logger.info("Deleted collection %s", collection_id)
    return True


def load_collection(session: Session, collection_id: UUID) -> CollectionDoc | None:
    """Return the collection with its articles in display order as a CollectionDoc, or None."""
    collection = session.get(Collection, collection_id)
    if collection is None:
        return None
    articles = [
        ArticleDoc(
            id=a.id,
            heading=a.heading,
            subheading=a.subheading,
            media_name=a.media_name,
            media_url=a.media_url,
            author=a.author,
            body=a.body,
            date=a.date,
            order=a.order_index,
        )
        for a in get_articles(session, collection_id)
    ]
    return CollectionDoc(
        id=collection.id,
        title=collection.title,
        description=collection.description,
        articles=articles,
        created_at=collection.created_at,
        updated_at=collection.updated_at,
    )
