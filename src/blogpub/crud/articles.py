"""Article persistence: create, fetch, paginated listing, update, delete"""

from datetime import datetime

from loguru import logger
from sqlalchemy import func
from sqlmodel import Session, select

from blogpub.core.models import ArticlePayload
from blogpub.core.utils.hashing import content_hash
from blogpub.crud.models import ArticleRow


SORT_COLUMNS = ('id', 'title', 'author_name', 'created_at', 'updated_at')
SORT_ORDERS = ('ASC', 'DESC')


def get_article(session: Session, article_id: int) -> ArticleRow | None:
    """Return the article with the given id, or None if not found."""
    return session.get(ArticleRow, article_id)


def list_articles(
    session: Session,
    page: int = 1,
    limit: int = 10,
    author: str | None = None,
    sort_by: str = 'created_at',
    order: str = 'DESC',
    ) -> tuple[list[ArticleRow], int]:
    """Return (rows, total_count) for one page of articles.

    author filters by case-insensitive substring. Unknown sort_by or order
    values fall back to created_at DESC.
    """
    stmt = select(ArticleRow)
    count_stmt = select(func.count()).select_from(ArticleRow)
    if author:
        stmt = stmt.where(ArticleRow.author_name.ilike(f"%{author}%"))
        count_stmt = count_stmt.where(ArticleRow.author_name.ilike(f"%{author}%"))

    if sort_by in SORT_COLUMNS and order.upper() in SORT_ORDERS:
        column = getattr(ArticleRow, sort_by)
        stmt = stmt.order_by(column.asc() if order.upper() == 'ASC' else column.desc())
    else:
        stmt = stmt.order_by(ArticleRow.created_at.desc())

    page, limit = max(1, page), max(1, limit)
    rows = list(session.exec(stmt.offset((page - 1) * limit).limit(limit)).all())
    total = session.exec(count_stmt).one()
    return rows, total


def create_article(session: Session, payload: ArticlePayload) -> ArticleRow:
    """Insert a new article. Flushes but does not commit."""
    row = ArticleRow(
        title=payload.title.strip(),
        author_name=payload.author_name.strip(),
        content=payload.content,
        status=payload.status,
        excerpt=payload.excerpt,
        tags=payload.tags,
        reading_time=payload.reading_time,
        content_hash=content_hash(payload.content),
    )
    session.add(row)
    session.flush()
    logger.info("Created article {} ({!r}, {})", row.id, row.title, row.status.value)
    return row


def update_article(
    session: Session,
    row: ArticleRow,
    payload: ArticlePayload,
    ) -> tuple[ArticleRow, str]:
    """Overwrite an article with payload; last writer wins.

    Returns (row, status) where status is 'updated' or 'unchanged'; an identical
    payload (same content hash and metadata) leaves the row untouched.
    Flushes but does not commit; the caller controls the transaction.
    """
    new_hash = content_hash(payload.content)
    fields = {
        'title': payload.title.strip(),
        'author_name': payload.author_name.strip(),
        'status': payload.status,
        'excerpt': payload.excerpt,
        'tags': payload.tags,
        'reading_time': payload.reading_time,
    }
    if row.content_hash == new_hash and all(getattr(row, k) == v for k, v in fields.items()):
        return row, 'unchanged'

    for key, value in fields.items():
        setattr(row, key, value)
    row.content = payload.content
    row.content_hash = new_hash
    row.updated_at = datetime.now()
    session.add(row)
    session.flush()
    logger.info("Updated article {} ({!r}, {})", row.id, row.title, row.status.value)
    return row, 'updated'


def delete_article(session: Session, article_id: int) -> ArticleRow | None:
    """Delete an article. Returns the deleted row, or None if not found."""
    row = session.get(ArticleRow, article_id)
    if row is None:
        return None
    session.delete(row)
    session.flush()
    logger.info("Deleted article {}", article_id)
    return row
