"""
Favorite-suggestion queries.

Computes the books a user has not favorited yet. The set difference
``AllBooks - FavoritedBy(user)`` runs in the database as a NOT EXISTS anti-join,
so favorites are never pulled into application memory and duplicate favorite
rows could not multiply books in the result.

``suggest_unfavorited_books`` is the seam for ranking/limiting. Today it only
applies an optional limit on top of the base query.
"""
import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy import and_, exists
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.orm import Query, Session
from bookshelf.core.config import settings
from bookshelf.core.exceptions import DataStoreUnavailableError
from bookshelf.models import Book, Favorite
from bookshelf.services.user_service import ensure_user_exists
from bookshelf.utils.timing import time_operation

logger = logging.getLogger(__name__)


def unfavorited_books_query(db: Session, user_id: UUID) -> Query:
    """
    Base query: every Book with no Favorite row for ``user_id``.

    Ordered by title then id so repeated calls and paginated callers see the
    same sequence. Does not check that the user exists.
    """
    favorited = exists().where(
        and_(
            Favorite.book_id == Book.id,
            Favorite.user_id == user_id,
        )
    )
    return db.query(Book).filter(~favorited).order_by(Book.title.asc(), Book.id.asc())


def _run(db: Session, user_id: UUID, limit: Optional[int], label: str) -> List[Book]:
    try:
        ensure_user_exists(db, user_id)
        query = unfavorited_books_query(db, user_id)
        if limit is not None:
            query = query.limit(limit)
        with time_operation(f"{label} user={user_id}"):
            books = query.all()
    except DBAPIError as e:
        # Connectivity failures only; other DB errors propagate unchanged
        if not (isinstance(e, OperationalError) or e.connection_invalidated):
            raise
        logger.error("%s failed for user_id=%s: %s", label, user_id, e)
        raise DataStoreUnavailableError(str(e)) from e

    logger.debug("%s user=%s returned %d books", label, user_id, len(books))
    return books


def unfavorited_books(db: Session, user_id: UUID) -> List[Book]:
    """
    Return every catalog book the user has not favorited.

    Raises:
        UserNotFoundError: user_id does not resolve to a persisted user
        DataStoreUnavailableError: the query could not be executed
    """
    return _run(db, user_id, None, "unfavorited_books")


def suggest_unfavorited_books(db: Session, user_id: UUID, limit: Optional[int] = None) -> List[Book]:
    """
    Suggested books for a user: the unfavorited books, cut to ``limit``.

    ``limit`` falls back to settings.SUGGESTION_LIMIT; when both are None the
    result equals ``unfavorited_books``.
    """
    if limit is None:
        limit = settings.SUGGESTION_LIMIT
    if limit is not None and limit < 1:
        raise ValueError("limit must be a positive integer")
    return _run(db, user_id, limit, "suggest_unfavorited_books")
