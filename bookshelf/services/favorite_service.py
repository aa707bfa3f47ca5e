"""
Favorite bookkeeping for users.

Favorites are unique per (user, book); adding an existing pair is a no-op that
returns the stored row.
"""
import logging
from typing import List, Tuple
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from bookshelf.models import Book, Favorite
from bookshelf.services.catalog_service import get_book
from bookshelf.services.user_service import ensure_user_exists

logger = logging.getLogger(__name__)


def _find_favorite(db: Session, user_id: UUID, book_id: UUID):
    return db.query(Favorite).filter(
        Favorite.user_id == user_id,
        Favorite.book_id == book_id,
    ).first()


def add_favorite(db: Session, user_id: UUID, book_id: UUID) -> Tuple[Favorite, bool]:
    """
    Mark a book as favorite for a user.

    Returns:
        (favorite, created) where created is False if the pair already existed

    Raises:
        UserNotFoundError, BookNotFoundError
    """
    ensure_user_exists(db, user_id)
    get_book(db, book_id)

    existing = _find_favorite(db, user_id, book_id)
    if existing:
        logger.debug("Favorite already present: user_id=%s, book_id=%s", user_id, book_id)
        return existing, False

    favorite = Favorite(user_id=user_id, book_id=book_id)
    db.add(favorite)
    try:
        db.commit()
    except IntegrityError:
        # Race: the same pair was inserted between check and insert
        db.rollback()
        existing = _find_favorite(db, user_id, book_id)
        if existing is None:
            raise
        logger.debug("Duplicate favorite (race condition): user_id=%s, book_id=%s", user_id, book_id)
        return existing, False

    db.refresh(favorite)
    logger.info("Favorite added: user_id=%s, book_id=%s", user_id, book_id)
    return favorite, True


def remove_favorite(db: Session, user_id: UUID, book_id: UUID) -> bool:
    """Remove a favorite. Returns False if the user had not favorited the book."""
    ensure_user_exists(db, user_id)

    favorite = _find_favorite(db, user_id, book_id)
    if favorite is None:
        return False

    db.delete(favorite)
    db.commit()
    logger.info("Favorite removed: user_id=%s, book_id=%s", user_id, book_id)
    return True


def list_favorite_books(db: Session, user_id: UUID) -> List[Book]:
    ensure_user_exists(db, user_id)
    return (
        db.query(Book)
        .join(Favorite, Favorite.book_id == Book.id)
        .filter(Favorite.user_id == user_id)
        .order_by(Book.title.asc(), Book.id.asc())
        .all()
    )
