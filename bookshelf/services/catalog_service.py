"""
Catalog write and read path for books.

Writes take an already validated BookCreate; the schema is where title, author
and number_page rules live.
"""
import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy import or_
from sqlalchemy.orm import Session
from bookshelf.core.exceptions import BookNotFoundError
from bookshelf.models import Book
from bookshelf.schemas.book import BookCreate

logger = logging.getLogger(__name__)


def create_book(db: Session, data: BookCreate) -> Book:
    book = Book(**data.model_dump())
    db.add(book)
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Failed to create book title=%r", data.title, exc_info=True)
        raise
    db.refresh(book)
    logger.info("Created book_id=%s title=%r", book.id, book.title)
    return book


def get_book(db: Session, book_id: UUID) -> Book:
    book = db.get(Book, book_id)
    if book is None:
        raise BookNotFoundError(book_id)
    return book


def find_book(db: Session, title: str, author: str) -> Optional[Book]:
    """Exact title + author match, used to keep seeding idempotent."""
    return db.query(Book).filter(Book.title == title, Book.author == author).first()


def list_books(
    db: Session,
    q: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> List[Book]:
    """List books ordered by title, optionally filtered by a case-insensitive title/author search."""
    query = db.query(Book)

    if q:
        qq = f"%{q.strip()}%"
        query = query.filter(
            or_(
                Book.title.ilike(qq),
                Book.author.ilike(qq),
            )
        )

    return query.order_by(Book.title.asc(), Book.id.asc()).offset(offset).limit(limit).all()
