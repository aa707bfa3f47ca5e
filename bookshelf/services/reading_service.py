import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from bookshelf.core.exceptions import InvalidReadingError
from bookshelf.models import Reading, ReadingStatus
from bookshelf.schemas.reading import ReadingUpsert
from bookshelf.services.catalog_service import get_book
from bookshelf.services.user_service import ensure_user_exists

logger = logging.getLogger(__name__)


def _find_reading(db: Session, user_id: UUID, book_id: UUID) -> Optional[Reading]:
    return db.query(Reading).filter(
        Reading.user_id == user_id,
        Reading.book_id == book_id,
    ).first()


def _apply(reading: Reading, data: ReadingUpsert) -> None:
    reading.status = data.status
    reading.current_page = data.current_page
    reading.updated_at = datetime.utcnow()


def record_reading(db: Session, user_id: UUID, data: ReadingUpsert) -> Reading:
    """Create or update the reading record of a user for a book."""
    ensure_user_exists(db, user_id)
    book = get_book(db, data.book_id)

    if data.current_page is not None and data.current_page > book.number_page:
        raise InvalidReadingError(
            f"current_page {data.current_page} is past the last page ({book.number_page})"
        )

    reading = _find_reading(db, user_id, data.book_id)
    if reading:
        _apply(reading, data)
    else:
        reading = Reading(
            user_id=user_id,
            book_id=data.book_id,
            status=data.status,
            current_page=data.current_page,
        )
        db.add(reading)

    try:
        try:
            db.commit()
        except IntegrityError:
            # Race: the same (user, book) was inserted between check and insert
            db.rollback()
            reading = _find_reading(db, user_id, data.book_id)
            if reading is None:
                raise
            logger.debug("Duplicate reading (race condition): user_id=%s, book_id=%s", user_id, data.book_id)
            _apply(reading, data)
            db.commit()
    except Exception:
        db.rollback()
        logger.error("Failed to record reading: user_id=%s, book_id=%s", user_id, data.book_id, exc_info=True)
        raise
    db.refresh(reading)
    return reading


def list_readings(db: Session, user_id: UUID, status: Optional[ReadingStatus] = None) -> List[Reading]:
    ensure_user_exists(db, user_id)
    query = db.query(Reading).filter(Reading.user_id == user_id)
    if status is not None:
        query = query.filter(Reading.status == status)
    return query.order_by(Reading.updated_at.desc()).all()
