"""
User lookup, creation and cascading deletion.
"""
import logging
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from bookshelf.core.exceptions import UserNotFoundError, DuplicateEmailError
from bookshelf.models import User
from bookshelf.schemas.user import UserCreate

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: UUID) -> User:
    """Load a persisted user by id or raise UserNotFoundError."""
    user = db.get(User, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


def ensure_user_exists(db: Session, user_id: UUID) -> None:
    """Cheaper variant of get_user for read paths that only need the precondition."""
    found = db.query(User.id).filter(User.id == user_id).first()
    if found is None:
        raise UserNotFoundError(user_id)


def create_user(db: Session, data: UserCreate) -> User:
    normalized_email = data.email.lower().strip()

    existing = db.query(User).filter(func.lower(User.email) == normalized_email).first()
    if existing:
        raise DuplicateEmailError(normalized_email)

    user = User(email=normalized_email, name=data.name)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent insert of the same email
        db.rollback()
        raise DuplicateEmailError(normalized_email)
    db.refresh(user)
    logger.info("Created user_id=%s", user.id)
    return user


def delete_user(db: Session, user_id: UUID) -> None:
    """
    Delete a user together with all of its favorites and readings.

    The ORM cascade deletes the join rows in the same flush as the user, and the
    foreign keys carry ON DELETE CASCADE for rows the session never loaded. Either
    everything goes or, on failure, nothing does.
    """
    user = get_user(db, user_id)
    favorites_count = len(user.favorites)
    readings_count = len(user.readings)
    try:
        db.delete(user)
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Failed to delete user_id=%s", user_id, exc_info=True)
        raise
    logger.info(
        "Deleted user_id=%s with %d favorites and %d readings",
        user_id,
        favorites_count,
        readings_count,
    )
