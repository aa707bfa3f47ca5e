from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, Enum as SQLEnum, Uuid, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime
import enum
from bookshelf.database import Base

# Bounds for Book.number_page: strictly greater than MIN, at most MAX
MIN_NUMBER_PAGE = 1
MAX_NUMBER_PAGE = 50000


class ReadingStatus(str, enum.Enum):
    READING = "reading"
    FINISHED = "finished"


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships - join rows go away with their user
    favorites = relationship(
        "Favorite",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    readings = relationship(
        "Reading",
        back_populates="user",
        cascade="all, delete-orphan",
    )


class Book(Base):
    __tablename__ = "books"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String, nullable=False, index=True)
    author = Column(String, nullable=False)
    number_page = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    cover_image_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships - join rows go away with their book
    favorites = relationship("Favorite", back_populates="book", cascade="all", passive_deletes=True)
    readings = relationship("Reading", back_populates="book", cascade="all", passive_deletes=True)

    __table_args__ = (
        CheckConstraint(
            f"number_page > {MIN_NUMBER_PAGE} AND number_page <= {MAX_NUMBER_PAGE}",
            name="ck_books_number_page_range",
        ),
    )


class Favorite(Base):
    """A user's explicit marking of a book as favorite. One row per (user, book)."""
    __tablename__ = "favorites"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    book_id = Column(Uuid, ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="favorites")
    book = relationship("Book", back_populates="favorites")

    __table_args__ = (
        UniqueConstraint("user_id", "book_id", name="uq_favorites_user_book"),
    )


class Reading(Base):
    """Reading progress of a user on a book. Latest state only, one row per (user, book)."""
    __tablename__ = "readings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    book_id = Column(Uuid, ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(
        SQLEnum(
            ReadingStatus,
            name="readingstatus",
            values_callable=lambda enum: [e.value for e in enum],
        ),
        nullable=False,
        default=ReadingStatus.READING,
    )
    current_page = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="readings")
    book = relationship("Book", back_populates="readings")

    __table_args__ = (
        UniqueConstraint("user_id", "book_id", name="uq_readings_user_book"),
    )
