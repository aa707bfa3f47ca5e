from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID
from bookshelf.core.config import settings
from bookshelf.models import MIN_NUMBER_PAGE, MAX_NUMBER_PAGE

BLANK_MESSAGE = "can't be blank"


class BookCreate(BaseModel):
    """
    Catalog write payload. Every Book reaches the database through this schema,
    so the suggestion queries only ever read well-formed rows.
    """
    title: str
    author: str
    number_page: int = Field(..., gt=MIN_NUMBER_PAGE, le=MAX_NUMBER_PAGE)
    description: Optional[str] = None
    cover_image_url: Optional[str] = None

    @field_validator("title", "author")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError(BLANK_MESSAGE)
        return value

    @field_validator("title")
    @classmethod
    def title_min_length(cls, value: str) -> str:
        # Read at validation time so a changed setting applies immediately
        min_length = settings.BOOK_MIN_TITLE_LENGTH
        if min_length and len(value) < min_length:
            raise ValueError(f"Title must be at least {min_length} characters")
        return value


class BookResponse(BaseModel):
    id: UUID
    title: str
    author: str
    number_page: int
    description: Optional[str]
    cover_image_url: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
