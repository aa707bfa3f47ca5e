from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID
from bookshelf.models import ReadingStatus


class ReadingUpsert(BaseModel):
    book_id: UUID
    status: ReadingStatus = ReadingStatus.READING
    current_page: Optional[int] = Field(None, ge=0)


class ReadingResponse(BaseModel):
    id: UUID
    user_id: UUID
    book_id: UUID
    status: ReadingStatus
    current_page: Optional[int]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
