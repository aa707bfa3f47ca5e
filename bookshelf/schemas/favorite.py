from pydantic import BaseModel
from datetime import datetime
from uuid import UUID


class FavoriteCreate(BaseModel):
    book_id: UUID


class FavoriteResponse(BaseModel):
    id: UUID
    user_id: UUID
    book_id: UUID
    created_at: datetime

    class Config:
        from_attributes = True
