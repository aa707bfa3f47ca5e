from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
from bookshelf.database import get_db
from bookshelf.core.exceptions import UserNotFoundError, BookNotFoundError, InvalidReadingError
from bookshelf.models import ReadingStatus
from bookshelf.schemas.reading import ReadingUpsert, ReadingResponse
from bookshelf.services import reading_service

router = APIRouter(prefix="/users/{user_id}/readings", tags=["readings"])


@router.put("", response_model=ReadingResponse)
def record_reading(user_id: UUID, payload: ReadingUpsert, db: Session = Depends(get_db)):
    """Create or update reading progress for a book."""
    try:
        return reading_service.record_reading(db, user_id, payload)
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    except BookNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    except InvalidReadingError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("", response_model=List[ReadingResponse])
def get_readings(
    user_id: UUID,
    status_filter: Optional[ReadingStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    try:
        return reading_service.list_readings(db, user_id, status=status_filter)
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
