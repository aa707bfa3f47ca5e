"""
Endpoints over the favorite-suggestion queries.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import logging
from bookshelf.database import get_db
from bookshelf.core.exceptions import UserNotFoundError
from bookshelf.schemas.book import BookResponse
from bookshelf.services import suggestion_engine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/{user_id}/books", tags=["suggestions"])


@router.get("/unfavorited", response_model=List[BookResponse])
def get_unfavorited_books(user_id: UUID, db: Session = Depends(get_db)):
    """Every catalog book the user has not favorited."""
    try:
        return suggestion_engine.unfavorited_books(db, user_id)
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


@router.get("/suggestions", response_model=List[BookResponse])
def get_suggested_books(
    user_id: UUID,
    limit: Optional[int] = Query(None, ge=1, le=500, description="Maximum number of suggestions"),
    db: Session = Depends(get_db),
):
    try:
        books = suggestion_engine.suggest_unfavorited_books(db, user_id, limit=limit)
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    logger.info("Suggested %d books for user %s (limit=%s)", len(books), user_id, limit)
    return books
