from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID
from bookshelf.database import get_db
from bookshelf.core.exceptions import UserNotFoundError, BookNotFoundError
from bookshelf.schemas.book import BookResponse
from bookshelf.schemas.favorite import FavoriteCreate, FavoriteResponse
from bookshelf.services import favorite_service

router = APIRouter(prefix="/users/{user_id}/favorites", tags=["favorites"])


@router.get("", response_model=List[BookResponse])
def get_favorite_books(user_id: UUID, db: Session = Depends(get_db)):
    try:
        return favorite_service.list_favorite_books(db, user_id)
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


@router.post("", response_model=FavoriteResponse, status_code=status.HTTP_201_CREATED)
def add_favorite(
    user_id: UUID,
    payload: FavoriteCreate,
    response: Response,
    db: Session = Depends(get_db),
):
    """Favorite a book. Answers 200 instead of 201 when it was already a favorite."""
    try:
        favorite, created = favorite_service.add_favorite(db, user_id, payload.book_id)
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    except BookNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")

    if not created:
        response.status_code = status.HTTP_200_OK
    return favorite


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_favorite(user_id: UUID, book_id: UUID, db: Session = Depends(get_db)):
    try:
        removed = favorite_service.remove_favorite(db, user_id, book_id)
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Favorite not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
