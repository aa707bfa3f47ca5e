from fastapi import APIRouter, Depends, Query, HTTPException, status
from sqlalchemy.orm import Session
from typing import Optional, List
from uuid import UUID
import logging
from bookshelf.database import get_db
from bookshelf.core.exceptions import BookNotFoundError
from bookshelf.schemas.book import BookResponse, BookCreate
from bookshelf.services import catalog_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["books"])


@router.get("", response_model=List[BookResponse])
def get_books(
    q: Optional[str] = Query(None, description="Search in title or author"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """Get paginated list of books, ordered by title."""
    books = catalog_service.list_books(db, q=q, limit=limit, offset=offset)
    logger.info("Fetched %d books (q=%r, limit=%d, offset=%d)", len(books), q, limit, offset)
    return books


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
def create_book(payload: BookCreate, db: Session = Depends(get_db)):
    """Add a book to the catalog. Validation failures surface as 422."""
    return catalog_service.create_book(db, payload)


@router.get("/{book_id}", response_model=BookResponse)
def get_book(book_id: UUID, db: Session = Depends(get_db)):
    try:
        return catalog_service.get_book(db, book_id)
    except BookNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Book not found",
        )
