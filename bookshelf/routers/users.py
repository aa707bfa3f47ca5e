from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from uuid import UUID
from bookshelf.database import get_db
from bookshelf.core.exceptions import UserNotFoundError, DuplicateEmailError
from bookshelf.schemas.user import UserCreate, UserResponse
from bookshelf.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


def _user_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="User not found",
    )


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    try:
        return user_service.create_user(db, payload)
    except DuplicateEmailError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="email_already_registered",
        )


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: UUID, db: Session = Depends(get_db)):
    try:
        return user_service.get_user(db, user_id)
    except UserNotFoundError:
        raise _user_not_found()


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: UUID, db: Session = Depends(get_db)):
    """Delete a user and, with it, all of its favorites and readings."""
    try:
        user_service.delete_user(db, user_id)
    except UserNotFoundError:
        raise _user_not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
