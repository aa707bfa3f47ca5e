"""
Domain errors raised by the service layer.

Routers translate these into HTTP responses; services never raise HTTPException.
"""
from uuid import UUID


class UserNotFoundError(Exception):
    """The supplied user reference does not resolve to a persisted user."""

    def __init__(self, user_id: UUID):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class BookNotFoundError(Exception):
    def __init__(self, book_id: UUID):
        self.book_id = book_id
        super().__init__(f"Book {book_id} not found")


class DuplicateEmailError(Exception):
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"A user with email {email} already exists")


class InvalidReadingError(Exception):
    """Reading progress that does not fit the book (e.g. page past the end)."""


class DataStoreUnavailableError(Exception):
    """The underlying query could not be executed (connectivity, timeout)."""
