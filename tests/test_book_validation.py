"""Tests for the catalog write path rules on title, author and number_page."""
import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookshelf.core.config import settings
from bookshelf.models import Book
from bookshelf.schemas.book import BookCreate


def _valid_fields(**overrides) -> dict:
    fields = {"title": "The Name of the Rose", "author": "Umberto Eco", "number_page": 512}
    fields.update(overrides)
    return fields


def _errors_for(exc: ValidationError, field: str) -> list[dict]:
    return [e for e in exc.errors() if e["loc"] == (field,)]


def test_valid_book_is_accepted():
    book = BookCreate(**_valid_fields())
    assert book.title == "The Name of the Rose"
    assert book.number_page == 512


def test_title_missing_is_rejected():
    fields = _valid_fields()
    del fields["title"]
    with pytest.raises(ValidationError) as exc_info:
        BookCreate(**fields)
    errors = _errors_for(exc_info.value, "title")
    assert errors
    assert errors[0]["type"] == "missing"


def test_title_none_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        BookCreate(**_valid_fields(title=None))
    assert _errors_for(exc_info.value, "title")


@pytest.mark.parametrize("blank", ["", "   "])
def test_blank_title_is_rejected(blank):
    with pytest.raises(ValidationError) as exc_info:
        BookCreate(**_valid_fields(title=blank))
    errors = _errors_for(exc_info.value, "title")
    assert any("can't be blank" in e["msg"] for e in errors)


def test_title_is_stripped():
    book = BookCreate(**_valid_fields(title="  Emma  "))
    assert book.title == "Emma"


def test_short_title_allowed_when_no_minimum_configured(monkeypatch):
    monkeypatch.setattr(settings, "BOOK_MIN_TITLE_LENGTH", None)
    book = BookCreate(**_valid_fields(title="It"))
    assert book.title == "It"


def test_title_shorter_than_configured_minimum_is_rejected(monkeypatch):
    monkeypatch.setattr(settings, "BOOK_MIN_TITLE_LENGTH", 6)
    with pytest.raises(ValidationError) as exc_info:
        BookCreate(**_valid_fields(title="lorem"))
    errors = _errors_for(exc_info.value, "title")
    assert any("Title must be at least 6 characters" in e["msg"] for e in errors)


def test_title_at_configured_minimum_is_accepted(monkeypatch):
    monkeypatch.setattr(settings, "BOOK_MIN_TITLE_LENGTH", 6)
    book = BookCreate(**_valid_fields(title="Ulysse"))
    assert book.title == "Ulysse"


def test_author_missing_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        BookCreate(**_valid_fields(author=None))
    assert _errors_for(exc_info.value, "author")


def test_blank_author_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        BookCreate(**_valid_fields(author=" "))
    errors = _errors_for(exc_info.value, "author")
    assert any("can't be blank" in e["msg"] for e in errors)


def test_number_page_missing_is_rejected():
    fields = _valid_fields()
    del fields["number_page"]
    with pytest.raises(ValidationError) as exc_info:
        BookCreate(**fields)
    errors = _errors_for(exc_info.value, "number_page")
    assert errors[0]["type"] == "missing"


def test_number_page_text_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        BookCreate(**_valid_fields(number_page="text"))
    errors = _errors_for(exc_info.value, "number_page")
    assert errors[0]["type"] == "int_parsing"


def test_number_page_of_one_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        BookCreate(**_valid_fields(number_page=1))
    errors = _errors_for(exc_info.value, "number_page")
    assert errors[0]["type"] == "greater_than"
    assert "greater than 1" in errors[0]["msg"]


def test_number_page_above_maximum_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        BookCreate(**_valid_fields(number_page=50001))
    errors = _errors_for(exc_info.value, "number_page")
    assert errors[0]["type"] == "less_than_equal"
    assert "less than or equal to 50000" in errors[0]["msg"]


@pytest.mark.parametrize("pages", [2, 50000])
def test_number_page_bounds_are_accepted(pages):
    assert BookCreate(**_valid_fields(number_page=pages)).number_page == pages


def test_database_rejects_out_of_range_number_page(db: Session):
    """The check constraint still holds for rows written around the schema."""
    db.add(Book(title="Too Thin", author="Nobody", number_page=1))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()
