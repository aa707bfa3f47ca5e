"""Tests for the catalog seed script."""
import json
from pathlib import Path
from sqlalchemy.orm import Session

from bookshelf.models import Book
from bookshelf.scripts.seed_books import DEFAULT_FILE, seed_books


def _write(tmp_path: Path, records: list) -> Path:
    path = tmp_path / "books.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def test_seed_skips_invalid_records(db: Session, tmp_path):
    path = _write(tmp_path, [
        {"title": "Walden", "author": "Henry David Thoreau", "number_page": 352},
        {"title": "", "author": "Nobody", "number_page": 10},
        {"title": "Pamphlet", "author": "Nobody", "number_page": 1},
        {"title": "Encyclopedia", "author": "Everybody", "number_page": 50001},
    ])

    counts = seed_books(db, [path])

    assert counts == {"created": 1, "updated": 0, "skipped": 3}
    assert [b.title for b in db.query(Book).all()] == ["Walden"]


def test_seed_is_idempotent(db: Session, tmp_path):
    path = _write(tmp_path, [{"title": "Walden", "author": "Henry David Thoreau", "number_page": 352}])
    seed_books(db, [path])

    path = _write(tmp_path, [{"title": "Walden", "author": "Henry David Thoreau", "number_page": 360}])
    counts = seed_books(db, [path])

    assert counts == {"created": 0, "updated": 1, "skipped": 0}
    books = db.query(Book).all()
    assert len(books) == 1
    assert books[0].number_page == 360


def test_missing_file_is_skipped(db: Session, tmp_path):
    counts = seed_books(db, [tmp_path / "nope.json"])
    assert counts == {"created": 0, "updated": 0, "skipped": 0}


def test_bundled_catalog_is_valid(db: Session):
    counts = seed_books(db, [DEFAULT_FILE])
    assert counts["skipped"] == 0
    assert counts["created"] == db.query(Book).count() > 0
