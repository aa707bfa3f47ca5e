"""
Seed the book catalog from one or more JSON files.

Every record goes through BookCreate, so rows breaking the catalog rules
(blank title/author, number_page out of range) are skipped, not inserted.

Usage examples:

  # Default: seed the bundled sample catalog
  python -m bookshelf.scripts.seed_books

  # Seed specific files
  python -m bookshelf.scripts.seed_books --file books_a.json --file books_b.json
"""

import argparse
import json
import logging
from pathlib import Path
from datetime import datetime

from pydantic import ValidationError
from sqlalchemy.orm import Session

from bookshelf.database import SessionLocal, init_db
from bookshelf.schemas.book import BookCreate
from bookshelf.services.catalog_service import find_book
from bookshelf import models

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_FILE = BASE_DIR / "data" / "books_seed.json"


def _load_books_from_file(path: Path) -> list[dict]:
    """Load a single JSON file of books, or return empty if file missing."""
    if not path.exists():
        print(f"[seed_books] File not found, skipping: {path}")
        return []

    print(f"[seed_books] Loading books from: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Expected list of books in {path}, got {type(data)}")

    return data


def seed_books(db: Session, files: list[Path]) -> dict:
    """
    Insert or refresh books from JSON files. Idempotent on (title, author).

    Returns:
        Counts as {"created": int, "updated": int, "skipped": int}
    """
    raw_books: list[dict] = []
    for path in files:
        raw_books.extend(_load_books_from_file(path))

    created = 0
    updated = 0
    skipped = 0

    for raw in raw_books:
        try:
            data = BookCreate(**raw)
        except (ValidationError, TypeError) as e:
            logger.warning("Skipping invalid book record %r: %s", raw.get("title") if isinstance(raw, dict) else raw, e)
            skipped += 1
            continue

        existing = find_book(db, data.title, data.author)
        if existing:
            existing.number_page = data.number_page
            existing.description = data.description
            existing.cover_image_url = data.cover_image_url
            existing.updated_at = datetime.utcnow()
            updated += 1
            continue

        db.add(models.Book(**data.model_dump()))
        # Flush so a duplicate later in the same batch is found by find_book
        db.flush()
        created += 1

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    return {"created": created, "updated": updated, "skipped": skipped}


def main():
    parser = argparse.ArgumentParser(
        description="Seed the bookshelf catalog from JSON files."
    )
    parser.add_argument(
        "--file",
        "-f",
        action="append",
        dest="files",
        help=(
            "Path to a JSON file of books. "
            "Can be specified multiple times. "
            "If omitted, uses the bundled sample catalog."
        ),
    )

    args = parser.parse_args()
    files = [Path(f).resolve() for f in args.files] if args.files else [DEFAULT_FILE]

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    init_db()

    db = SessionLocal()
    try:
        counts = seed_books(db, files)
    finally:
        db.close()

    print(
        f"[seed_books] Seed complete. Created={counts['created']}, "
        f"Updated={counts['updated']}, Skipped={counts['skipped']}"
    )


if __name__ == "__main__":
    main()
