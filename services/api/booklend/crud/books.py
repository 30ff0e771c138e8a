from __future__ import annotations

from typing import Sequence

from booklend.models.book import Book
from sqlalchemy import select
from sqlalchemy.orm import Session


def list_books(db: Session) -> Sequence[Book]:
    return db.execute(select(Book).order_by(Book.id)).scalars().all()


def lock_book(db: Session, *, book_id: int) -> Book | None:
    """Load a book with a row lock held until the current transaction ends.

    Dialects without FOR UPDATE (SQLite) ignore the lock clause.
    """
    return db.execute(
        select(Book).where(Book.id == book_id).with_for_update()
    ).scalar_one_or_none()
