from __future__ import annotations

from datetime import date
from typing import Sequence

from booklend.core.config import OverlapPolicy
from booklend.domain.types import BorrowStatus
from booklend.models.borrow_request import BorrowRequest
from sqlalchemy import Date, and_, literal, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement


def overlap_clause(
    start_date: date, end_date: date, policy: OverlapPolicy
) -> ColumnElement[bool]:
    if policy is OverlapPolicy.intersection:
        return and_(
            BorrowRequest.start_date <= end_date,
            BorrowRequest.end_date >= start_date,
        )

    # Either endpoint of the new range inside an existing one. A new range
    # that strictly encloses an existing one does not match.
    return or_(
        literal(start_date, Date).between(BorrowRequest.start_date, BorrowRequest.end_date),
        literal(end_date, Date).between(BorrowRequest.start_date, BorrowRequest.end_date),
    )


def find_approved_overlap(
    db: Session,
    *,
    book_id: int,
    start_date: date,
    end_date: date,
    policy: OverlapPolicy,
    exclude_id: int | None = None,
) -> BorrowRequest | None:
    stmt = (
        select(BorrowRequest)
        .where(BorrowRequest.book_id == book_id)
        .where(BorrowRequest.status == BorrowStatus.approved.value)
        .where(overlap_clause(start_date, end_date, policy))
    )
    if exclude_id is not None:
        stmt = stmt.where(BorrowRequest.id != exclude_id)
    return db.execute(stmt.order_by(BorrowRequest.id)).scalars().first()


def add_borrow_request(
    db: Session, *, book_id: int, user_id: int, start_date: date, end_date: date
) -> BorrowRequest:
    req = BorrowRequest(
        book_id=book_id,
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
        status=BorrowStatus.pending.value,
    )
    db.add(req)
    return req


def list_borrow_requests(db: Session) -> Sequence[BorrowRequest]:
    return db.execute(select(BorrowRequest).order_by(BorrowRequest.id)).scalars().all()


def get_borrow_request(
    db: Session, *, request_id: int, for_update: bool = False
) -> BorrowRequest | None:
    stmt = select(BorrowRequest).where(BorrowRequest.id == request_id)
    if for_update:
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalar_one_or_none()
