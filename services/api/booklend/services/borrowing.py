from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from booklend.core.config import OverlapPolicy
from booklend.crud.books import lock_book
from booklend.crud.borrow_requests import (
    add_borrow_request,
    find_approved_overlap,
    get_borrow_request,
    list_borrow_requests,
)
from booklend.domain.types import BorrowStatus
from booklend.models.borrow_request import BorrowRequest
from booklend.models.user import User
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class BorrowError(Exception):
    pass


class BookNotFoundError(BorrowError):
    pass


class RequestNotFoundError(BorrowError):
    pass


class BorrowConflictError(BorrowError):
    def __init__(self, conflicting_id: int):
        super().__init__("Book already borrowed during the selected period")
        self.conflicting_id = conflicting_id


class WriteRejectedError(BorrowError):
    """The store refused the write (constraint violation)."""


class StorageUnavailableError(BorrowError):
    """The store failed for reasons unrelated to the request contents."""


def _commit(db: Session, req: BorrowRequest, what: str) -> None:
    try:
        db.commit()
        db.refresh(req)
    except IntegrityError as e:
        db.rollback()
        logger.warning("%s rejected by store: %s", what, e.orig)
        raise WriteRejectedError(f"Error {what}") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("%s failed", what)
        raise StorageUnavailableError(f"Error {what}") from e


def submit_request(
    db: Session,
    *,
    book_id: int,
    requester: User,
    start_date: date,
    end_date: date,
    policy: OverlapPolicy = OverlapPolicy.endpoints,
) -> BorrowRequest:
    """Record a Pending borrow request unless an Approved one overlaps.

    The book row lock, the overlap query and the insert run in one
    transaction, so concurrent submissions for the same book serialize on
    the lock instead of both passing the check.
    """
    try:
        book = lock_book(db, book_id=book_id)
        if book is None:
            db.rollback()
            raise BookNotFoundError(f"Book {book_id} not found")

        conflict = find_approved_overlap(
            db,
            book_id=book_id,
            start_date=start_date,
            end_date=end_date,
            policy=policy,
        )
        if conflict is not None:
            db.rollback()
            logger.info(
                "borrow conflict: book=%s range=%s..%s overlaps approved request %s",
                book_id,
                start_date,
                end_date,
                conflict.id,
            )
            raise BorrowConflictError(conflict.id)

        req = add_borrow_request(
            db,
            book_id=book_id,
            user_id=requester.id,
            start_date=start_date,
            end_date=end_date,
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("borrow request lookup failed for book %s", book_id)
        raise StorageUnavailableError("Error submitting request") from e

    _commit(db, req, "submitting request")
    logger.info(
        "borrow request %s submitted: book=%s user=%s range=%s..%s",
        req.id,
        book_id,
        requester.id,
        start_date,
        end_date,
    )
    return req


def list_requests(db: Session) -> Sequence[BorrowRequest]:
    return list_borrow_requests(db)


def update_request_status(
    db: Session,
    *,
    request_id: int,
    status: str,
    recheck_conflicts: bool = False,
    policy: OverlapPolicy = OverlapPolicy.endpoints,
) -> BorrowRequest:
    """Overwrite a request's status.

    The value is not checked against the known statuses here; the table's
    CHECK constraint rejects anything else. With ``recheck_conflicts`` an
    approval is refused when another Approved request for the same book
    overlaps.
    """
    try:
        req = get_borrow_request(db, request_id=request_id, for_update=True)
        if req is None:
            db.rollback()
            raise RequestNotFoundError(f"Borrow request {request_id} not found")

        if (
            recheck_conflicts
            and status == BorrowStatus.approved.value
            and req.status != BorrowStatus.approved.value
        ):
            lock_book(db, book_id=req.book_id)
            conflict = find_approved_overlap(
                db,
                book_id=req.book_id,
                start_date=req.start_date,
                end_date=req.end_date,
                policy=policy,
                exclude_id=req.id,
            )
            if conflict is not None:
                db.rollback()
                logger.info(
                    "approval of request %s refused: overlaps approved request %s",
                    request_id,
                    conflict.id,
                )
                raise BorrowConflictError(conflict.id)

        previous = req.status
        req.status = status
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("borrow request %s lookup failed", request_id)
        raise StorageUnavailableError("Error updating request") from e

    _commit(db, req, "updating request")
    logger.info("borrow request %s status %s -> %s", request_id, previous, status)
    return req
