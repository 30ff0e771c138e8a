from __future__ import annotations

from booklend.api.deps import get_current_user, get_settings, require_admin
from booklend.api.rate_limit import rate_limiter
from booklend.core.config import Settings
from booklend.db.session import get_db
from booklend.models.user import User
from booklend.schemas.borrow_requests import (
    BorrowRequestIn,
    BorrowRequestOut,
    StatusUpdateIn,
)
from booklend.schemas.common import MessageOut
from booklend.services.borrowing import (
    BookNotFoundError,
    BorrowConflictError,
    BorrowError,
    RequestNotFoundError,
    StorageUnavailableError,
    WriteRejectedError,
    list_requests,
    submit_request,
    update_request_status,
)
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

router = APIRouter(prefix="/borrow-requests", tags=["borrow-requests"])

_STATUS_BY_ERROR: dict[type[BorrowError], int] = {
    BookNotFoundError: 404,
    RequestNotFoundError: 404,
    BorrowConflictError: 400,
    WriteRejectedError: 400,
    StorageUnavailableError: 503,
}


def _http_error(e: BorrowError) -> HTTPException:
    return HTTPException(status_code=_STATUS_BY_ERROR.get(type(e), 400), detail=str(e))


@router.get("", response_model=list[BorrowRequestOut])
def get_borrow_requests(
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return list_requests(db)


@router.post(
    "",
    response_model=MessageOut,
    dependencies=[
        Depends(
            rate_limiter(
                "borrow_requests",
                limit=lambda s: s.rate_limit_borrow_requests_per_window,
            )
        )
    ],
)
def create_borrow_request(
    payload: BorrowRequestIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    try:
        req = submit_request(
            db,
            book_id=payload.book_id,
            requester=user,
            start_date=payload.start_date,
            end_date=payload.end_date,
            policy=settings.borrow_overlap_policy,
        )
    except BorrowError as e:
        raise _http_error(e)
    return MessageOut(message="Request submitted", id=req.id)


@router.put("/{request_id}", response_model=MessageOut)
def set_borrow_request_status(
    request_id: int,
    payload: StatusUpdateIn,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
    settings: Settings = Depends(get_settings),
):
    try:
        req = update_request_status(
            db,
            request_id=request_id,
            status=payload.status,
            recheck_conflicts=settings.approval_conflict_check,
            policy=settings.borrow_overlap_policy,
        )
    except BorrowError as e:
        raise _http_error(e)
    return MessageOut(message="Request updated", id=req.id)
