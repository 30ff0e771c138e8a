from __future__ import annotations

from datetime import date

from booklend.domain.types import BORROW_STATUSES, BorrowStatus
from booklend.models.base import Base
from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

_STATUS_LIST = ", ".join(f"'{s}'" for s in BORROW_STATUSES)


class BorrowRequest(Base):
    __tablename__ = "borrow_requests"
    __table_args__ = (
        CheckConstraint(f"status IN ({_STATUS_LIST})", name="ck_borrow_requests_status"),
        Index("ix_borrow_requests_book_id_status", "book_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    book_id: Mapped[int] = mapped_column(Integer, ForeignKey("books.id"), nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), index=True, nullable=False
    )

    # inclusive on both ends
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Pending | Approved | Denied
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=BorrowStatus.pending.value
    )

    book = relationship("Book", back_populates="borrow_requests")
    user = relationship("User", back_populates="borrow_requests")
