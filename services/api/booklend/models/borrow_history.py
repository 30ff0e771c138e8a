from __future__ import annotations

from datetime import datetime

from booklend.models.base import Base
from sqlalchemy import DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship


class BorrowHistory(Base):
    __tablename__ = "borrow_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    book_id: Mapped[int] = mapped_column(Integer, ForeignKey("books.id"), nullable=False)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)

    borrowed_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    returned_on: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    book = relationship("Book")
    user = relationship("User", back_populates="borrow_history")
