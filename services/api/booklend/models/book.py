from __future__ import annotations

from booklend.models.base import Base
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship


class Book(Base):
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(400), nullable=False)
    author: Mapped[str] = mapped_column(String(240), nullable=False)

    borrow_requests = relationship("BorrowRequest", back_populates="book")
