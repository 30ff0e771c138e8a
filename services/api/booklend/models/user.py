from __future__ import annotations

from booklend.domain.types import Role
from booklend.models.base import Base
from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    # bcrypt hash; the column keeps its historical name
    password_hash: Mapped[str] = mapped_column("password", String(255), nullable=False)

    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    borrow_requests = relationship("BorrowRequest", back_populates="user")
    borrow_history = relationship("BorrowHistory", back_populates="user")

    @property
    def role(self) -> Role:
        return Role.admin if self.is_admin else Role.ordinary
