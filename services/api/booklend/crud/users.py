from __future__ import annotations

from booklend.core.security import hash_password
from booklend.domain.normalize import normalize_email
from booklend.models.user import User
from passlib.context import CryptContext  # type: ignore[import-untyped]
from sqlalchemy import select
from sqlalchemy.orm import Session


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.execute(
        select(User).where(User.email == normalize_email(email))
    ).scalar_one_or_none()


def create_user(
    db: Session,
    *,
    pwd_context: CryptContext,
    email: str,
    password: str,
    is_admin: bool = False,
) -> User:
    u = User(
        email=normalize_email(email),
        password_hash=hash_password(pwd_context, password),
        is_admin=is_admin,
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u
