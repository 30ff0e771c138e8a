from __future__ import annotations

import binascii
import logging
from base64 import b64decode
from typing import Callable, Optional

from booklend.core.config import Settings
from booklend.core.security import dummy_verify, verify_password
from booklend.crud.users import get_user_by_email
from booklend.db.session import get_db
from booklend.domain.types import Role
from booklend.models.user import User
from fastapi import Depends, HTTPException, Request, status
from passlib.context import CryptContext  # type: ignore[import-untyped]
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

_BASIC_CHALLENGE = {"WWW-Authenticate": "Basic"}


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers=_BASIC_CHALLENGE,
    )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_pwd_context(request: Request) -> CryptContext:
    return request.app.state.pwd_context


def _extract_basic_credentials(request: Request) -> Optional[tuple[str, str]]:
    auth = request.headers.get("Authorization")
    if not auth:
        return None
    parts = auth.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "basic":
        raise _unauthorized("Invalid credentials")

    # passwords may hold any UTF-8 text, not just ASCII
    try:
        decoded = b64decode(parts[1].strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise _unauthorized("Invalid credentials")

    email, sep, password = decoded.partition(":")
    if not sep:
        raise _unauthorized("Invalid credentials")
    return email, password


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    pwd_context: CryptContext = Depends(get_pwd_context),
) -> User:
    credentials = _extract_basic_credentials(request)
    if credentials is None:
        raise _unauthorized("Authorization header missing")
    email, password = credentials

    user = get_user_by_email(db, email)
    if user is None:
        # same cost and same answer as a wrong password
        dummy_verify(pwd_context)
        logger.warning("authentication failed for unknown identity")
        raise _unauthorized("Invalid credentials")

    if not verify_password(pwd_context, password, user.password_hash):
        logger.warning("authentication failed for user %s", user.id)
        raise _unauthorized("Invalid credentials")

    return user


def require_role(role: Role) -> Callable[..., User]:
    """Build a dependency that resolves the current user and demands ``role``."""

    def _dep(user: User = Depends(get_current_user)) -> User:
        if user.role is not role:
            logger.info("user %s denied: %s role required", user.id, role.value)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
        return user

    return _dep


require_admin = require_role(Role.admin)
