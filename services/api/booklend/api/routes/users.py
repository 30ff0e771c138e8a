from __future__ import annotations

import logging

from booklend.api.deps import get_pwd_context, require_admin
from booklend.crud.users import create_user
from booklend.db.session import get_db
from booklend.models.user import User
from booklend.schemas.common import MessageOut
from booklend.schemas.users import UserCreateIn
from fastapi import APIRouter, Depends, HTTPException
from passlib.context import CryptContext  # type: ignore[import-untyped]
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


@router.post("/users", response_model=MessageOut)
def create_user_account(
    payload: UserCreateIn,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
    pwd_context: CryptContext = Depends(get_pwd_context),
):
    try:
        u = create_user(
            db,
            pwd_context=pwd_context,
            email=payload.email,
            password=payload.password,
            is_admin=payload.is_admin,
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("user creation by %s failed: %s", admin.id, e)
        raise HTTPException(status_code=400, detail="Error creating user")

    logger.info("user %s created by %s (admin=%s)", u.id, admin.id, u.is_admin)
    return MessageOut(message="User created successfully", id=u.id)
