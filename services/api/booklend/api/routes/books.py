from __future__ import annotations

from booklend.api.deps import get_current_user
from booklend.crud.books import list_books
from booklend.db.session import get_db
from booklend.schemas.books import BookOut
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

router = APIRouter(tags=["books"])


@router.get("/books", response_model=list[BookOut])
def get_books(db: Session = Depends(get_db), user=Depends(get_current_user)):
    return list_books(db)
