from __future__ import annotations

from pydantic import BaseModel


class BookOut(BaseModel):
    id: int
    title: str
    author: str

    class Config:
        from_attributes = True
