from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field, model_validator


class BorrowRequestIn(BaseModel):
    book_id: int
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def end_not_before_start(self) -> "BorrowRequestIn":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class StatusUpdateIn(BaseModel):
    # allowed values are enforced by the borrow_requests CHECK constraint
    status: str = Field(min_length=1, max_length=20)


class BorrowRequestOut(BaseModel):
    id: int
    book_id: int
    user_id: int
    start_date: date
    end_date: date
    status: str

    class Config:
        from_attributes = True
