from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator


class UserCreateIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    is_admin: bool = False

    @field_validator("password")
    @classmethod
    def password_must_fit_bcrypt_limit(cls, v: str) -> str:
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password must be 72 bytes or fewer when UTF-8 encoded.")
        return v
