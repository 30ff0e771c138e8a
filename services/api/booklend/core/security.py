from __future__ import annotations

from passlib.context import CryptContext  # type: ignore[import-untyped]


def build_pwd_context(rounds: int) -> CryptContext:
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=rounds,
    )


def verify_password(
    pwd_context: CryptContext, plain_password: str, hashed_password: str
) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def hash_password(pwd_context: CryptContext, password: str) -> str:
    return pwd_context.hash(password)


def dummy_verify(pwd_context: CryptContext) -> None:
    # Burn the same bcrypt work as a real check so unknown emails and wrong
    # passwords take comparable time.
    pwd_context.dummy_verify()
