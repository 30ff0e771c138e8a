from __future__ import annotations


def normalize_email(email: str) -> str:
    """Canonical form used both when storing and when looking up an account."""
    return email.strip().lower()
