from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    admin = "admin"
    ordinary = "ordinary"


class BorrowStatus(str, Enum):
    pending = "Pending"
    approved = "Approved"
    denied = "Denied"


BORROW_STATUSES = tuple(s.value for s in BorrowStatus)
