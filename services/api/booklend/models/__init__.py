from booklend.models.base import Base
from booklend.models.book import Book
from booklend.models.borrow_history import BorrowHistory
from booklend.models.borrow_request import BorrowRequest
from booklend.models.user import User


__all__ = [
    "Base",
    "User",
    "Book",
    "BorrowRequest",
    "BorrowHistory",
]
