from __future__ import annotations

from booklend.api.routes import books, borrow_requests, health, users
from fastapi import APIRouter

api_router = APIRouter()

# Keep this list in the order you want routes registered.
for _mod in (health, users, books, borrow_requests):
    api_router.include_router(_mod.router)
