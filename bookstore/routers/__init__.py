"""
API Routers Package

Router Structure:
- users.py: /v1/register, /v1/login (public) and /v1/auth/user* (protected)
- books.py: /v1/auth/books* (protected)

Each router is registered in main.py; the protected ones are mounted with
the bearer-token gate as a router-level dependency.
"""

from bookstore.routers.books import router as books_router
from bookstore.routers.users import public_router as auth_router
from bookstore.routers.users import router as users_router

__all__ = [
    "auth_router",
    "books_router",
    "users_router",
]
