"""
SQLAlchemy Models Package

Import all models here to:
1. Make them available as: from bookstore.models import Book, User
2. Ensure Alembic and create_tables() see every table
"""

from bookstore.models.book import Book
from bookstore.models.user import DEFAULT_ROLE, User

__all__ = [
    "Book",
    "User",
    "DEFAULT_ROLE",
]
