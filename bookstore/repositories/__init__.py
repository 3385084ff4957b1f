"""
Repositories Package

Storage interfaces and their implementations:
- base.py: BookRepository / UserRepository abstract interfaces
- sql.py: SQLAlchemy implementations (production)
- memory.py: In-memory implementations (tests)
"""

from bookstore.repositories.base import BookRepository, UserRepository
from bookstore.repositories.memory import InMemoryBookRepository, InMemoryUserRepository
from bookstore.repositories.sql import SQLBookRepository, SQLUserRepository

__all__ = [
    "BookRepository",
    "UserRepository",
    "SQLBookRepository",
    "SQLUserRepository",
    "InMemoryBookRepository",
    "InMemoryUserRepository",
]
