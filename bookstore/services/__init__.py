"""
Services Package

Business logic separated from HTTP handling:
- books.py: Book catalog operations
- users.py: Registration, login and user management
- security.py: Password hashing and JWT token provider
"""

from bookstore.services.books import BookService
from bookstore.services.security import JWTTokenProvider, PasswordHasher, TokenProvider
from bookstore.services.users import UserService

__all__ = [
    "BookService",
    "UserService",
    "PasswordHasher",
    "TokenProvider",
    "JWTTokenProvider",
]
