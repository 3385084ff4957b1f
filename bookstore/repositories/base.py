"""
Repository Interfaces

Services depend on these abstract capabilities, never on a concrete store.
Two implementations ship with the package:
- sql.py: SQLAlchemy, one Session per request (production)
- memory.py: plain dicts (service tests, local experiments)

Contract shared by both:
- Lookups return None when the row is absent
- Writes return the stored entity (or None / False when the id is absent)
- Storage failures are raised as-is, except a duplicate email on user
  insert, which is reported as AlreadyExistsError
"""

from abc import ABC, abstractmethod

from bookstore.models import Book, User


class BookRepository(ABC):
    """CRUD capability over books."""

    @abstractmethod
    def create(self, book: Book) -> Book:
        ...

    @abstractmethod
    def get_by_id(self, book_id: int) -> Book | None:
        ...

    @abstractmethod
    def list_all(self) -> list[Book]:
        ...

    @abstractmethod
    def update(
        self,
        book_id: int,
        *,
        title: str,
        author: str,
        price: int,
        stock: int,
    ) -> Book | None:
        """Replace the writable fields and stamp updated_at."""

    @abstractmethod
    def delete(self, book_id: int) -> bool:
        """Delete a book; False when nothing was deleted."""


class UserRepository(ABC):
    """CRUD capability over users."""

    @abstractmethod
    def create(self, user: User) -> User:
        """Insert a user; raises AlreadyExistsError on a duplicate email."""

    @abstractmethod
    def get_by_id(self, user_id: int) -> User | None:
        ...

    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        ...

    @abstractmethod
    def list_all(self) -> list[User]:
        ...

    @abstractmethod
    def update_names(self, user_id: int, *, first_name: str, last_name: str) -> User | None:
        ...

    @abstractmethod
    def update_password(self, user_id: int, hashed_password: str) -> User | None:
        ...

    @abstractmethod
    def delete(self, user_id: int) -> bool:
        ...
