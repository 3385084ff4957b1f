"""
In-Memory Repositories

Dict-backed implementations of the repository interfaces. They mirror the
SQL behavior that services rely on: ids assigned on insert, timestamps
stamped on insert and update, unique user emails.
"""

from datetime import UTC, datetime
from itertools import count

from bookstore.exceptions import AlreadyExistsError
from bookstore.models import DEFAULT_ROLE, Book, User
from bookstore.repositories.base import BookRepository, UserRepository


class InMemoryBookRepository(BookRepository):

    def __init__(self):
        self._books: dict[int, Book] = {}
        self._ids = count(1)

    def create(self, book: Book) -> Book:
        now = datetime.now(UTC)
        book.id = next(self._ids)
        book.created_at = now
        book.updated_at = now
        self._books[book.id] = book
        return book

    def get_by_id(self, book_id: int) -> Book | None:
        return self._books.get(book_id)

    def list_all(self) -> list[Book]:
        return [self._books[book_id] for book_id in sorted(self._books)]

    def update(
        self,
        book_id: int,
        *,
        title: str,
        author: str,
        price: int,
        stock: int,
    ) -> Book | None:
        book = self._books.get(book_id)
        if book is None:
            return None
        book.title = title
        book.author = author
        book.price = price
        book.stock = stock
        book.updated_at = datetime.now(UTC)
        return book

    def delete(self, book_id: int) -> bool:
        return self._books.pop(book_id, None) is not None


class InMemoryUserRepository(UserRepository):

    def __init__(self):
        self._users: dict[int, User] = {}
        self._ids = count(1)

    def create(self, user: User) -> User:
        if self.get_by_email(user.email) is not None:
            raise AlreadyExistsError("user already exists")

        now = datetime.now(UTC)
        user.id = next(self._ids)
        if user.role is None:
            user.role = DEFAULT_ROLE
        if user.is_active is None:
            user.is_active = True
        user.created_at = now
        user.updated_at = now
        self._users[user.id] = user
        return user

    def get_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def get_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def list_all(self) -> list[User]:
        return [self._users[user_id] for user_id in sorted(self._users)]

    def update_names(self, user_id: int, *, first_name: str, last_name: str) -> User | None:
        user = self._users.get(user_id)
        if user is None:
            return None
        user.first_name = first_name
        user.last_name = last_name
        user.updated_at = datetime.now(UTC)
        return user

    def update_password(self, user_id: int, hashed_password: str) -> User | None:
        user = self._users.get(user_id)
        if user is None:
            return None
        user.hashed_password = hashed_password
        user.updated_at = datetime.now(UTC)
        return user

    def delete(self, user_id: int) -> bool:
        return self._users.pop(user_id, None) is not None
