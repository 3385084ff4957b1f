"""
SQLAlchemy Repositories

Thin pass-through to the database: one statement per operation, committed
immediately. The Session is owned by the request (see database.get_db).
"""

import logging
from datetime import UTC, datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.exceptions import AlreadyExistsError
from bookstore.models import Book, User
from bookstore.repositories.base import BookRepository, UserRepository

logger = logging.getLogger(__name__)


class SQLBookRepository(BookRepository):
    """Books stored in the `books` table."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, book: Book) -> Book:
        self.db.add(book)
        self.db.commit()
        self.db.refresh(book)
        return book

    def get_by_id(self, book_id: int) -> Book | None:
        return self.db.get(Book, book_id)

    def list_all(self) -> list[Book]:
        stmt = select(Book).order_by(Book.id)
        return list(self.db.execute(stmt).scalars().all())

    def update(
        self,
        book_id: int,
        *,
        title: str,
        author: str,
        price: int,
        stock: int,
    ) -> Book | None:
        book = self.db.get(Book, book_id)
        if book is None:
            return None

        book.title = title
        book.author = author
        book.price = price
        book.stock = stock
        book.updated_at = datetime.now(UTC)

        self.db.commit()
        self.db.refresh(book)
        return book

    def delete(self, book_id: int) -> bool:
        result = self.db.execute(delete(Book).where(Book.id == book_id))
        self.db.commit()
        return result.rowcount > 0


class SQLUserRepository(UserRepository):
    """Users stored in the `users` table."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, user: User) -> User:
        email = user.email
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            # Anything but a duplicate email propagates unchanged
            if email is None or self.get_by_email(email) is None:
                raise
            logger.warning(f"Duplicate user insert rejected: {email}")
            raise AlreadyExistsError("user already exists") from exc
        self.db.refresh(user)
        return user

    def get_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_all(self) -> list[User]:
        stmt = select(User).order_by(User.id)
        return list(self.db.execute(stmt).scalars().all())

    def update_names(self, user_id: int, *, first_name: str, last_name: str) -> User | None:
        user = self.db.get(User, user_id)
        if user is None:
            return None

        user.first_name = first_name
        user.last_name = last_name

        self.db.commit()
        self.db.refresh(user)
        return user

    def update_password(self, user_id: int, hashed_password: str) -> User | None:
        user = self.db.get(User, user_id)
        if user is None:
            return None

        user.hashed_password = hashed_password

        self.db.commit()
        self.db.refresh(user)
        return user

    def delete(self, user_id: int) -> bool:
        result = self.db.execute(delete(User).where(User.id == user_id))
        self.db.commit()
        return result.rowcount > 0
