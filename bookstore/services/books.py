"""
Book Service

Forwards to the book repository. The only rule it adds is turning an absent
book into NotFoundError; every other failure propagates unchanged.
"""

from bookstore.exceptions import NotFoundError
from bookstore.models import Book
from bookstore.repositories.base import BookRepository
from bookstore.schemas.book import BookCreate, BookUpdate


class BookService:

    def __init__(self, repo: BookRepository):
        self.repo = repo

    def create_book(self, data: BookCreate) -> Book:
        book = Book(
            title=data.title,
            author=data.author,
            price=data.price,
            stock=data.stock,
        )
        return self.repo.create(book)

    def get_book(self, book_id: int) -> Book:
        book = self.repo.get_by_id(book_id)
        if book is None:
            raise NotFoundError("book not found")
        return book

    def get_all_books(self) -> list[Book]:
        return self.repo.list_all()

    def update_book(self, book_id: int, data: BookUpdate) -> Book:
        """Replace title, author, price and stock; updated_at is stamped."""
        book = self.repo.update(
            book_id,
            title=data.title,
            author=data.author,
            price=data.price,
            stock=data.stock,
        )
        if book is None:
            raise NotFoundError("book not found")
        return book

    def delete_book(self, book_id: int) -> None:
        if not self.repo.delete(book_id):
            raise NotFoundError("book not found")
