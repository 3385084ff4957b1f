"""
Books Router

CRUD endpoints for books. Mounted under the protected group, so every route
here requires a valid bearer token.

Endpoints:
- GET    /books          - List all books
- GET    /books/{id}     - Get one book
- POST   /books          - Create a book
- PUT    /books/{id}     - Replace a book's fields
- DELETE /books/{id}     - Delete a book
"""

import logging

from fastapi import APIRouter

from bookstore.dependencies import BookServiceDep, CurrentUserId
from bookstore.schemas import BookCreate, BookResponse, BookUpdate, MessageResponse

logger = logging.getLogger(__name__)

# =============================================================================
# Router Configuration
# =============================================================================
router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Book not found"},
    },
)


@router.get(
    "",
    response_model=list[BookResponse],
    summary="List all books",
)
def list_books(service: BookServiceDep) -> list[BookResponse]:
    """Return every book, ordered by id."""
    return [BookResponse.model_validate(book) for book in service.get_all_books()]


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Get a book by ID",
)
def get_book(book_id: int, service: BookServiceDep) -> BookResponse:
    """
    Get a single book by its ID.

    Raises:
        NotFoundError: 404 if the book does not exist
    """
    return BookResponse.model_validate(service.get_book(book_id))


@router.post(
    "",
    response_model=BookResponse,
    summary="Create a new book",
)
def create_book(
    book_data: BookCreate,
    service: BookServiceDep,
    user_id: CurrentUserId,
) -> BookResponse:
    """Create a book and return it with its assigned id."""
    book = service.create_book(book_data)
    logger.info(f"Book {book.id} created by user {user_id}")
    return BookResponse.model_validate(book)


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    summary="Update a book",
)
def update_book(
    book_id: int,
    book_data: BookUpdate,
    service: BookServiceDep,
    user_id: CurrentUserId,
) -> BookResponse:
    """
    Replace title, author, price and stock of an existing book.

    Raises:
        NotFoundError: 404 if the book does not exist
    """
    book = service.update_book(book_id, book_data)
    logger.info(f"Book {book.id} updated by user {user_id}")
    return BookResponse.model_validate(book)


@router.delete(
    "/{book_id}",
    response_model=MessageResponse,
    summary="Delete a book",
)
def delete_book(
    book_id: int,
    service: BookServiceDep,
    user_id: CurrentUserId,
) -> MessageResponse:
    service.delete_book(book_id)
    logger.info(f"Book {book_id} deleted by user {user_id}")
    return MessageResponse(message="book deleted")
