"""
Book Pydantic Schemas

- BookCreate / BookUpdate: the four writable fields
- BookResponse: stored book including id and timestamps
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BookBase(BaseModel):
    """
    Base schema with the writable book fields.

    Price and stock are whole numbers and cannot be negative.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Book title",
        examples=["1984", "Pride and Prejudice"],
    )

    author: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author name",
        examples=["George Orwell"],
    )

    price: int = Field(
        ...,
        ge=0,
        description="Book price in whole currency units",
        examples=[10, 25],
    )

    stock: int = Field(
        ...,
        ge=0,
        description="Copies in stock",
        examples=[1, 12],
    )

    @field_validator("title", "author")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        """Validate and normalize text fields."""
        if not v.strip():
            raise ValueError("must not be empty or whitespace")
        return v.strip()


class BookCreate(BookBase):
    """Schema for creating a new book."""


class BookUpdate(BookBase):
    """
    Schema for updating a book.

    PUT replaces all four writable fields.
    """


class BookResponse(BookBase):
    """Schema for book responses."""

    id: int = Field(..., description="Unique book identifier", examples=[1])
    created_at: datetime | None = Field(default=None, description="When the book was added")
    updated_at: datetime | None = Field(default=None, description="When the book was last changed")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "1984",
                "author": "George Orwell",
                "price": 12,
                "stock": 3,
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
            }
        },
    )
