#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample users and books for development.

USAGE:
    # From the project root with the package installed
    python scripts/seed_data.py

    # Keep existing rows instead of clearing them first
    python scripts/seed_data.py --keep

This script:
1. Loads settings the same way the API does (configs/app.yaml, .env, env)
2. Creates tables if they don't exist
3. Optionally clears existing users and books
4. Registers users and creates books through the service layer, so
   passwords are hashed exactly as they are for real registrations
"""

import argparse
import sys
from datetime import timedelta

from sqlalchemy import delete
from sqlalchemy.orm import Session

from bookstore.config import get_settings
from bookstore.database import build_engine, build_session_factory, create_tables
from bookstore.exceptions import AlreadyExistsError
from bookstore.models import Book, User
from bookstore.repositories import SQLBookRepository, SQLUserRepository
from bookstore.schemas import BookCreate, UserCreate
from bookstore.services import BookService, JWTTokenProvider, PasswordHasher, UserService

USERS = [
    {
        "email": "alice@example.com",
        "password": "alicepass123",
        "username": "alice",
        "first_name": "Alice",
        "last_name": "Liddell",
    },
    {
        "email": "bob@example.com",
        "password": "bobpass12345",
        "username": "bob",
        "first_name": "Bob",
        "last_name": "Builder",
    },
]

BOOKS = [
    {"title": "1984", "author": "George Orwell", "price": 12, "stock": 5},
    {"title": "Animal Farm", "author": "George Orwell", "price": 9, "stock": 8},
    {"title": "Pride and Prejudice", "author": "Jane Austen", "price": 11, "stock": 3},
    {"title": "The Old Man and the Sea", "author": "Ernest Hemingway", "price": 10, "stock": 4},
    {"title": "Murder on the Orient Express", "author": "Agatha Christie", "price": 13, "stock": 6},
    {"title": "Foundation", "author": "Isaac Asimov", "price": 15, "stock": 2},
    {"title": "The Hobbit", "author": "J.R.R. Tolkien", "price": 14, "stock": 7},
]


def clear_data(db: Session) -> None:
    """Clear all existing users and books."""
    print("Clearing existing data...")
    db.execute(delete(Book))
    db.execute(delete(User))
    db.commit()
    print("Data cleared.")


def create_users(service: UserService) -> list[User]:
    print("Registering users...")
    users = []
    for data in USERS:
        try:
            users.append(service.register(UserCreate(**data)))
        except AlreadyExistsError:
            print(f"  - {data['email']} already registered, skipping")
    print(f"Registered {len(users)} users.")
    return users


def create_books(service: BookService) -> list[Book]:
    print("Creating books...")
    books = [service.create_book(BookCreate(**data)) for data in BOOKS]
    print(f"Created {len(books)} books.")
    return books


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    settings = get_settings()

    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    engine = build_engine(settings.db)
    create_tables(engine)
    db = build_session_factory(engine)()

    hasher = PasswordHasher(rounds=settings.auth.bcrypt_rounds)
    tokens = JWTTokenProvider(
        settings.auth.jwt.secret,
        timedelta(minutes=settings.auth.jwt.expire_minutes),
        settings.auth.jwt.algorithm,
    )

    try:
        if clear_existing:
            clear_data(db)

        users = create_users(UserService(SQLUserRepository(db), hasher, tokens))
        books = create_books(BookService(SQLBookRepository(db)))

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Users: {len(users)}")
        print(f"  - Books: {len(books)}")
        print(f"\nLog in with {USERS[0]['email']} / {USERS[0]['password']}")
        print(f"API documentation at http://localhost:{settings.app.port}/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()
        engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the bookstore database with sample data.")
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep existing rows instead of clearing them first",
    )
    args = parser.parse_args(argv)

    seed_database(clear_existing=not args.keep)
    return 0


if __name__ == "__main__":
    sys.exit(main())
