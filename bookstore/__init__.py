"""
Bookstore API Application Package

A small JWT-protected CRUD API over books and users.

Package Structure:
- config.py: Application configuration using Pydantic Settings (YAML + env)
- database.py: SQLAlchemy engine, session factory and session dependency
- exceptions.py: Domain error taxonomy mapped to HTTP status codes
- dependencies.py: Dependency injection (services, bearer-token gate)
- main.py: FastAPI application factory
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- repositories/: Storage interfaces with SQL and in-memory implementations
- services/: Business logic (users, books, password hashing, tokens)
- routers/: API route handlers
"""

__version__ = "0.1.0"
