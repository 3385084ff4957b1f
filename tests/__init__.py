"""
Test Suite for the Bookstore API

Test Organization:
- conftest.py: Shared fixtures (per-test app, in-memory database, sample data)
- test_security.py: Password hashing and JWT tokens
- test_user_service.py / test_book_service.py: Service rules over in-memory repositories
- test_auth_flow.py: Register, login and the /v1/auth token gate
- test_books.py: /v1/auth/books endpoints
- test_users.py: /v1/auth/user(s) endpoints
- test_config.py: Settings sources and validation
- test_main.py: Root, health check and error handling

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
