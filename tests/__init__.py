"""
Test Suite for Bookstore API

Test Organization:
- conftest.py: Shared fixtures (stores, settings, test client, sample data)
- test_books.py: HTTP tests for the /books endpoints, run against both stores
- test_storage.py: Storage adapter tests (memory and SQL)
- test_schemas.py: Merge patch and envelope helpers
- test_config.py: Settings validation and database URL building
- test_app.py: Lifespan, health check, fatal startup

Running Tests:
    pytest
    pytest tests/test_books.py -v
"""
