"""
Bookstore API Application Package

A small REST API for managing book records, backed either by an in-memory
store or by a relational table.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and declarative base
- main.py: FastAPI application factory and entry point
- dependencies.py: Dependency injection functions
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas and the response envelope
- storage/: Storage adapters (in-memory and SQL) behind one protocol
- routers/: API route handlers
"""

__version__ = "0.1.0"
