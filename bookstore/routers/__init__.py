"""
API Routers Package

- books.py: /books endpoints

Routers are registered in main.py.
"""

from bookstore.routers.books import router as books_router

__all__ = [
    "books_router",
]
