"""
FastAPI Dependencies Module

The storage handle is created once per application and kept on
app.state. Route handlers receive it through Depends() instead of
importing a module-level object, which also lets tests hand the app a
store of their own.

Usage in routes:
    @router.get("/books")
    def list_books(store: Store):
        return store.list_all()
"""

from typing import Annotated

from fastapi import Depends, Request

from bookstore.storage import BookStore


def get_store(request: Request) -> BookStore:
    """Return the storage handle attached to the running application."""
    return request.app.state.store


Store = Annotated[BookStore, Depends(get_store)]


async def read_body(request: Request) -> bytes:
    """Raw request body, for handlers that decode it themselves."""
    return await request.body()


RawBody = Annotated[bytes, Depends(read_body)]
