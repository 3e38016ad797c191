"""Book management module."""

from src.core.books.store import (
    BookNotFoundError,
    BookStore,
    BookStoreError,
    StoreLoadError,
    StorePersistError,
    get_book_store,
    reset_book_store,
)

__all__ = [
    "BookNotFoundError",
    "BookStore",
    "BookStoreError",
    "StoreLoadError",
    "StorePersistError",
    "get_book_store",
    "reset_book_store",
]
