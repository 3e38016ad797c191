"""API schemas."""

from src.api.schemas.books import Book, BookCreate, BookDatabase, BookUpdate

__all__ = ["Book", "BookCreate", "BookDatabase", "BookUpdate"]
