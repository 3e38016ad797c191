"""In-memory book storage seeded from a JSON file."""

import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

import structlog
from pydantic import ValidationError

from src.api.schemas.books import Book, BookCreate, BookDatabase, BookUpdate

logger = structlog.get_logger(__name__)


class BookStoreError(Exception):
    """Base class for book store errors."""


class StoreLoadError(BookStoreError):
    """The seed file could not be opened, read or parsed."""


class StorePersistError(BookStoreError):
    """The collection could not be written back to disk."""


class BookNotFoundError(BookStoreError):
    """No book with the requested id exists."""

    def __init__(self, book_id: int) -> None:
        super().__init__(f"Book {book_id} not found")
        self.book_id = book_id


class BookStore:
    """
    Ordered in-memory collection of books.

    Books are kept in insertion order. Ids come from a counter that starts at
    the highest id in the seed file and only ever grows, so ids freed by a
    delete are never handed out again.

    Mutations are applied to a copy of the collection, written to disk when
    a path is set and persistence is on, and only then committed.
    """

    def __init__(self, path: Path | str | None = None, persist: bool = True) -> None:
        self._books: list[Book] = []
        self._last_id = 0
        self._path: Optional[Path] = Path(path) if path else None
        self._persist = persist
        self._lock = threading.Lock()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def load(self, path: Path | str | None = None) -> list[Book]:
        """
        Replace the collection with the contents of a seed file.

        Args:
            path: JSON file of shape {"books": [...]}; defaults to the store path

        Returns:
            The loaded books

        Raises:
            StoreLoadError: if the file is missing, unreadable or malformed
        """
        if path is not None:
            self._path = Path(path)
        if self._path is None:
            raise StoreLoadError("No database path configured")

        try:
            raw = self._path.read_bytes()
        except OSError as e:
            raise StoreLoadError(f"Failed to read {self._path}: {e}") from e

        try:
            data = BookDatabase.model_validate_json(raw)
        except ValidationError as e:
            raise StoreLoadError(f"Failed to parse {self._path}: {e}") from e

        with self._lock:
            self._books = data.books
            self._last_id = max((b.id for b in data.books), default=0)

        logger.info("Books loaded", path=str(self._path), count=len(data.books))
        return self.list_books()

    def list_books(self) -> list[Book]:
        """List all books in insertion order."""
        with self._lock:
            return [b.model_copy() for b in self._books]

    def get_book(self, book_id: int) -> Book:
        """Get a book by ID."""
        with self._lock:
            index = self._index_of(book_id)
            return self._books[index].model_copy()

    def count(self) -> int:
        """Number of books in the collection."""
        with self._lock:
            return len(self._books)

    def add_book(self, payload: BookCreate) -> Book:
        """Append a new book with the next id."""
        with self._lock:
            book = Book(id=self._last_id + 1, title=payload.title, author=payload.author)
            books = [*self._books, book]
            self._commit(books)
            self._last_id = book.id

        logger.info("Book created", book_id=book.id, title=book.title)
        return book.model_copy()

    def replace_book(self, book_id: int, payload: BookUpdate) -> Book:
        """Overwrite a book's fields, keeping its id."""
        with self._lock:
            index = self._index_of(book_id)
            book = Book(id=book_id, title=payload.title, author=payload.author)
            books = list(self._books)
            books[index] = book
            self._commit(books)

        logger.info("Book updated", book_id=book_id)
        return book.model_copy()

    def delete_book(self, book_id: int) -> None:
        """Remove a book, keeping the order of the rest."""
        with self._lock:
            index = self._index_of(book_id)
            books = self._books[:index] + self._books[index + 1:]
            self._commit(books)

        logger.info("Book deleted", book_id=book_id)

    def _index_of(self, book_id: int) -> int:
        for i, book in enumerate(self._books):
            if book.id == book_id:
                return i
        raise BookNotFoundError(book_id)

    def _commit(self, books: list[Book]) -> None:
        # Caller holds the lock
        if self._persist and self._path is not None:
            self._write(books)
        self._books = books

    def _write(self, books: list[Book]) -> None:
        """Atomically replace the database file."""
        if self._path is None:
            raise StorePersistError("No database path configured")

        payload = BookDatabase(books=books).model_dump_json(indent=2)
        directory = self._path.parent
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error("Failed to save books", path=str(self._path), error=str(e))
            raise StorePersistError(f"Failed to save {self._path}: {e}") from e

        logger.debug("Books saved", path=str(self._path), count=len(books))


# Singleton instance
_store: BookStore | None = None


def get_book_store() -> BookStore:
    """Get or create the book store singleton."""
    global _store
    if _store is None:
        from src.config import get_settings

        settings = get_settings()
        _store = BookStore(settings.db_path, persist=settings.persist_changes)
    return _store


def reset_book_store() -> None:
    """Drop the singleton so the next call builds a fresh store."""
    global _store
    _store = None
