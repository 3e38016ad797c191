"""Book collection API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response

from src.api.deps import create_payload, parse_book_id, update_payload
from src.api.schemas.books import Book, BookCreate, BookUpdate
from src.core.books.store import (
    BookNotFoundError,
    BookStore,
    StorePersistError,
    get_book_store,
)

router = APIRouter(prefix="/books", tags=["Books"])

# Request bodies are decoded by hand so that Content-Type is ignored
_BOOK_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {"schema": BookCreate.model_json_schema()},
        },
    }
}

# Handlers are sync and run in the threadpool.


@router.get("", response_model=list[Book])
def list_books(
    store: Annotated[BookStore, Depends(get_book_store)],
) -> list[Book]:
    """List all books in insertion order."""
    return store.list_books()


@router.post("", response_model=Book, status_code=201, openapi_extra=_BOOK_BODY)
def create_book(
    payload: Annotated[BookCreate, Depends(create_payload)],
    store: Annotated[BookStore, Depends(get_book_store)],
) -> Book:
    """
    Add a book to the collection.

    The id is assigned by the store; any id in the request body is ignored.
    """
    try:
        return store.add_book(payload)
    except StorePersistError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{book_id:path}", response_model=Book)
def get_book(
    book_id: Annotated[int, Depends(parse_book_id)],
    store: Annotated[BookStore, Depends(get_book_store)],
) -> Book:
    """Get a single book."""
    try:
        return store.get_book(book_id)
    except BookNotFoundError:
        raise HTTPException(status_code=404, detail="Book not found")


@router.put("/{book_id:path}", response_model=Book, openapi_extra=_BOOK_BODY)
def update_book(
    book_id: Annotated[int, Depends(parse_book_id)],
    payload: Annotated[BookUpdate, Depends(update_payload)],
    store: Annotated[BookStore, Depends(get_book_store)],
) -> Book:
    """Replace a book's title and author, keeping its id."""
    try:
        return store.replace_book(book_id, payload)
    except BookNotFoundError:
        raise HTTPException(status_code=404, detail="Book not found")
    except StorePersistError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{book_id:path}", status_code=204, response_class=Response)
def delete_book(
    book_id: Annotated[int, Depends(parse_book_id)],
    store: Annotated[BookStore, Depends(get_book_store)],
) -> Response:
    """Delete a book."""
    try:
        store.delete_book(book_id)
    except BookNotFoundError:
        raise HTTPException(status_code=404, detail="Book not found")
    except StorePersistError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return Response(status_code=204)
