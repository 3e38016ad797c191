"""Request parsing dependencies for the book endpoints."""

import re

import structlog
from fastapi import HTTPException, Request
from pydantic import ValidationError

from src.api.schemas.books import BookCreate, BookUpdate

logger = structlog.get_logger(__name__)

_BOOK_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

# Ids are signed 64-bit integers
_MIN_BOOK_ID = -(2**63)
_MAX_BOOK_ID = 2**63 - 1


def parse_book_id(book_id: str) -> int:
    """
    Parse the path suffix after /books/ as a book id.

    Only an optionally signed run of ASCII digits that fits in 64 bits is
    accepted. Anything else, including an empty suffix or extra path
    segments, is rejected with 400.
    """
    if _BOOK_ID_PATTERN.fullmatch(book_id):
        value = int(book_id)
        if _MIN_BOOK_ID <= value <= _MAX_BOOK_ID:
            return value

    logger.info("Rejected book id", book_id=book_id)
    raise HTTPException(status_code=400, detail=f"Invalid book ID: {book_id}")


async def _read_body(request: Request, model: type[BookCreate]) -> BookCreate:
    # The body is parsed as JSON whatever Content-Type the client sent
    body = await request.body()
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        logger.info(
            "Rejected request body",
            method=request.method,
            path=request.url.path,
            errors=e.error_count(),
        )
        raise HTTPException(status_code=400, detail="Invalid JSON body")


async def create_payload(request: Request) -> BookCreate:
    """Decode a create request body."""
    return await _read_body(request, BookCreate)


async def update_payload(request: Request) -> BookUpdate:
    """Decode an update request body."""
    return await _read_body(request, BookUpdate)
