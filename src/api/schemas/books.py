"""Book schemas."""

from pydantic import BaseModel, Field


class Book(BaseModel):
    """A book in the catalog."""
    id: int = Field(description="Unique book identifier, assigned by the store")
    title: str = Field(description="Book title")
    author: str = Field(description="Book author")


class BookCreate(BaseModel):
    """
    Request body for creating a book.

    Missing fields default to empty strings. Any client supplied id is ignored.
    """
    title: str = Field(default="", description="Book title")
    author: str = Field(default="", description="Book author")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "The Left Hand of Darkness",
                    "author": "Ursula K. Le Guin",
                }
            ]
        }
    }


class BookUpdate(BookCreate):
    """Request body for replacing a book's fields."""


class BookDatabase(BaseModel):
    """On-disk seed document."""
    books: list[Book] = Field(default_factory=list)
