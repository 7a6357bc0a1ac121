"""
Book-related Pydantic models
"""

from typing import Any, Dict, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

# MongoDB stores integers as at most 8-byte signed values
BSON_INT64_MIN = -2**63
BSON_INT64_MAX = 2**63 - 1


def _require_text(value: Optional[str], field_name: str) -> str:
    if value is None or not value.strip():
        raise ValueError(f"{field_name} cannot be empty")
    return value.strip()

def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class BookCreateRequest(BaseModel):
    """Request body for creating a book; also used for full replacement"""
    title: str = Field(..., description="Book title (required, non-blank)")
    author: str = Field(..., description="Book author (required, non-blank)")
    isbn: Optional[str] = Field(None, description="ISBN, stored as given (trimmed)")
    year: Optional[int] = Field(None, ge=BSON_INT64_MIN, le=BSON_INT64_MAX, description="Publication year")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _require_text(v, 'title')

    @field_validator('author')
    @classmethod
    def validate_author(cls, v):
        return _require_text(v, 'author')

    @field_validator('isbn')
    @classmethod
    def validate_isbn(cls, v):
        return _optional_text(v)

    def to_fields(self) -> Dict[str, Any]:
        """All mutable fields, including cleared optionals as None"""
        return self.model_dump()


class BookReplaceRequest(BookCreateRequest):
    """Full field set for PUT - same shape and rules as creation"""


class BookPatchRequest(BaseModel):
    """Partial update; only fields present in the body are applied"""
    title: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None
    year: Optional[int] = Field(None, ge=BSON_INT64_MIN, le=BSON_INT64_MAX)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _require_text(v, 'title')

    @field_validator('author')
    @classmethod
    def validate_author(cls, v):
        return _require_text(v, 'author')

    @field_validator('isbn')
    @classmethod
    def validate_isbn(cls, v):
        return _optional_text(v)

    def to_fields(self) -> Dict[str, Any]:
        """Only the fields the client sent; None means clear the field"""
        return self.model_dump(exclude_unset=True)


class BookResponse(BaseModel):
    id: str
    title: str
    author: str
    isbn: Optional[str] = None
    year: Optional[int] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "BookResponse":
        """Build a response from a stored MongoDB document"""
        return cls(
            id=str(doc["_id"]),
            title=doc.get("title", ""),
            author=doc.get("author", ""),
            isbn=doc.get("isbn"),
            year=doc.get("year"),
            createdAt=doc.get("createdAt"),
            updatedAt=doc.get("updatedAt")
        )


class BookSearchQuery(BaseModel):
    """Search parameters for listing books"""
    q: Optional[str] = Field(None, description="Free-text term matched against title, author or isbn (OR)")
    title: Optional[str] = Field(None, description="Partial match on title")
    author: Optional[str] = Field(None, description="Partial match on author")
    isbn: Optional[str] = Field(None, description="Partial match on isbn")


class MessageResponse(BaseModel):
    message: str
