"""
Book catalog API routes
All database operations go through the books service layer.
"""

import logging
from typing import Annotated, List
from fastapi import APIRouter, HTTPException, Query, Response

from models.book import BookCreateRequest, BookReplaceRequest, BookPatchRequest, BookResponse, BookSearchQuery
from services.base_service import ServiceResult, INVALID_ID, VALIDATION_ERROR, RESOURCE_NOT_FOUND
from services.books_service import get_books_service

router = APIRouter()
logger = logging.getLogger(__name__)

def raise_for_result(result: ServiceResult, action: str) -> None:
    """Translate a failed service result into the matching HTTP error"""
    if result.success:
        return
    if result.error_type in (INVALID_ID, VALIDATION_ERROR):
        raise HTTPException(status_code=400, detail=result.error)
    if result.error_type == RESOURCE_NOT_FOUND:
        raise HTTPException(status_code=404, detail="Book not found")
    raise HTTPException(status_code=500, detail=f"Failed to {action} book: {result.error}")

@router.get("", response_model=List[BookResponse])
async def list_books(query: Annotated[BookSearchQuery, Query()]):
    """List books, newest first, optionally filtered"""
    books_service = get_books_service()

    result = await books_service.search_books(
        q=query.q,
        title=query.title,
        author=query.author,
        isbn=query.isbn
    )
    raise_for_result(result, "list")

    return [BookResponse.from_document(doc) for doc in result.data]

@router.get("/{book_id}", response_model=BookResponse)
async def get_book(book_id: str):
    """Get a single book"""
    books_service = get_books_service()

    result = await books_service.get_book_by_id(book_id)
    raise_for_result(result, "get")

    return BookResponse.from_document(result.data[0])

@router.post("", response_model=BookResponse, status_code=201)
async def create_book(request: BookCreateRequest):
    """Create a new book"""
    books_service = get_books_service()

    result = await books_service.create_book(
        title=request.title,
        author=request.author,
        isbn=request.isbn,
        year=request.year
    )
    raise_for_result(result, "create")

    return BookResponse.from_document(result.data[0])

@router.put("/{book_id}", response_model=BookResponse)
async def replace_book(book_id: str, request: BookReplaceRequest):
    """Replace every mutable field of a book"""
    books_service = get_books_service()

    result = await books_service.replace_book(book_id, request.to_fields())
    raise_for_result(result, "replace")

    return BookResponse.from_document(result.data[0])

@router.patch("/{book_id}", response_model=BookResponse)
async def patch_book(book_id: str, request: BookPatchRequest):
    """Update only the fields present in the request body"""
    books_service = get_books_service()

    result = await books_service.patch_book(book_id, request.to_fields())
    raise_for_result(result, "update")

    return BookResponse.from_document(result.data[0])

@router.delete("/{book_id}", status_code=204, response_class=Response)
async def delete_book(book_id: str):
    """Delete a book"""
    books_service = get_books_service()

    result = await books_service.delete_book(book_id)
    raise_for_result(result, "delete")

    return Response(status_code=204)
