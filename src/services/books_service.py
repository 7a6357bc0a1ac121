"""
Books service - business logic for the book catalog
"""

import logging
from typing import Dict, Any, List, Optional

from database.connection import get_books_collection
from services.base_service import BaseService, ServiceResult
from utils.helpers import contains_pattern

logger = logging.getLogger(__name__)

SEARCHABLE_FIELDS = ("title", "author", "isbn")
OPTIONAL_FIELDS = ["isbn", "year"]

# Newest first; _id breaks ties between records created in the same millisecond
NEWEST_FIRST = [("createdAt", -1), ("_id", -1)]

SEED_BOOKS: List[Dict[str, Any]] = [
    {"title": "Node.js Textbook", "author": "Hong Gildong", "isbn": "978-000000001", "year": 2024},
    {"title": "JavaScript Deep Dive", "author": "Park Java", "isbn": "978-000000002", "year": 2023},
    {"title": "MongoDB Basics", "author": "Lee Mongo", "isbn": "978-000000003", "year": 2022},
]

def build_search_filter(
    q: Optional[str] = None,
    title: Optional[str] = None,
    author: Optional[str] = None,
    isbn: Optional[str] = None
) -> Dict[str, Any]:
    """
    Build the MongoDB filter for a book search

    A non-empty ``q`` matches any searchable field and takes precedence over
    the per-field filters, which are otherwise combined with AND.
    """
    if q:
        return {"$or": [{field: contains_pattern(q)} for field in SEARCHABLE_FIELDS]}

    filters = {}
    for field, term in (("title", title), ("author", author), ("isbn", isbn)):
        if term:
            filters[field] = contains_pattern(term)
    return filters

class BooksService(BaseService):
    """Service for book catalog operations"""

    def __init__(self):
        super().__init__("books", get_books_collection)

    async def search_books(
        self,
        q: Optional[str] = None,
        title: Optional[str] = None,
        author: Optional[str] = None,
        isbn: Optional[str] = None
    ) -> ServiceResult:
        """
        List books, optionally filtered, newest first

        Args:
            q: Free-text term matched against title, author or isbn
            title: Partial match on title (ignored when q is given)
            author: Partial match on author (ignored when q is given)
            isbn: Partial match on isbn (ignored when q is given)

        Returns:
            ServiceResult with matching books
        """
        filters = build_search_filter(q=q, title=title, author=author, isbn=isbn)
        return await self.read(filters=filters, sort=NEWEST_FIRST)

    async def get_book_by_id(self, book_id: str) -> ServiceResult:
        return await self.get_by_id(book_id)

    async def create_book(
        self,
        title: str,
        author: str,
        isbn: Optional[str] = None,
        year: Optional[int] = None
    ) -> ServiceResult:
        """
        Create a new book

        Returns:
            ServiceResult with the created book, including id and timestamps
        """
        logger.info(f"Creating book: {title!r} by {author!r}")
        return await self.create({
            "title": title,
            "author": author,
            "isbn": isbn,
            "year": year
        })

    async def replace_book(self, book_id: str, fields: Dict[str, Any]) -> ServiceResult:
        """
        Overwrite every mutable field of a book

        Optional fields missing from ``fields`` are cleared.
        """
        logger.info(f"Replacing book {book_id}")
        return await self.update(book_id, fields, clear_missing=OPTIONAL_FIELDS)

    async def patch_book(self, book_id: str, fields: Dict[str, Any]) -> ServiceResult:
        """Merge the supplied fields into an existing book"""
        logger.info(f"Patching book {book_id}: {sorted(fields)}")
        return await self.update(book_id, fields)

    async def delete_book(self, book_id: str) -> ServiceResult:
        logger.info(f"Deleting book {book_id}")
        return await self.delete(book_id)

    async def seed_books(self) -> ServiceResult:
        """
        Reset the catalog to the fixed sample records

        Destructive: every existing book is removed first.
        """
        logger.warning("Seeding books collection - all existing records will be removed")
        return await self.replace_all(SEED_BOOKS)

# Global service instance
_books_service = None

def get_books_service() -> BooksService:
    """Get the global books service instance"""
    global _books_service
    if _books_service is None:
        _books_service = BooksService()
    return _books_service
