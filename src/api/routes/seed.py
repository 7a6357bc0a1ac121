"""
Development seed route - resets the catalog to fixed sample data
"""

import logging
from fastapi import APIRouter, HTTPException

from models.book import MessageResponse
from services.books_service import get_books_service

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/seed", response_model=MessageResponse, status_code=201)
async def seed_books():
    """Clear the collection and insert the sample books"""
    books_service = get_books_service()

    result = await books_service.seed_books()
    if not result.success:
        raise HTTPException(status_code=500, detail=f"Failed to seed books: {result.error}")

    logger.info(f"Seed completed with {result.count} books")
    return MessageResponse(message="Seed completed")
