"""
Health check API route
"""

from fastapi import APIRouter

router = APIRouter()

@router.get("/health")
async def health_check():
    """Liveness check - fixed payload, no database access"""
    return {"status": "ok"}
