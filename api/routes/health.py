"""Health check routes"""

from fastapi import APIRouter, Depends

from adapters.cache_manager import CacheManager
from api.dependencies import get_cache_manager
from app.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health-check")
def health_check(cache: CacheManager = Depends(get_cache_manager)):
    """Basic health check endpoint"""
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
        "cache_entries": len(cache),
    }
