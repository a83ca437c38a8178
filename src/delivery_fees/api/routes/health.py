"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection and delivery zone storage status."""
    from ...db.supabase import get_supabase_client
    from ...data.supabase_repository import SupabaseDeliveryRepository

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set DLV_SUPABASE_URL and DLV_SUPABASE_KEY environment variables.",
            "zones_count": 0,
        }

    try:
        zones_count = SupabaseDeliveryRepository(supabase).count_zones()
        return {
            "configured": True,
            "connected": True,
            "zones_count": zones_count,
            "message": f"Database connected. Found {zones_count} delivery zones.",
        }
    except ConnectionError as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
