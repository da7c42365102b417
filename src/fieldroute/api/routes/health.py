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
    """Check that Supabase is configured and the work_orders table answers."""
    from ...db.supabase import get_supabase_client

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set FIELDROUTE_SUPABASE_URL and FIELDROUTE_SUPABASE_KEY environment variables.",
        }

    try:
        supabase.table("work_orders").select("id").limit(1).execute()
        return {
            "configured": True,
            "connected": True,
            "message": "Database connected.",
        }
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
