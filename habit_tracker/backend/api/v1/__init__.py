"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from habit_tracker.backend.api.v1.endpoints import admin, auth, entries, habits, stats

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(habits.router, prefix="/habits", tags=["habits"])
router.include_router(entries.router, prefix="/entries", tags=["entries"])
router.include_router(stats.router, prefix="/stats", tags=["stats"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
