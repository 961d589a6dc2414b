"""
API router.

Aggregates all endpoints.
"""

from fastapi import APIRouter

from . import auth, system

router = APIRouter()

# Include all route modules
router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(system.router, prefix="/system", tags=["System"])
