"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from orgfinder.api.v1.dependencies.
"""

from fastapi import APIRouter

from orgfinder.api.v1.endpoints import health, lookups, search

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
api_router.include_router(lookups.router, prefix="/lookups", tags=["lookups"])
