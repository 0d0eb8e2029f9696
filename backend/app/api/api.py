"""
API Router Aggregator.

Combines the v1 routers into a single router for the main app. Routes keep
the flat paths clients already call (``/api/signup``, ``/api/getjobs``...).
"""

from fastapi import APIRouter

from app.api.v1 import auth, jobs

api_router = APIRouter()

api_router.include_router(
    auth.router,
    tags=["Authentication"],
)

api_router.include_router(
    jobs.router,
    tags=["Jobs"],
)
