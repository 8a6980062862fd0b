"""
API v1 Router

Engine endpoints for the dashboard frontend.
"""

from fastapi import APIRouter

from cryptodash.api.v1.endpoints import indicators

router = APIRouter()

router.include_router(indicators.router, prefix="/indicators", tags=["Indicators"])
