"""
Admin / observability endpoints
===============================

GET /        -- plain-text banner confirming the server is up
GET /health  -- simple health check
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from aeras.api.schemas import HealthResponse
from aeras.config import settings

router = APIRouter(tags=["admin"])


@router.get("/", response_class=PlainTextResponse, summary="Server banner")
async def root():
    return f"{settings.app_name} is active."


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse()
