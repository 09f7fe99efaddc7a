"""API v1 router aggregation."""
from __future__ import annotations

from fastapi import APIRouter

from app.api.v1.endpoints import ai_check, analyze, health

router = APIRouter()

router.include_router(analyze.router)
router.include_router(ai_check.router)
router.include_router(health.router)
