"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from sashiko.api import export, health, path, svg

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(svg.router)
api_router.include_router(path.router)
api_router.include_router(export.router)
