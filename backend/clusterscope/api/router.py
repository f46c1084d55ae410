"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from clusterscope.api import datasets, health, sessions, view

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(datasets.router)
api_router.include_router(view.router)
api_router.include_router(sessions.router)
