"""API routes package."""

from fastapi import APIRouter

from jersey_store.api.routes import jerseys

api_router = APIRouter()

api_router.include_router(jerseys.router, tags=["Jerseys"])
