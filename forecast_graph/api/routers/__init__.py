"""API sub-routers assembled into a single api_router."""

from fastapi import APIRouter

from forecast_graph.api.routers.health import router as health_router
from forecast_graph.api.routers.widgets import router as widgets_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(widgets_router, prefix="/widgets", tags=["widgets"])
