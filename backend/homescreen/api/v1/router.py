"""Aggregate all v1 sub-routers."""

from fastapi import APIRouter

from homescreen.api.v1.configs import router as configs_router
from homescreen.api.v1.health import router as health_router

api_v1_router = APIRouter()

api_v1_router.include_router(health_router, tags=["health"])
api_v1_router.include_router(configs_router, prefix="/configs", tags=["configs"])
