"""API v1 routes."""

from fastapi import APIRouter

from tripcast.api.v1 import auth, health, trips, users, weather

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(trips.router, prefix="/trips", tags=["trips"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(weather.router, prefix="/weather", tags=["weather"])
