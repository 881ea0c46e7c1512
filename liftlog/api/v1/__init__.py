"""API v1 router aggregation."""

from fastapi import APIRouter

from liftlog.api.v1.endpoints import exercises, health, progression, settings, workouts

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])
api_router.include_router(progression.router, prefix="/progression", tags=["progression"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
