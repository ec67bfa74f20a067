"""HTTP presentation layer - REST API routes."""

from fastapi import APIRouter

from classica.presentation.http.chat import router as chat_router
from classica.presentation.http.events import router as events_router
from classica.presentation.http.health import router as health_router
from classica.presentation.http.onboarding import router as onboarding_router

# Main API router
api_router = APIRouter()

api_router.include_router(health_router, tags=["Health"])
api_router.include_router(chat_router)
api_router.include_router(onboarding_router)
api_router.include_router(events_router)

__all__ = ["api_router"]
