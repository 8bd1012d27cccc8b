from fastapi import APIRouter

from app.api.routes.auth import router as auth_router
from app.api.routes.cards import router as cards_router
from app.api.routes.health import router as health_router
from app.api.routes.user import router as user_router

api_router = APIRouter()
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(health_router, tags=["health"])
api_router.include_router(cards_router, tags=["cards"])
api_router.include_router(user_router, prefix="/user", tags=["user"])
