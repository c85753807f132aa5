"""Version 1 API routers."""

from fastapi import APIRouter

from . import auth, subscriptions, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(subscriptions.router)

__all__ = ["api_router"]
