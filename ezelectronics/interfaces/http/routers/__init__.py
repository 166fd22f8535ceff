from fastapi import APIRouter

from . import sessions, users


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
    router.include_router(users.router, prefix="/users", tags=["users"])
    return router


__all__ = [
    "create_api_router",
]
