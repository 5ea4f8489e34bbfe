from fastapi import APIRouter

from app.interfaces.http.routers import audio, auth, users


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(users.router, prefix="/users", tags=["users"])
    router.include_router(audio.router, prefix="/audio", tags=["audio"])
    return router


__all__ = [
    "create_api_router",
]
