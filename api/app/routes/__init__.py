from fastapi import APIRouter, FastAPI

from .admin import router as admin_router
from .email import router as email_router
from .match import router as match_router
from .profile import router as profile_router
from .safety import router as safety_router


def include_modular_routers(app: FastAPI) -> None:
    app.include_router(profile_router, tags=["profiles"])
    app.include_router(admin_router, tags=["admin"])
    app.include_router(match_router, tags=["matches"])
    app.include_router(safety_router, tags=["safety"])
    app.include_router(email_router, tags=["email"])


__all__ = ["include_modular_routers", "APIRouter"]
