from typing import Any

from fastapi import APIRouter, Depends

from ..config import Settings
from ..database import open_session
from ..deps import get_settings
from ..http_helpers import require_positive_int
from ..services.profiles import delete_profile, list_profiles

router = APIRouter()


@router.get("/profiles")
def list_profiles_route(settings: Settings = Depends(get_settings)) -> list[dict[str, Any]]:
    with open_session(settings) as db:
        return list_profiles(db)


@router.delete("/profiles")
def delete_profile_route(id: str | None = None, settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    profile_id = require_positive_int(id, "Query parameter id must be a positive integer")
    with open_session(settings) as db:
        out = delete_profile(db, profile_id)
    return {"ok": True, **out}
