from typing import Any

from fastapi import APIRouter, Depends

from ..config import Settings
from ..database import open_session
from ..deps import get_settings, read_json_body
from ..services.profiles import prepare_profile, submit_profile

router = APIRouter()


@router.get("/submitProfile")
def submit_profile_liveness() -> dict[str, Any]:
    return {"ok": True, "message": "SubmitProfile live (POST expected)"}


@router.post("/submitProfile")
def submit_profile_route(
    payload: dict[str, Any] = Depends(read_json_body),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    values = prepare_profile(payload, settings.default_search_type)
    with open_session(settings) as db:
        profile_id = submit_profile(db, values)
    return {"ok": True, "id": profile_id}
