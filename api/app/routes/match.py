from typing import Any

from fastapi import APIRouter, Depends

from ..config import Settings
from ..database import open_session
from ..deps import get_settings
from ..services.lifecycle import expire_matches, respond_to_match, validate_opt_in_request
from ..services.matching import generate_match

router = APIRouter()


@router.post("/matchNow")
def match_now(settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    with open_session(settings) as db:
        result = generate_match(db, settings=settings)
    return result.as_payload()


@router.post("/expireMatches")
def expire_matches_route(settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    with open_session(settings) as db:
        out = expire_matches(db)
    return {"ok": True, **out}


@router.get("/matchRespond")
def match_respond(
    token: str | None = None,
    answer: str | None = None,
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    token_s, answer_s = validate_opt_in_request(token, answer)
    with open_session(settings) as db:
        out = respond_to_match(db, token_s, answer_s)
    return {"ok": True, **out}
