from typing import Any

from fastapi import APIRouter, Depends, Request

from ..config import Settings
from ..database import open_session
from ..deps import get_settings, read_json_body
from ..http_helpers import require_positive_int
from ..services.notifications import send_match_invites, send_test_email

router = APIRouter()


@router.post("/sendTestEmail")
def send_test_email_route(
    request: Request,
    payload: dict[str, Any] = Depends(read_json_body),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    return send_test_email(settings, payload, dict(request.query_params))


@router.post("/sendMatchInvites")
def send_match_invites_route(
    payload: dict[str, Any] = Depends(read_json_body),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    match_id = require_positive_int(payload.get("matchId"), "POST JSON: { matchId: 7 }")
    with open_session(settings) as db:
        return send_match_invites(db, settings, match_id)
