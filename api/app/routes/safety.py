from typing import Any

from fastapi import APIRouter, Depends

from ..config import Settings
from ..database import open_session
from ..deps import get_settings, read_json_body
from ..services.blocking import block_pair, validate_block_request

router = APIRouter()


@router.post("/blockPair")
def block_pair_route(
    payload: dict[str, Any] = Depends(read_json_body),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    blocker_id, blocked_id = validate_block_request(payload)
    with open_session(settings) as db:
        out = block_pair(db, blocker_id, blocked_id)
    return {"ok": True, **out}
