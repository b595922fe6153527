import logging
from typing import Any

from .. import repo, schema
from ..errors import ValidationError
from ..http_helpers import parse_positive_int

logger = logging.getLogger(__name__)


def validate_block_request(payload: dict[str, Any]) -> tuple[int, int]:
    blocker_id = parse_positive_int(payload.get("blockerId"))
    blocked_id = parse_positive_int(payload.get("blockedId"))
    if blocker_id is None or blocked_id is None:
        raise ValidationError("POST JSON: { blockerId: 14, blockedId: 15 }")
    if blocker_id == blocked_id:
        raise ValidationError("blockerId and blockedId cannot be same")
    return blocker_id, blocked_id


def block_pair(db, blocker_id: int, blocked_id: int) -> dict[str, Any]:
    schema.ensure_match_schema(db)
    inserted = repo.insert_block_if_absent(db, blocker_id, blocked_id)
    db.commit()
    logger.info("[BLOCK] blocker=%s blocked=%s inserted=%s", blocker_id, blocked_id, inserted)
    return {"blockerId": blocker_id, "blockedId": blocked_id}
