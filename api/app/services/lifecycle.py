import logging
from typing import Any

from .. import repo, schema
from ..errors import NotFoundError, ValidationError
from .state_machine import CANCELLED, CONFIRMED, OPT_IN_ANSWERS, decide_match_status, normalize_answer

logger = logging.getLogger(__name__)

MIN_TOKEN_LENGTH = 10


def expire_matches(db) -> dict[str, Any]:
    schema.ensure_match_schema(db)
    expired_ids = repo.expire_pending_matches(db)
    db.commit()
    logger.info("[EXPIRE] expired_count=%s ids=%s", len(expired_ids), expired_ids)
    return {"expiredCount": len(expired_ids), "expiredMatchIds": expired_ids}


def validate_opt_in_request(token: str | None, answer: str | None) -> tuple[str, str]:
    token_s = str(token or "")
    if not token_s or len(token_s) < MIN_TOKEN_LENGTH:
        raise ValidationError("Missing/invalid token")
    answer_s = normalize_answer(answer)
    if answer_s not in OPT_IN_ANSWERS:
        raise ValidationError("answer must be yes or no")
    return token_s, answer_s


def respond_to_match(db, token: str, answer: str) -> dict[str, Any]:
    """Record one party's yes/no and move the match to Confirmed or Cancelled when decided.

    Callers validate with validate_opt_in_request before opening a session.
    """
    schema.ensure_opt_in_schema(db)

    opt_in = repo.get_opt_in_by_token(db, token)
    if not opt_in:
        raise NotFoundError("Token not found")

    match_id = int(opt_in["match_id"])
    repo.record_opt_in_answer(db, token, answer)

    status = decide_match_status(repo.list_opt_in_answers(db, match_id))
    if status in (CANCELLED, CONFIRMED):
        repo.update_match_status(db, match_id, status)
    db.commit()

    logger.info("[OPT_IN] match_id=%s profile_id=%s answer=%s status=%s", match_id, opt_in.get("profile_id"), answer, status)
    return {"matchId": match_id, "status": status}
