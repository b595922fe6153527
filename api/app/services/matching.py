from __future__ import annotations

import logging
import random
import secrets
from dataclasses import dataclass
from typing import Any

from .. import repo, schema
from ..config import Settings
from ..schemas import MatchParty, MatchSummary
from .compatibility import first_name, is_compatible

logger = logging.getLogger(__name__)

REASON_NOT_ENOUGH_PROFILES = "Not enough eligible profiles"
REASON_NO_ELIGIBLE_PAIR = "No eligible pair found"


@dataclass
class MatchCandidate:
    a: dict[str, Any]
    b: dict[str, Any]


@dataclass
class MatchResult:
    match: MatchSummary | None
    reason: str | None = None

    def as_payload(self) -> dict[str, Any]:
        if self.match is None:
            return {"ok": True, "match": None, "reason": self.reason}
        return {"ok": True, "match": self.match.model_dump()}


def canonical_pair(a_id: int, b_id: int) -> tuple[int, int]:
    return (a_id, b_id) if a_id <= b_id else (b_id, a_id)


def new_opt_in_token() -> str:
    return secrets.token_urlsafe(24)


def build_candidate_pairs(
    profiles: list[dict[str, Any]],
    blocked_pairs: set[tuple[int, int]] | None = None,
    matched_pairs: set[tuple[int, int]] | None = None,
) -> list[MatchCandidate]:
    candidates: list[MatchCandidate] = []
    for i in range(len(profiles)):
        for j in range(i + 1, len(profiles)):
            a = profiles[i]
            b = profiles[j]
            if is_compatible(a, b, blocked_pairs, matched_pairs):
                candidates.append(MatchCandidate(a=a, b=b))
    return candidates


def generate_match(db, *, settings: Settings, rng: random.Random | None = None) -> MatchResult:
    """Pick one compatible pair at random and persist it as a Pending match.

    Reads and insert run on one session without locking; two concurrent runs can
    pick the same pair, in which case the unique pair index rejects the second
    insert and the caller sees a storage error.
    """
    rng = rng or random.SystemRandom()

    schema.ensure_profile_schema(db)
    schema.ensure_match_schema(db)
    schema.ensure_opt_in_schema(db)

    profiles = repo.fetch_eligible_profiles(db, limit=settings.match_pool_limit)
    if len(profiles) < 2:
        db.commit()
        logger.info("[MATCH] pool=%s, %s", len(profiles), REASON_NOT_ENOUGH_PROFILES)
        return MatchResult(match=None, reason=REASON_NOT_ENOUGH_PROFILES)

    blocked = repo.fetch_block_pairs(db)
    matched = repo.fetch_matched_pairs(db)

    candidates = build_candidate_pairs(profiles, blocked_pairs=blocked, matched_pairs=matched)
    if not candidates:
        db.commit()
        logger.info("[MATCH] pool=%s candidates=0, %s", len(profiles), REASON_NO_ELIGIBLE_PAIR)
        return MatchResult(match=None, reason=REASON_NO_ELIGIBLE_PAIR)

    pick = rng.choice(candidates)
    a, b = pick.a, pick.b

    match_id = repo.insert_pending_match(
        db,
        profile_a_id=int(a["id"]),
        profile_b_id=int(b["id"]),
        city=a.get("city"),
        search_type=a.get("search_type"),
        expiry_hours=settings.match_expiry_hours,
    )
    if match_id is not None:
        for party in (a, b):
            repo.insert_opt_in(db, match_id=match_id, profile_id=int(party["id"]), token=new_opt_in_token())
    db.commit()

    logger.info(
        "[MATCH] created match_id=%s pair=%s pool=%s candidates=%s",
        match_id,
        canonical_pair(int(a["id"]), int(b["id"])),
        len(profiles),
        len(candidates),
    )
    return MatchResult(
        match=MatchSummary(
            matchId=match_id,
            city=a.get("city"),
            searchType=a.get("search_type"),
            a=MatchParty(id=int(a["id"]), firstName=first_name(a.get("full_name"))),
            b=MatchParty(id=int(b["id"]), firstName=first_name(b.get("full_name"))),
        )
    )
