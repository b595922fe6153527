from typing import Iterable

PENDING = "Pending"
CONFIRMED = "Confirmed"
CANCELLED = "Cancelled"
EXPIRED = "Expired"

MATCH_STATUSES = (PENDING, CONFIRMED, CANCELLED, EXPIRED)
OPT_IN_ANSWERS = ("yes", "no")


def normalize_answer(answer: str | None) -> str:
    return str(answer or "").strip().lower()


def decide_match_status(answers: Iterable[str | None]) -> str:
    normalized = [normalize_answer(a) for a in answers]
    # a single "no" vetoes the match whatever arrived before it
    if "no" in normalized:
        return CANCELLED
    if normalized.count("yes") >= 2:
        return CONFIRMED
    return PENDING
