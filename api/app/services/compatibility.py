from typing import Any

# Preference tokens that accept every gender ("båda" = both, "alla" = all).
ANY_GENDER_TOKENS = ("båda", "alla", "both", "all", "any")


def _norm(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def first_name(full_name: Any) -> str:
    s = str(full_name or "").strip()
    return s.split()[0] if s else ""


def wants(preference: Any, other_gender: Any) -> bool:
    pref = _norm(preference)
    gender = _norm(other_gender)
    if not pref:
        return True
    if any(token in pref for token in ANY_GENDER_TOKENS):
        return True
    return gender in pref


def _same_text(a: Any, b: Any) -> bool:
    a_norm = _norm(a)
    b_norm = _norm(b)
    return bool(a_norm) and bool(b_norm) and a_norm == b_norm


def is_compatible(
    a: dict[str, Any],
    b: dict[str, Any],
    blocked_pairs: set[tuple[int, int]] | None = None,
    matched_pairs: set[tuple[int, int]] | None = None,
) -> bool:
    blocked_pairs = blocked_pairs or set()
    matched_pairs = matched_pairs or set()
    a_id = a.get("id")
    b_id = b.get("id")

    if a_id == b_id:
        return False
    if not _same_text(a.get("city"), b.get("city")):
        return False
    if not _same_text(a.get("search_type"), b.get("search_type")):
        return False
    if (a_id, b_id) in blocked_pairs or (b_id, a_id) in blocked_pairs:
        return False
    if (a_id, b_id) in matched_pairs or (b_id, a_id) in matched_pairs:
        return False
    return wants(a.get("preference"), b.get("gender")) and wants(b.get("preference"), a.get("gender"))
