from typing import Any

from sqlalchemy import text

PROFILE_COLUMNS = (
    "full_name",
    "email",
    "phone",
    "gender",
    "preference",
    "city",
    "fb_link",
    "search_type",
)


# ---------- profiles ----------

def insert_profile(db, values: dict[str, Any]) -> int | None:
    row = db.execute(
        text(
            """
            INSERT INTO profiles
              (full_name, email, phone, gender, preference, city, fb_link, search_type, consent_gdpr, last_active_at)
            VALUES
              (:full_name, :email, :phone, :gender, :preference, :city, :fb_link, :search_type, true, NOW())
            RETURNING id
            """
        ),
        {col: values.get(col) for col in PROFILE_COLUMNS},
    ).mappings().first()
    return int(row["id"]) if row else None


def list_profiles(db) -> list[dict[str, Any]]:
    rows = db.execute(
        text("SELECT id, full_name, city, search_type FROM profiles ORDER BY id")
    ).mappings().all()
    return [dict(r) for r in rows]


def delete_profile(db, profile_id: int) -> int:
    res = db.execute(text("DELETE FROM profiles WHERE id = :id"), {"id": profile_id})
    return int(res.rowcount or 0)


def fetch_eligible_profiles(db, limit: int) -> list[dict[str, Any]]:
    rows = db.execute(
        text(
            """
            SELECT id, full_name, city, gender, preference, search_type
            FROM profiles
            WHERE COALESCE(consent_gdpr, false) = true
              AND COALESCE(is_paused, false) = false
              AND COALESCE(is_banned, false) = false
            ORDER BY random()
            LIMIT :limit
            """
        ),
        {"limit": max(0, int(limit))},
    ).mappings().all()
    return [dict(r) for r in rows]


# ---------- blocks ----------

def fetch_block_pairs(db) -> set[tuple[int, int]]:
    rows = db.execute(
        text("SELECT blocker_profile_id, blocked_profile_id FROM blocks")
    ).mappings().all()
    return {(int(r["blocker_profile_id"]), int(r["blocked_profile_id"])) for r in rows}


def insert_block_if_absent(db, blocker_id: int, blocked_id: int) -> bool:
    res = db.execute(
        text(
            """
            INSERT INTO blocks (blocker_profile_id, blocked_profile_id)
            SELECT :blocker, :blocked
            WHERE NOT EXISTS (
              SELECT 1 FROM blocks
              WHERE blocker_profile_id = :blocker AND blocked_profile_id = :blocked
            )
            ON CONFLICT DO NOTHING
            """
        ),
        {"blocker": blocker_id, "blocked": blocked_id},
    )
    return bool(res.rowcount)


# ---------- matches ----------

def fetch_matched_pairs(db) -> set[tuple[int, int]]:
    rows = db.execute(text("SELECT profile_a_id, profile_b_id FROM matches")).mappings().all()
    out: set[tuple[int, int]] = set()
    for r in rows:
        a = int(r["profile_a_id"])
        b = int(r["profile_b_id"])
        out.add((a, b))
        out.add((b, a))
    return out


def insert_pending_match(db, *, profile_a_id: int, profile_b_id: int, city: str, search_type: str, expiry_hours: int) -> int | None:
    row = db.execute(
        text(
            """
            INSERT INTO matches (profile_a_id, profile_b_id, city, search_type, status, expires_at)
            VALUES (:a, :b, :city, :search_type, 'Pending', NOW() + make_interval(hours => :hours))
            RETURNING id
            """
        ),
        {"a": profile_a_id, "b": profile_b_id, "city": city, "search_type": search_type, "hours": int(expiry_hours)},
    ).mappings().first()
    return int(row["id"]) if row else None


def expire_pending_matches(db) -> list[int]:
    rows = db.execute(
        text(
            """
            UPDATE matches
            SET status = 'Expired'
            WHERE status = 'Pending'
              AND expires_at IS NOT NULL
              AND expires_at < NOW()
            RETURNING id
            """
        )
    ).mappings().all()
    return [int(r["id"]) for r in rows]


def update_match_status(db, match_id: int, status: str) -> None:
    db.execute(text("UPDATE matches SET status = :status WHERE id = :id"), {"status": status, "id": match_id})


def get_match(db, match_id: int) -> dict[str, Any] | None:
    row = db.execute(
        text("SELECT id, profile_a_id, profile_b_id, city, search_type, status, expires_at FROM matches WHERE id = :id"),
        {"id": match_id},
    ).mappings().first()
    return dict(row) if row else None


# ---------- opt-ins ----------

def insert_opt_in(db, *, match_id: int, profile_id: int, token: str) -> None:
    db.execute(
        text("INSERT INTO match_opt_ins (match_id, profile_id, token) VALUES (:match_id, :profile_id, :token)"),
        {"match_id": match_id, "profile_id": profile_id, "token": token},
    )


def get_opt_in_by_token(db, token: str) -> dict[str, Any] | None:
    row = db.execute(
        text("SELECT match_id, profile_id, answer FROM match_opt_ins WHERE token = :token LIMIT 1"),
        {"token": token},
    ).mappings().first()
    return dict(row) if row else None


def record_opt_in_answer(db, token: str, answer: str) -> None:
    db.execute(
        text("UPDATE match_opt_ins SET answer = :answer, answered_at = NOW() WHERE token = :token"),
        {"answer": answer, "token": token},
    )


def list_opt_in_answers(db, match_id: int) -> list[str | None]:
    rows = db.execute(
        text("SELECT answer FROM match_opt_ins WHERE match_id = :match_id"),
        {"match_id": match_id},
    ).mappings().all()
    return [r["answer"] for r in rows]


def list_opt_in_recipients(db, match_id: int) -> list[dict[str, Any]]:
    """Parties of the match that have not been sent their invite yet."""
    rows = db.execute(
        text(
            """
            SELECT o.profile_id, o.token, p.full_name, p.email
            FROM match_opt_ins o
            JOIN profiles p ON p.id = o.profile_id
            WHERE o.match_id = :match_id
              AND o.invited_at IS NULL
            ORDER BY o.id
            """
        ),
        {"match_id": match_id},
    ).mappings().all()
    return [dict(r) for r in rows]


def mark_opt_in_invited(db, token: str) -> None:
    db.execute(
        text("UPDATE match_opt_ins SET invited_at = NOW() WHERE token = :token"),
        {"token": token},
    )
