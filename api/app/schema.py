"""Idempotent "create if absent" DDL, run before the statements that need the tables.

Every statement here is safe to execute on each request. Once the objects exist
only a catalog lookup runs.
"""

import logging

from sqlalchemy import text

logger = logging.getLogger(__name__)

PROFILE_SCHEMA_SQL = (
    """
    CREATE TABLE IF NOT EXISTS profiles (
      id SERIAL PRIMARY KEY,
      full_name TEXT NULL,
      email TEXT NULL,
      phone TEXT NULL,
      gender TEXT NULL,
      preference TEXT NULL,
      city TEXT NULL,
      fb_link TEXT NULL,
      search_type TEXT NULL,
      created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    "ALTER TABLE profiles ADD COLUMN IF NOT EXISTS consent_gdpr BOOLEAN NOT NULL DEFAULT FALSE",
    "ALTER TABLE profiles ADD COLUMN IF NOT EXISTS last_active_at TIMESTAMPTZ NULL",
    "ALTER TABLE profiles ADD COLUMN IF NOT EXISTS is_paused BOOLEAN NOT NULL DEFAULT FALSE",
    "ALTER TABLE profiles ADD COLUMN IF NOT EXISTS is_banned BOOLEAN NOT NULL DEFAULT FALSE",
)

MATCH_SCHEMA_SQL = (
    """
    CREATE TABLE IF NOT EXISTS matches (
      id SERIAL PRIMARY KEY,
      profile_a_id INTEGER NOT NULL,
      profile_b_id INTEGER NOT NULL,
      city TEXT NULL,
      search_type TEXT NULL,
      status TEXT NOT NULL DEFAULT 'Pending',
      created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
      expires_at TIMESTAMPTZ NULL,
      CONSTRAINT ck_matches_distinct_profiles CHECK (profile_a_id <> profile_b_id)
    )
    """,
    # one match per unordered pair, whatever its status
    """
    CREATE UNIQUE INDEX IF NOT EXISTS ux_matches_pair
      ON matches (LEAST(profile_a_id, profile_b_id), GREATEST(profile_a_id, profile_b_id))
    """,
    "CREATE INDEX IF NOT EXISTS idx_matches_status_expires ON matches (status, expires_at)",
    """
    CREATE TABLE IF NOT EXISTS blocks (
      id SERIAL PRIMARY KEY,
      blocker_profile_id INTEGER NOT NULL,
      blocked_profile_id INTEGER NOT NULL,
      created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    "CREATE UNIQUE INDEX IF NOT EXISTS ux_blocks_pair ON blocks (blocker_profile_id, blocked_profile_id)",
)

OPT_IN_SCHEMA_SQL = (
    """
    CREATE TABLE IF NOT EXISTS match_opt_ins (
      id SERIAL PRIMARY KEY,
      match_id INTEGER NOT NULL,
      profile_id INTEGER NOT NULL,
      token TEXT NOT NULL,
      answer TEXT NULL,
      answered_at TIMESTAMPTZ NULL,
      invited_at TIMESTAMPTZ NULL,
      created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    "CREATE UNIQUE INDEX IF NOT EXISTS ux_match_opt_ins_token ON match_opt_ins (token)",
    "CREATE INDEX IF NOT EXISTS idx_match_opt_ins_match_id ON match_opt_ins (match_id)",
    "ALTER TABLE match_opt_ins ADD COLUMN IF NOT EXISTS invited_at TIMESTAMPTZ NULL",
)


PROFILE_RELATIONS = ("profiles",)
PROFILE_COLUMNS = ("consent_gdpr", "last_active_at", "is_paused", "is_banned")
MATCH_RELATIONS = ("matches", "ux_matches_pair", "idx_matches_status_expires", "blocks", "ux_blocks_pair")
OPT_IN_RELATIONS = ("match_opt_ins", "ux_match_opt_ins_token", "idx_match_opt_ins_match_id")
OPT_IN_COLUMNS = ("invited_at",)

# to_regclass and information_schema reads take no lock on the user tables
RELATIONS_PRESENT_SQL = """
SELECT COUNT(*)
FROM unnest(CAST(:names AS text[])) AS n(name)
WHERE to_regclass(n.name) IS NOT NULL
"""

COLUMNS_PRESENT_SQL = """
SELECT COUNT(*)
FROM information_schema.columns
WHERE table_schema = current_schema()
  AND table_name = :table
  AND column_name = ANY(CAST(:columns AS text[]))
"""


def _objects_present(db, relations: tuple[str, ...], table: str | None = None, columns: tuple[str, ...] = ()) -> bool:
    present = db.execute(text(RELATIONS_PRESENT_SQL), {"names": list(relations)}).scalar_one()
    if int(present) < len(relations):
        return False
    if columns:
        present = db.execute(text(COLUMNS_PRESENT_SQL), {"table": table, "columns": list(columns)}).scalar_one()
        if int(present) < len(columns):
            return False
    return True


def _ensure(db, statements: tuple[str, ...], relations: tuple[str, ...], table: str | None = None, columns: tuple[str, ...] = ()) -> None:
    """Run the DDL only when something is missing, and commit it on its own.

    DDL locks (SHARE for CREATE INDEX, ACCESS EXCLUSIVE for ALTER TABLE) are
    taken even when the object exists, and held to the end of the transaction.
    Released here before the caller's own statements start.
    """
    if _objects_present(db, relations, table, columns):
        return
    for sql in statements:
        db.execute(text(sql))
    db.commit()
    logger.info("[SCHEMA] created missing objects among %s", ", ".join(relations + columns))


def ensure_profile_schema(db) -> None:
    _ensure(db, PROFILE_SCHEMA_SQL, PROFILE_RELATIONS, table="profiles", columns=PROFILE_COLUMNS)


def ensure_match_schema(db) -> None:
    _ensure(db, MATCH_SCHEMA_SQL, MATCH_RELATIONS)


def ensure_opt_in_schema(db) -> None:
    _ensure(db, OPT_IN_SCHEMA_SQL, OPT_IN_RELATIONS, table="match_opt_ins", columns=OPT_IN_COLUMNS)
