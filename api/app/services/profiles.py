import logging
from typing import Any

from .. import repo, schema
from ..errors import ValidationError
from ..http_helpers import clean_text

logger = logging.getLogger(__name__)

# request field -> profiles column
PROFILE_FIELDS = {
    "FullName": "full_name",
    "Email": "email",
    "Phone": "phone",
    "Gender": "gender",
    "Preference": "preference",
    "City": "city",
    "FBLink": "fb_link",
}


def prepare_profile(payload: dict[str, Any], default_search_type: str) -> dict[str, Any]:
    if payload.get("ConsentGDPR") is not True:
        raise ValidationError("Missing GDPR consent. ConsentGDPR must be true.")
    values = {column: clean_text(payload.get(field)) for field, column in PROFILE_FIELDS.items()}
    values["search_type"] = clean_text(payload.get("SearchType")) or default_search_type
    return values


def submit_profile(db, values: dict[str, Any]) -> int | None:
    schema.ensure_profile_schema(db)
    profile_id = repo.insert_profile(db, values)
    db.commit()
    logger.info("[PROFILE] submitted id=%s city=%s search_type=%s", profile_id, values.get("city"), values.get("search_type"))
    return profile_id


def list_profiles(db) -> list[dict[str, Any]]:
    schema.ensure_profile_schema(db)
    rows = repo.list_profiles(db)
    db.commit()
    return [
        {
            "Id": r.get("id"),
            "FullName": r.get("full_name"),
            "City": r.get("city"),
            "SearchType": r.get("search_type"),
        }
        for r in rows
    ]


def delete_profile(db, profile_id: int) -> dict[str, Any]:
    schema.ensure_profile_schema(db)
    deleted = repo.delete_profile(db, profile_id)
    db.commit()
    logger.info("[PROFILE] delete id=%s deleted=%s", profile_id, deleted)
    return {"id": profile_id, "deleted": deleted}
