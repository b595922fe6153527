from typing import Any

from fastapi import Request

from .config import Settings, load_settings
from .http_helpers import json_body


def get_settings() -> Settings:
    """Settings are read per request so a missing value surfaces as a response, not a startup crash."""
    return load_settings()


async def read_json_body(request: Request) -> dict[str, Any]:
    raw = await request.body()
    if not raw:
        return {}
    try:
        return json_body(await request.json())
    except ValueError:
        return {}
