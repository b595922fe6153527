import re
from typing import Any

from .errors import ValidationError

_DIGITS = re.compile(r"^\s*[+]?(\d+)(?:\.(\d+))?")


def parse_positive_int(value: Any) -> int | None:
    """Leading-integer parse: 14, "14" and "14abc" give 14.

    A fractional part rejects the value in both forms (14.5 and "14.5"); 14.0 and
    "14.0" are whole numbers and pass.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float):
        return int(value) if value.is_integer() and value > 0 else None
    m = _DIGITS.match(str(value))
    if not m:
        return None
    if m.group(2) and int(m.group(2)) != 0:
        return None
    parsed = int(m.group(1))
    return parsed if parsed > 0 else None


def require_positive_int(value: Any, message: str) -> int:
    parsed = parse_positive_int(value)
    if parsed is None:
        raise ValidationError(message)
    return parsed


def clean_text(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def json_body(payload: Any) -> dict[str, Any]:
    return payload if isinstance(payload, dict) else {}
