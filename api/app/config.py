import os
from dataclasses import dataclass
from urllib.parse import quote_plus

from .errors import ConfigurationError

MATCH_EXPIRY_HOURS = 48
MATCH_POOL_LIMIT = 500
DEFAULT_SEARCH_TYPE = "Dejt"
RESEND_API_URL = "https://api.resend.com/emails"
EMAIL_TIMEOUT_SECONDS = 20


def _env(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _database_url_from_parts() -> str:
    server = _env("SQL_SERVER")
    database = _env("SQL_DATABASE")
    if not server or not database:
        return ""
    user = quote_plus(_env("SQL_USER"))
    password = quote_plus(_env("SQL_PASSWORD"))
    credentials = f"{user}:{password}@" if user else ""
    return f"postgresql+psycopg2://{credentials}{server}/{database}"


@dataclass(frozen=True)
class Settings:
    database_url: str = ""
    resend_api_key: str = ""
    resend_from: str = ""
    mail_override_to: str = ""
    public_base_url: str = ""
    match_expiry_hours: int = MATCH_EXPIRY_HOURS
    match_pool_limit: int = MATCH_POOL_LIMIT
    default_search_type: str = DEFAULT_SEARCH_TYPE
    log_level: str = "INFO"

    def require_database_url(self) -> str:
        if not self.database_url:
            raise ConfigurationError("Missing DATABASE_URL (or SQL_SERVER/SQL_DATABASE) app setting")
        return self.database_url

    def require_email(self) -> tuple[str, str]:
        if not self.resend_api_key:
            raise ConfigurationError("Missing RESEND_API_KEY app setting")
        if not self.resend_from:
            raise ConfigurationError("Missing RESEND_FROM app setting")
        return self.resend_api_key, self.resend_from


def load_settings() -> Settings:
    """Read settings from the environment. Never raises; missing values are checked on use."""
    return Settings(
        database_url=_env("DATABASE_URL") or _database_url_from_parts(),
        resend_api_key=_env("RESEND_API_KEY"),
        resend_from=_env("RESEND_FROM"),
        mail_override_to=_env("MAIL_OVERRIDE_TO"),
        public_base_url=_env("PUBLIC_BASE_URL").rstrip("/"),
        match_expiry_hours=_env_int("MATCH_EXPIRY_HOURS", MATCH_EXPIRY_HOURS),
        match_pool_limit=_env_int("MATCH_POOL_LIMIT", MATCH_POOL_LIMIT),
        default_search_type=_env("DEFAULT_SEARCH_TYPE", DEFAULT_SEARCH_TYPE) or DEFAULT_SEARCH_TYPE,
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
