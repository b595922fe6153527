"""Transactional email through the Resend REST API.

The gateway is a thin wrapper over one POST; callers decide recipients and
content. A non-2xx answer raises UpstreamError carrying the provider's status
and body.
"""

import html
import json
import logging
from typing import Any
from urllib.parse import urlencode

import requests

from .. import repo, schema
from ..config import EMAIL_TIMEOUT_SECONDS, RESEND_API_URL, Settings
from ..errors import ConfigurationError, NotFoundError, UpstreamError, ValidationError
from .compatibility import first_name

logger = logging.getLogger(__name__)

DEFAULT_TEST_SUBJECT = "Testmail - MotesGenerator"
DEFAULT_TEST_HTML = (
    '<div style="font-family:Arial,Helvetica,sans-serif;line-height:1.5">'
    "<h2>Testmail</h2>"
    "<p>Detta ar ett testutskick fran SendTestEmail-endpointen.</p>"
    "<p>(Om du fick detta: mail funkar. Om du inte fick detta: mail funkar kanske anda, men inte till dig.)</p>"
    "</div>"
)
INVITE_SUBJECT = "Du har en matchning - MotesGenerator"


class EmailGateway:
    def __init__(self, api_key: str, sender: str, session: Any = None, url: str = RESEND_API_URL) -> None:
        self.api_key = api_key
        self.sender = sender
        self.session = session or requests
        self.url = url

    @classmethod
    def from_settings(cls, settings: Settings, session: Any = None) -> "EmailGateway":
        api_key, sender = settings.require_email()
        return cls(api_key, sender, session=session)

    def send(self, to: str | list[str], subject: str, html_body: str) -> tuple[int, Any]:
        payload = {
            "from": self.sender,
            "to": to if isinstance(to, list) else [to],
            "subject": subject,
            "html": html_body,
        }
        resp = self.session.post(
            self.url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            data=json.dumps(payload),
            timeout=EMAIL_TIMEOUT_SECONDS,
        )
        raw = resp.text or ""
        try:
            parsed = json.loads(raw) if raw else None
        except ValueError:
            parsed = {"raw": raw}

        if not 200 <= resp.status_code < 300:
            logger.warning("[EMAIL] provider error status=%s body=%s", resp.status_code, raw[:500])
            raise UpstreamError(f"Resend error ({resp.status_code}): {raw}", upstream_status=resp.status_code, body=raw)
        logger.info("[EMAIL] sent subject=%r recipients=%s", subject, len(payload["to"]))
        return resp.status_code, parsed


def send_test_email(
    settings: Settings,
    payload: dict[str, Any],
    query: dict[str, Any],
    *,
    gateway: EmailGateway | None = None,
) -> dict[str, Any]:
    gateway = gateway or EmailGateway.from_settings(settings)
    override_to = settings.mail_override_to
    to = override_to or payload.get("to") or query.get("to")
    if not to:
        raise ValidationError("Missing recipient. Provide ?to=... or JSON body { to: ... }, or set MAIL_OVERRIDE_TO")

    subject = payload.get("subject") or query.get("subject") or DEFAULT_TEST_SUBJECT
    html_body = payload.get("html") or DEFAULT_TEST_HTML
    status, provider = gateway.send(to, subject, html_body)
    return {
        "ok": True,
        "status": status,
        "to": to,
        "overrideToUsed": bool(override_to),
        "resend": provider,
    }


def respond_link(base_url: str, token: str, answer: str) -> str:
    return f"{base_url}/matchRespond?{urlencode({'token': token, 'answer': answer})}"


def render_invite(name: str, yes_url: str, no_url: str) -> str:
    return (
        '<div style="font-family:Arial,Helvetica,sans-serif;line-height:1.5">'
        f"<h2>Hej {html.escape(name) or 'du'}!</h2>"
        "<p>Vi har hittat en matchning till dig. Vill du traffas?</p>"
        f'<p><a href="{html.escape(yes_url)}">Ja, garna</a> | <a href="{html.escape(no_url)}">Nej tack</a></p>'
        "</div>"
    )


def send_match_invites(db, settings: Settings, match_id: int, *, gateway: EmailGateway | None = None) -> dict[str, Any]:
    if not settings.public_base_url:
        raise ConfigurationError("Missing PUBLIC_BASE_URL app setting")
    gateway = gateway or EmailGateway.from_settings(settings)

    schema.ensure_match_schema(db)
    schema.ensure_opt_in_schema(db)
    if not repo.get_match(db, match_id):
        raise NotFoundError("Match not found")
    recipients = repo.list_opt_in_recipients(db, match_id)
    db.commit()

    sent = 0
    for r in recipients:
        to = settings.mail_override_to or r.get("email")
        if not to:
            logger.warning("[INVITE] match_id=%s profile_id=%s has no email", match_id, r.get("profile_id"))
            continue
        body = render_invite(
            first_name(r.get("full_name")),
            respond_link(settings.public_base_url, r["token"], "yes"),
            respond_link(settings.public_base_url, r["token"], "no"),
        )
        gateway.send(to, INVITE_SUBJECT, body)
        # committed per recipient so a retry after a failed send skips whoever already got mail
        repo.mark_opt_in_invited(db, r["token"])
        db.commit()
        sent += 1

    logger.info("[INVITE] match_id=%s sent=%s", match_id, sent)
    return {"ok": True, "matchId": match_id, "sent": sent}
