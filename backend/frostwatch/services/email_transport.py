"""
Outbound mail providers. Every transport exposes
send(to, from_email, subject, html) and raises TransportFailure on error.
"""
from __future__ import annotations

import logging
import smtplib
import time
from email.mime.text import MIMEText

import httpx

from frostwatch.core.config import Settings, settings as default_settings
from frostwatch.core.errors import TransportFailure
from frostwatch.metrics.prometheus import upstream_request_latency_seconds

log = logging.getLogger(__name__)


class SendGridTransport:
    def __init__(self, api_key: str, client: httpx.Client, api_url: str | None = None):
        self.api_key = api_key
        self.client = client
        self.api_url = api_url or default_settings.sendgrid_api_url

    def send(self, to: str, from_email: str, subject: str, html: str) -> None:
        if not self.api_key:
            raise TransportFailure("SendGrid API key not configured. Set SENDGRID_API_KEY.")

        payload = {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": from_email},
            "subject": subject,
            "content": [{"type": "text/html", "value": html}],
        }
        start = time.perf_counter()
        try:
            r = self.client.post(
                self.api_url,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.HTTPError as e:
            raise TransportFailure(f"SendGrid request failed: {e}") from e
        finally:
            upstream_request_latency_seconds.labels(service="sendgrid").observe(time.perf_counter() - start)

        if r.status_code >= 400:
            raise TransportFailure(f"SendGrid returned HTTP {r.status_code}: {r.text[:200]}")
        log.info("Email sent", extra={"to": to, "from": from_email})


class SmtpTransport:
    def __init__(self, server: str, port: int, user: str, password: str):
        self.server = server
        self.port = port
        self.user = user
        self.password = password

    def _effective_from(self, from_email: str) -> str:
        # Gmail rewrites or blocks a From that differs from the login
        if "gmail" in (self.server or "").lower() and self.user:
            return self.user
        return from_email or self.user

    def send(self, to: str, from_email: str, subject: str, html: str) -> None:
        if not (self.user and self.password):
            raise TransportFailure("SMTP credentials not configured. Set SMTP_USER and SMTP_PASSWORD.")

        msg = MIMEText(html, "html", "utf-8")
        msg["Subject"] = subject
        msg["From"] = self._effective_from(from_email)
        msg["To"] = to

        try:
            with smtplib.SMTP(self.server, self.port) as server:
                server.starttls()
                server.login(self.user, self.password)
                server.sendmail(msg["From"], [to], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise TransportFailure(f"SMTP send failed: {e}") from e
        log.info("Email sent", extra={"to": to, "from": msg["From"]})


def build_transport(client: httpx.Client, settings: Settings | None = None):
    settings = settings or default_settings
    backend = (settings.email_backend or "").lower()
    if backend == "sendgrid":
        return SendGridTransport(settings.sendgrid_api_key, client, settings.sendgrid_api_url)
    if backend == "smtp":
        return SmtpTransport(settings.smtp_server, settings.smtp_port, settings.smtp_user, settings.smtp_password)
    raise ValueError(f"Unknown email backend: {settings.email_backend}")
