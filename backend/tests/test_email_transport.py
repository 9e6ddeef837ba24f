import json

import httpx
import pytest

from frostwatch.core.config import Settings
from frostwatch.core.errors import TransportFailure
from frostwatch.services.email_transport import SendGridTransport, SmtpTransport, build_transport


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_sendgrid_posts_html_message():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(202)

    transport = SendGridTransport("SG.key", _client(handler), "https://api.sendgrid.com/v3/mail/send")
    transport.send("gardener@example.com", "alerts@example.com", "Frost tonight", "<p>cover plants</p>")

    request = seen[0]
    assert request.method == "POST"
    assert request.headers["Authorization"] == "Bearer SG.key"
    body = json.loads(request.content)
    assert body["personalizations"] == [{"to": [{"email": "gardener@example.com"}]}]
    assert body["from"] == {"email": "alerts@example.com"}
    assert body["subject"] == "Frost tonight"
    assert body["content"] == [{"type": "text/html", "value": "<p>cover plants</p>"}]


def test_sendgrid_error_status_raises():
    transport = SendGridTransport("SG.key", _client(lambda r: httpx.Response(401, text="unauthorized")))
    with pytest.raises(TransportFailure, match="401"):
        transport.send("a@example.com", "b@example.com", "s", "h")


def test_sendgrid_network_error_raises():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(TransportFailure):
        SendGridTransport("SG.key", _client(handler)).send("a@example.com", "b@example.com", "s", "h")


def test_sendgrid_requires_api_key():
    with pytest.raises(TransportFailure, match="SENDGRID_API_KEY"):
        SendGridTransport("", _client(lambda r: httpx.Response(202))).send("a@example.com", "b@example.com", "s", "h")


def test_smtp_requires_credentials():
    with pytest.raises(TransportFailure, match="SMTP_USER"):
        SmtpTransport("smtp.example.com", 587, "", "").send("a@example.com", "b@example.com", "s", "h")


def test_smtp_from_follows_gmail_login():
    transport = SmtpTransport("smtp.gmail.com", 587, "me@gmail.com", "pw")
    assert transport._effective_from("alerts@example.com") == "me@gmail.com"
    assert SmtpTransport("smtp.example.com", 587, "me", "pw")._effective_from("alerts@example.com") == "alerts@example.com"


def test_build_transport_selects_backend():
    client = _client(lambda r: httpx.Response(202))
    assert isinstance(build_transport(client, Settings(email_backend="sendgrid")), SendGridTransport)
    assert isinstance(build_transport(client, Settings(email_backend="smtp")), SmtpTransport)
    with pytest.raises(ValueError):
        build_transport(client, Settings(email_backend="pigeon"))
