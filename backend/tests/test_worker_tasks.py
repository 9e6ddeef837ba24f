from frostwatch.core.errors import StoreFailure
from frostwatch.db import session as session_mod
from frostwatch.services.subscriptions import SubscriptionStore
from frostwatch.services.throttle import FixedIntervalThrottle
from frostwatch.worker import tasks

from upstream import FakeTransport


def test_beat_schedule_runs_daily_task():
    entry = tasks.celery_app.conf.beat_schedule["daily-frost-freeze-alerts"]
    assert entry["task"] == "send_daily_alerts"
    assert entry["schedule"].hour == {8}
    assert entry["schedule"].minute == {0}
    assert tasks.celery_app.conf.timezone == "America/New_York"


def test_run_daily_alerts_returns_cron_shape(monkeypatch, engine, session, http_client):
    monkeypatch.setattr(session_mod, "engine", engine, raising=False)
    SubscriptionStore(session).create("gardener@example.com", "60601")
    mail = FakeTransport()

    out = tasks.run_daily_alerts(
        transport=mail,
        throttle=FixedIntervalThrottle(1.0, sleep=lambda s: None),
        client=http_client,
    )

    assert out == {"message": "Cron job completed", "total": 1, "success": 1, "failed": 0}
    assert mail.sent[0]["to"] == "gardener@example.com"
    assert not http_client.is_closed


def test_run_daily_alerts_reports_store_failure(monkeypatch, http_client):
    def broken(self):
        raise StoreFailure("database unavailable")

    monkeypatch.setattr(tasks.SubscriptionStore, "list_active", broken)
    monkeypatch.setattr(tasks.session_mod, "init_db", lambda: None)

    out = tasks.run_daily_alerts(transport=FakeTransport(), client=http_client)
    assert out == {"error": "Cron job failed", "details": "database unavailable"}
