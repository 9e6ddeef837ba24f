"""
Celery entry point for the scheduled daily run.

    celery -A frostwatch.worker.tasks worker --beat --loglevel=INFO
"""
import logging

import httpx
from celery import Celery
from celery.schedules import crontab
from sqlmodel import Session

from frostwatch.core.config import settings
from frostwatch.core.errors import StoreFailure
from frostwatch.core.logging import configure_logging
from frostwatch.db import session as session_mod
from frostwatch.services.batch import AlertBatchRunner
from frostwatch.services.email_transport import build_transport
from frostwatch.services.nws import AlertFetcher
from frostwatch.services.subscriptions import SubscriptionStore
from frostwatch.services.throttle import FixedIntervalThrottle

log = logging.getLogger(__name__)

celery_app = Celery(
    "frostwatch_worker",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
)
celery_app.conf.timezone = settings.schedule_timezone
celery_app.conf.beat_schedule = {
    "daily-frost-freeze-alerts": {
        "task": "send_daily_alerts",
        "schedule": crontab(hour=settings.schedule_hour, minute=0),
    },
}


def run_daily_alerts(transport=None, throttle=None, client: httpx.Client | None = None) -> dict:
    configure_logging()
    session_mod.init_db()

    own_client = client is None
    if own_client:
        client = httpx.Client(timeout=settings.http_timeout_seconds, follow_redirects=True)

    try:
        with Session(session_mod.engine) as session:
            runner = AlertBatchRunner(
                SubscriptionStore(session),
                AlertFetcher(client),
                transport or build_transport(client),
                throttle or FixedIntervalThrottle(settings.send_rate_per_second),
            )
            result = runner.run()
    except StoreFailure as e:
        log.error("Cron job error", extra={"error": str(e)})
        return {"error": "Cron job failed", "details": str(e)}
    finally:
        if own_client:
            client.close()

    return result.as_response("Cron job completed")


@celery_app.task(name="send_daily_alerts")
def send_daily_alerts():
    return run_daily_alerts()
