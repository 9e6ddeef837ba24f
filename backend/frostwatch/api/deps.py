"""
FastAPI dependencies for the store, HTTP client, mail transport and throttle.
Tests replace these through app.dependency_overrides.
"""
import httpx
from fastapi import Depends
from sqlmodel import Session

from frostwatch.core.config import settings
from frostwatch.db.session import get_session
from frostwatch.services.email_transport import build_transport
from frostwatch.services.nws import AlertFetcher
from frostwatch.services.subscriptions import SubscriptionStore
from frostwatch.services.throttle import FixedIntervalThrottle


def get_store(session: Session = Depends(get_session)) -> SubscriptionStore:
    return SubscriptionStore(session)


def get_http_client():
    with httpx.Client(timeout=settings.http_timeout_seconds, follow_redirects=True) as client:
        yield client


def get_alert_fetcher(client: httpx.Client = Depends(get_http_client)) -> AlertFetcher:
    return AlertFetcher(client)


def get_transport(client: httpx.Client = Depends(get_http_client)):
    return build_transport(client)


def get_throttle() -> FixedIntervalThrottle:
    return FixedIntervalThrottle(settings.send_rate_per_second)
