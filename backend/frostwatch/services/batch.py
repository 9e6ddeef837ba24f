"""
Daily alert run: one email per active subscription, sent strictly in
sequence with the throttle applied after every subscriber.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from frostwatch.core.config import settings
from frostwatch.core.errors import StoreFailure, TransportFailure
from frostwatch.metrics.prometheus import alert_batch_duration_seconds, alert_emails_total
from frostwatch.models.subscription import Subscription
from frostwatch.services.email_render import build_subject, render_alert_email
from frostwatch.services.nws import AlertFetcher
from frostwatch.services.subscriptions import SubscriptionStore
from frostwatch.services.summary import summarize_alert
from frostwatch.services.throttle import FixedIntervalThrottle

log = logging.getLogger(__name__)


@dataclass
class BatchResult:
    total: int = 0
    success: int = 0
    failed: int = 0

    def as_response(self, message: str = "Alert run completed") -> dict:
        return {"message": message, "total": self.total, "success": self.success, "failed": self.failed}


class AlertBatchRunner:
    def __init__(
        self,
        store: SubscriptionStore,
        fetcher: AlertFetcher,
        transport,
        throttle: FixedIntervalThrottle,
        from_email: str | None = None,
        base_url: str | None = None,
    ):
        self.store = store
        self.fetcher = fetcher
        self.transport = transport
        self.throttle = throttle
        self.from_email = from_email or settings.from_email
        self.base_url = base_url or settings.app_base_url

    def send_one(self, sub: Subscription) -> bool:
        lookup = self.fetcher.lookup(sub.zip_code)
        if lookup.location is None:
            log.error("Failed to get location", extra={"email": sub.email, "zip_code": sub.zip_code})
            return False

        pairs = [(props, summarize_alert(props)) for props in lookup.alerts]
        html = render_alert_email(
            lookup.location,
            pairs,
            sub.zip_code,
            recipient=sub.email,
            base_url=self.base_url,
        )
        subject = build_subject(lookup.location, lookup.alerts)

        try:
            self.transport.send(sub.email, self.from_email, subject, html)
        except TransportFailure as e:
            log.error("Failed to send email", extra={"to": sub.email, "error": str(e)})
            return False
        return True

    def run(self) -> BatchResult:
        """
        Raises StoreFailure only when the subscriber list cannot be read;
        everything after that is isolated per subscriber.
        """
        start = time.perf_counter()
        subs = self.store.list_active()
        log.info("Found active subscriptions", extra={"count": len(subs)})

        result = BatchResult(total=len(subs))
        for sub in subs:
            log.info("Processing subscription", extra={"email": sub.email, "zip_code": sub.zip_code})
            try:
                ok = self.send_one(sub)
            except Exception as e:
                log.exception("Unexpected error for subscriber", extra={"email": sub.email, "error": str(e)})
                ok = False

            if ok:
                result.success += 1
                alert_emails_total.labels(outcome="sent").inc()
                try:
                    self.store.mark_sent(sub)
                except StoreFailure as e:
                    log.error("Failed to record last_sent", extra={"email": sub.email, "error": str(e)})
            else:
                result.failed += 1
                alert_emails_total.labels(outcome="failed").inc()

            self.throttle.pause()

        alert_batch_duration_seconds.observe(time.perf_counter() - start)
        log.info("Alert run completed", extra={"success": result.success, "failed": result.failed})
        return result
