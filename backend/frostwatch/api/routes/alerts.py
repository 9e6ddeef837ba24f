import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from fastapi.responses import JSONResponse

from frostwatch.api.deps import get_alert_fetcher, get_store, get_throttle, get_transport
from frostwatch.core.config import settings
from frostwatch.core.errors import StoreFailure
from frostwatch.services.batch import AlertBatchRunner
from frostwatch.services.nws import AlertFetcher
from frostwatch.services.subscriptions import SubscriptionStore
from frostwatch.services.throttle import FixedIntervalThrottle

log = logging.getLogger(__name__)

router = APIRouter(tags=["alerts"])


def _require_admin_key(x_admin_key: Optional[str]) -> None:
    if not settings.admin_api_key:
        return
    if not x_admin_key or x_admin_key != settings.admin_api_key:
        raise HTTPException(status_code=401, detail="Invalid admin key")


@router.post("/api/send-alerts-now")
def send_alerts_now(
    store: SubscriptionStore = Depends(get_store),
    fetcher: AlertFetcher = Depends(get_alert_fetcher),
    transport=Depends(get_transport),
    throttle: FixedIntervalThrottle = Depends(get_throttle),
    x_admin_key: Optional[str] = Header(default=None),
):
    _require_admin_key(x_admin_key)
    log.info("Manual alert run requested")

    runner = AlertBatchRunner(store, fetcher, transport, throttle)
    try:
        result = runner.run()
    except StoreFailure as e:
        log.error("Alert run failed", extra={"error": str(e)})
        return JSONResponse(status_code=500, content={"error": "Alert run failed", "details": str(e)})
    return result.as_response()
