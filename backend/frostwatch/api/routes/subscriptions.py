import html
import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, JSONResponse

from frostwatch.api.deps import get_store
from frostwatch.core.errors import StoreFailure
from frostwatch.metrics.prometheus import subscriptions_total
from frostwatch.services.subscriptions import SubscriptionStore
from frostwatch.services.validation import is_valid_email, validate_email_only, validate_subscription_request

log = logging.getLogger(__name__)

router = APIRouter(tags=["subscriptions"])


@router.post("/api/subscribe")
def subscribe(payload: dict, store: SubscriptionStore = Depends(get_store)):
    email, zip_code = validate_subscription_request(payload)

    try:
        existing = store.find_by_email(email)
        if existing:
            store.reactivate(existing, zip_code)
            subscriptions_total.labels(outcome="updated").inc()
            return JSONResponse(
                status_code=200,
                content={"message": "Subscription updated successfully", "isNew": False},
            )

        store.create(email, zip_code)
        subscriptions_total.labels(outcome="created").inc()
        return JSONResponse(
            status_code=201,
            content={"message": "Subscription created successfully", "isNew": True},
        )
    except StoreFailure as e:
        log.error("Subscription error", extra={"email": email, "error": str(e)})
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to process subscription", "details": str(e)},
        )


def _unsubscribe(store: SubscriptionStore, email: str) -> bool:
    sub = store.find_by_email(email)
    if not sub:
        return False
    if sub.active:
        store.deactivate(sub)
        subscriptions_total.labels(outcome="unsubscribed").inc()
    return True


@router.post("/api/unsubscribe")
def unsubscribe(payload: dict, store: SubscriptionStore = Depends(get_store)):
    email = validate_email_only(payload)

    try:
        found = _unsubscribe(store, email)
    except StoreFailure as e:
        log.error("Unsubscribe error", extra={"email": email, "error": str(e)})
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to process unsubscribe", "details": str(e)},
        )

    if not found:
        return JSONResponse(status_code=404, content={"error": "Subscription not found"})
    return {"message": "Unsubscribed successfully"}


def _link_page(message: str, status_code: int = 200) -> HTMLResponse:
    body = f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>Unsubscribe</title></head>
<body style="font-family: Arial, sans-serif; max-width: 600px; margin: 40px auto;">
  <h1>Frost &amp; Freeze Alerts</h1>
  <p>{message}</p>
</body>
</html>
"""
    return HTMLResponse(content=body, status_code=status_code)


@router.get("/unsubscribe", response_class=HTMLResponse)
def unsubscribe_link(email: str = Query(default=""), store: SubscriptionStore = Depends(get_store)):
    if not is_valid_email(email):
        return _link_page("That unsubscribe link is not valid. Please check the address and try again.", 400)

    if _unsubscribe(store, email):
        return _link_page(f"{html.escape(email.strip().lower())} will no longer receive frost and freeze alerts.")
    return _link_page("We could not find a subscription for that address.")
