"""
Subscription storage over a SQLModel session.

All SQLAlchemy errors are re-raised as StoreFailure so callers only deal
with the project's error taxonomy.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from frostwatch.core.errors import StoreFailure
from frostwatch.models.subscription import Subscription
from frostwatch.services.validation import normalize_email

log = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SubscriptionStore:
    def __init__(self, session: Session):
        self.session = session

    def find_by_email(self, email: str) -> Subscription | None:
        try:
            return self.session.exec(
                select(Subscription).where(Subscription.email == normalize_email(email))
            ).first()
        except SQLAlchemyError as e:
            raise StoreFailure(str(e)) from e

    def create(self, email: str, zip_code: str) -> Subscription:
        now = _now()
        sub = Subscription(
            email=normalize_email(email),
            zip_code=zip_code,
            active=True,
            created_at=now,
            updated_at=now,
        )
        return self._save(sub)

    def reactivate(self, sub: Subscription, zip_code: str) -> Subscription:
        sub.zip_code = zip_code
        sub.active = True
        sub.updated_at = _now()
        return self._save(sub)

    def deactivate(self, sub: Subscription) -> Subscription:
        sub.active = False
        sub.updated_at = _now()
        return self._save(sub)

    def mark_sent(self, sub: Subscription, sent_at: datetime | None = None) -> Subscription:
        sub.last_sent = sent_at or _now()
        return self._save(sub)

    def list_active(self) -> list[Subscription]:
        try:
            q = (
                select(Subscription)
                .where(Subscription.active == True)  # noqa: E712
                .order_by(Subscription.created_at)
            )
            return list(self.session.exec(q).all())
        except SQLAlchemyError as e:
            raise StoreFailure(str(e)) from e

    def _save(self, sub: Subscription) -> Subscription:
        email = sub.email
        try:
            self.session.add(sub)
            self.session.commit()
            self.session.refresh(sub)
        except SQLAlchemyError as e:
            self.session.rollback()
            log.error("Subscription write failed", extra={"email": email, "error": str(e)})
            raise StoreFailure(str(e)) from e
        return sub
