import pytest

from frostwatch.core.errors import StoreFailure
from frostwatch.services.subscriptions import SubscriptionStore


def test_create_and_find_normalizes_email(session):
    store = SubscriptionStore(session)
    created = store.create(" Gardener@Example.com ", "60601")

    found = store.find_by_email("GARDENER@example.com")
    assert found is not None
    assert found.id == created.id
    assert found.email == "gardener@example.com"


def test_duplicate_email_is_a_store_failure(session):
    store = SubscriptionStore(session)
    store.create("gardener@example.com", "60601")

    with pytest.raises(StoreFailure):
        store.create("gardener@example.com", "55401")

    # session is usable again after the rollback
    assert store.find_by_email("gardener@example.com").zip_code == "60601"


def test_list_active_in_creation_order(session):
    store = SubscriptionStore(session)
    for email in ("c@example.com", "a@example.com", "b@example.com"):
        store.create(email, "60601")
    store.deactivate(store.find_by_email("a@example.com"))

    assert [s.email for s in store.list_active()] == ["c@example.com", "b@example.com"]


def test_mark_sent_sets_timestamp(session):
    store = SubscriptionStore(session)
    sub = store.create("gardener@example.com", "60601")
    assert sub.last_sent is None

    store.mark_sent(sub)
    assert store.find_by_email("gardener@example.com").last_sent is not None
