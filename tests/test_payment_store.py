import datetime as dt
import json

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from services.payment_store import DocumentNotFound, PaymentStore, StoreError


@pytest.fixture
def store():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    s = PaymentStore(engine)
    s.create_collection("payments")
    with engine.begin() as conn:
        for doc_id, doc in {
            "b": {"fullName": "Bea", "status": "pending", "amount": 100},
            "a": {"fullName": "Al", "status": "approved", "amount": 200},
        }.items():
            conn.execute(
                text("INSERT INTO payments (id, doc) VALUES (:id, :doc)"),
                {"id": doc_id, "doc": json.dumps(doc)},
            )
    return s


def test_list_all_returns_every_document(store):
    docs = store.list_all("payments")
    assert [d[0] for d in docs] == ["a", "b"]
    assert docs[1][1] == {"fullName": "Bea", "status": "pending", "amount": 100}


def test_list_all_of_missing_collection_raises(store):
    with pytest.raises(StoreError):
        store.list_all("nope")


def test_update_fields_merges_into_document(store):
    store.update_fields("payments", "b", {
        "status": "approved",
        "expiresAt": dt.datetime(2025, 2, 1, tzinfo=dt.timezone.utc),
    })
    doc = dict(store.list_all("payments"))["b"]
    assert doc == {
        "fullName": "Bea",
        "status": "approved",
        "amount": 100,
        "expiresAt": "2025-02-01T00:00:00+00:00",
    }


def test_update_unknown_document(store):
    with pytest.raises(DocumentNotFound):
        store.update_fields("payments", "zzz", {"status": "approved"})


def test_update_with_unserializable_value(store):
    with pytest.raises(StoreError):
        store.update_fields("payments", "a", {"bad": object()})
    assert dict(store.list_all("payments"))["a"]["status"] == "approved"


def test_collection_names_are_validated(store):
    with pytest.raises(StoreError):
        store.list_all("payments; DROP TABLE payments")
