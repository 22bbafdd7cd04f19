# tests/conftest.py
import copy
import datetime as dt

import pytest

from services.payment_store import DocumentNotFound, StoreError

NOW = dt.datetime(2025, 1, 15, 12, 0, tzinfo=dt.timezone.utc)


class FakeStore:
    """In-memory stand-in for PaymentStore with switchable failures."""

    def __init__(self, collections=None):
        self.collections = copy.deepcopy(collections or {})
        self.fail_list = False
        self.fail_update = False
        self.updates = []

    def list_all(self, collection):
        if self.fail_list:
            raise StoreError("list failed")
        docs = self.collections.get(collection, {})
        return [(doc_id, dict(doc)) for doc_id, doc in sorted(docs.items())]

    def update_fields(self, collection, doc_id, partial):
        if self.fail_update:
            raise StoreError("update failed")
        docs = self.collections.setdefault(collection, {})
        if doc_id not in docs:
            raise DocumentNotFound(doc_id)
        docs[doc_id].update(partial)
        self.updates.append((collection, doc_id, dict(partial)))


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def sample_docs():
    return {
        "p1": {
            "fullName": "Jane Doe",
            "email": "jane@example.com",
            "contactNumber": "09171234567",
            "referenceNumber": "REF-001",
            "amount": 500,
            "paymentMethod": "GCash",
            "plan": "Monthly",
            "status": "pending",
            "createdAt": {"seconds": 1736208000, "nanoseconds": 0},  # 2025-01-07T00:00Z
            "emergencyContact": {
                "person": "John Doe",
                "contactNumber": "09179999999",
                "address": "Quezon City",
            },
        },
        "p2": {
            "fullName": "Mark Cruz",
            "email": "mark@example.com",
            "contactNumber": "09181112222",
            "referenceNumber": "REF-002",
            "amount": 1500,
            "paymentMethod": "Cash",
            "plan": "Quarterly",
            "status": "approved",
            "createdAt": "2025-01-07T09:30:00Z",
            "expiresAt": "2025-01-20T12:00:00Z",
            "durationDays": 90,
        },
        "p3": {
            "fullName": "Ana Reyes",
            "email": "ana@example.com",
            "contactNumber": "09193334444",
            "referenceNumber": "REF-003",
            "amount": 300,
            "paymentMethod": "GCash",
            "plan": "",
            "status": "rejected",
            "createdAt": 1736380800000,  # 2025-01-09T00:00Z in ms
        },
    }


@pytest.fixture
def fake_store(sample_docs):
    return FakeStore({"payments": sample_docs})
