from __future__ import annotations

import math
from dataclasses import dataclass, replace
from decimal import Decimal
from collections.abc import Mapping
from typing import Any, Optional, Union

PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"
PAYMENT_STATUSES = (PENDING, APPROVED, REJECTED)

DEFAULT_DURATION_DAYS = 30

Number = Union[int, float]


@dataclass
class EmergencyContact:
    person: str
    contact_number: str
    address: str


@dataclass
class Payment:
    id: str
    full_name: str
    email: str
    contact_number: str
    reference_number: str
    amount: Number
    payment_method: str
    plan: str
    status: str
    created_at: Any
    expires_at: Any = None
    duration_days: int = DEFAULT_DURATION_DAYS
    emergency_contact: Optional[EmergencyContact] = None

    @property
    def status_label(self) -> str:
        return self.status.capitalize()

    def with_changes(self, **changes) -> "Payment":
        return replace(self, **changes)


# ── projection helpers ───────────────────────────────────────
def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return value if isinstance(value, str) else str(value)


def _amount(value: Any) -> Number:
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal):
        value = float(value)
    try:
        n = float(value)
    except (TypeError, ValueError):
        return 0
    return 0 if math.isnan(n) or math.isinf(n) else n


def _status(value: Any) -> str:
    s = _text(value).strip().lower()
    return s if s in PAYMENT_STATUSES else PENDING


def _duration(value: Any) -> int:
    n = _amount(value)
    return int(n) if n and n > 0 else DEFAULT_DURATION_DAYS


def _emergency_contact(value: Any) -> Optional[EmergencyContact]:
    if not isinstance(value, Mapping):
        return None
    return EmergencyContact(
        person=_text(value.get("person")),
        contact_number=_text(value.get("contactNumber")),
        address=_text(value.get("address")),
    )


def project_payment(doc_id: Any, raw: Any) -> Payment:
    """
    Build a Payment from a stored document, defaulting every missing field.

    Total over arbitrary input: a non-mapping document projects to an empty
    pending payment, unknown keys are ignored, and an unrecognised status is
    read as pending.
    """
    data = raw if isinstance(raw, Mapping) else {}
    return Payment(
        id=_text(doc_id),
        full_name=_text(data.get("fullName")),
        email=_text(data.get("email")),
        contact_number=_text(data.get("contactNumber")),
        reference_number=_text(data.get("referenceNumber")),
        amount=_amount(data.get("amount")),
        payment_method=_text(data.get("paymentMethod")),
        plan=_text(data.get("plan")),
        status=_status(data.get("status")),
        created_at=data.get("createdAt"),
        expires_at=data.get("expiresAt"),
        duration_days=_duration(data.get("durationDays")),
        emergency_contact=_emergency_contact(data.get("emergencyContact")),
    )


def format_amount(amount: Any, symbol: str = "₱") -> str:
    n = _amount(amount)
    if float(n).is_integer():
        return f"{symbol}{int(n):,}"
    return f"{symbol}{n:,.2f}"
