# services/payment_service.py
"""
Fetch + mutate payments for one page.

fetch_payments() degrades to an empty list on failure. PaymentBoard keeps the
page's local list; every mutation is a single update_fields() call and, on
success, patches only the affected record in memory (no re-fetch). Mutations
return (ok, message) for the page to surface.
"""
from __future__ import annotations

import datetime
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from domain.models import APPROVED, PENDING, REJECTED, Payment, project_payment
from domain.timestamps import now_utc, to_instant, to_store_value
from services.payment_store import DocumentNotFound, PaymentStore, StoreError

log = logging.getLogger(__name__)

STATUS_FILTERS = ("all", PENDING, APPROVED, REJECTED)


def earliest_expiry_date(now: Optional[datetime.datetime] = None) -> datetime.date:
    """First calendar date set_expiry_date accepts (plain dates mean midnight UTC)."""
    return (now or now_utc()).astimezone(datetime.timezone.utc).date() + datetime.timedelta(days=1)


def fetch_payments(store: PaymentStore, collection: str) -> List[Payment]:
    try:
        docs = store.list_all(collection)
    except Exception:
        log.exception("Error fetching %s", collection)
        return []
    return [project_payment(doc_id, doc) for doc_id, doc in docs]


def filter_payments(payments: Iterable[Payment], search: str = "", status: str = "all") -> List[Payment]:
    """Case-insensitive match on name / email / reference, plus an exact status filter."""
    q = (search or "").strip().lower()
    out = []
    for p in payments:
        if status != "all" and p.status != status:
            continue
        if q and not (
            q in p.full_name.lower()
            or q in p.email.lower()
            or q in p.reference_number.lower()
        ):
            continue
        out.append(p)
    return out


class PaymentBoard:
    def __init__(self, store: PaymentStore, collection: str, payments: Iterable[Payment]):
        self.store = store
        self.collection = collection
        self.payments: List[Payment] = list(payments)

    def get(self, payment_id: str) -> Optional[Payment]:
        return next((p for p in self.payments if p.id == payment_id), None)

    def _write(
        self,
        payment_id: str,
        fields: Dict[str, Any],
        local: Dict[str, Any],
        action: str,
        done: str,
    ) -> Tuple[bool, str]:
        try:
            self.store.update_fields(self.collection, payment_id, fields)
        except DocumentNotFound:
            log.error("Error trying to %s: %s not found", action, payment_id)
            return False, f"Failed to {action}: record no longer exists."
        except StoreError:
            log.exception("Error trying to %s (%s)", action, payment_id)
            return False, f"Failed to {action}. Please try again."

        self.payments = [
            p.with_changes(**local) if p.id == payment_id else p
            for p in self.payments
        ]
        log.info("%s: %s %s", done, payment_id, sorted(fields))
        return True, done

    def _require(self, payment_id: str, allowed: Tuple[str, ...], action: str) -> Tuple[Optional[Payment], str]:
        p = self.get(payment_id)
        if p is None:
            return None, "Payment not found."
        if p.status not in allowed:
            return None, f"Cannot {action} a {p.status} payment."
        return p, ""

    # Approve / reject repeat safely; a payment never goes back to pending.
    def approve(self, payment_id: str) -> Tuple[bool, str]:
        p, err = self._require(payment_id, (PENDING, APPROVED), "approve")
        if p is None:
            return False, err
        return self._write(payment_id, {"status": APPROVED}, {"status": APPROVED},
                           "approve payment", "Payment approved.")

    def reject(self, payment_id: str) -> Tuple[bool, str]:
        p, err = self._require(payment_id, (PENDING, REJECTED), "reject")
        if p is None:
            return False, err
        return self._write(payment_id, {"status": REJECTED}, {"status": REJECTED},
                           "reject payment", "Payment rejected.")

    def set_expiry_date(
        self,
        payment_id: str,
        when: Any,
        now: Optional[datetime.datetime] = None,
    ) -> Tuple[bool, str]:
        """Set expiresAt to an explicit date (midnight UTC for a plain date)."""
        p, err = self._require(payment_id, (APPROVED,), "set expiry on")
        if p is None:
            return False, err
        instant = to_instant(when)
        if instant is None:
            return False, "Please select an expiry date."
        if instant < (now or now_utc()):
            return False, "Expiry date must be in the future."

        value = to_store_value(instant)
        return self._write(payment_id, {"expiresAt": value}, {"expires_at": value},
                           "update expiry date", "Expiry date updated.")

    def set_expiry_duration(
        self,
        payment_id: str,
        days: int,
        now: Optional[datetime.datetime] = None,
    ) -> Tuple[bool, str]:
        """Set expiresAt = now + days and remember the duration used."""
        p, err = self._require(payment_id, (APPROVED,), "set expiry on")
        if p is None:
            return False, err
        if not days or int(days) <= 0:
            return False, "Duration must be greater than 0."

        days = int(days)
        value = to_store_value((now or now_utc()) + datetime.timedelta(days=days))
        return self._write(
            payment_id,
            {"expiresAt": value, "durationDays": days},
            {"expires_at": value, "duration_days": days},
            "update expiry date",
            f"Membership extended by {days} days.",
        )
