# domain/analytics.py
"""
Aggregations behind the Analytics page.

Each fold is independent and works on the projected Payment list:
  - status counts (active members = approved)
  - revenue (approved) vs pending revenue; rejected never counts
  - plan distribution, first-seen order, blank plan -> "Unknown"
  - timeline by month/day of createdAt, first-seen order
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

import pandas as pd

from domain.models import APPROVED, PENDING, REJECTED, Number, Payment
from domain.timestamps import DISPLAY_TZ, format_month_day

UNKNOWN_PLAN = "Unknown"

STATUS_COLORS = {
    "Approved": "#16a34a",
    "Pending": "#eab308",
    "Rejected": "#dc2626",
}


@dataclass
class StatusCounts:
    pending: int = 0
    approved: int = 0
    rejected: int = 0

    @property
    def active_members(self) -> int:
        return self.approved

    @property
    def total(self) -> int:
        return self.pending + self.approved + self.rejected


@dataclass
class RevenueTotals:
    total_revenue: Number = 0
    pending_revenue: Number = 0


@dataclass
class PlanBucket:
    name: str
    count: int = 0
    revenue: Number = 0


@dataclass
class TimelineBucket:
    date: str
    payments: int = 0
    approved: int = 0


@dataclass
class AnalyticsSummary:
    counts: StatusCounts
    revenue: RevenueTotals
    plans: List[PlanBucket] = field(default_factory=list)
    timeline: List[TimelineBucket] = field(default_factory=list)


def status_counts(payments: Iterable[Payment]) -> StatusCounts:
    counts = StatusCounts()
    for p in payments:
        if p.status == PENDING:
            counts.pending += 1
        elif p.status == APPROVED:
            counts.approved += 1
        elif p.status == REJECTED:
            counts.rejected += 1
    return counts


def revenue_totals(payments: Iterable[Payment]) -> RevenueTotals:
    totals = RevenueTotals()
    for p in payments:
        if p.status == APPROVED:
            totals.total_revenue += p.amount
        elif p.status == PENDING:
            totals.pending_revenue += p.amount
    return totals


def plan_distribution(payments: Iterable[Payment]) -> List[PlanBucket]:
    buckets: Dict[str, PlanBucket] = {}
    for p in payments:
        name = p.plan or UNKNOWN_PLAN
        bucket = buckets.setdefault(name, PlanBucket(name))
        bucket.count += 1
        bucket.revenue += p.amount
    return list(buckets.values())


def timeline(payments: Iterable[Payment], tz: str = DISPLAY_TZ) -> List[TimelineBucket]:
    # Unparsable createdAt values all land in the "N/A" bucket.
    buckets: Dict[str, TimelineBucket] = {}
    for p in payments:
        key = format_month_day(p.created_at, tz)
        bucket = buckets.setdefault(key, TimelineBucket(key))
        bucket.payments += 1
        if p.status == APPROVED:
            bucket.approved += 1
    return list(buckets.values())


def summarize(payments: Iterable[Payment], tz: str = DISPLAY_TZ) -> AnalyticsSummary:
    payments = list(payments)
    return AnalyticsSummary(
        counts=status_counts(payments),
        revenue=revenue_totals(payments),
        plans=plan_distribution(payments),
        timeline=timeline(payments, tz),
    )


# ── chart frames ─────────────────────────────────────────────
def status_frame(counts: StatusCounts) -> pd.DataFrame:
    return pd.DataFrame({
        "label": ["Approved", "Pending", "Rejected"],
        "value": [counts.approved, counts.pending, counts.rejected],
        "color": [STATUS_COLORS["Approved"], STATUS_COLORS["Pending"], STATUS_COLORS["Rejected"]],
    })


def revenue_frame(revenue: RevenueTotals) -> pd.DataFrame:
    return pd.DataFrame({
        "label": ["Approved", "Pending"],
        "value": [revenue.total_revenue, revenue.pending_revenue],
        "color": [STATUS_COLORS["Approved"], STATUS_COLORS["Pending"]],
    })


def plan_frame(plans: List[PlanBucket]) -> pd.DataFrame:
    """Long format (plan, metric, value) for grouped bars; rows keep first-seen order."""
    rows = []
    for b in plans:
        rows.append({"plan": b.name, "metric": "Members", "value": b.count})
        rows.append({"plan": b.name, "metric": "Revenue", "value": b.revenue})
    return pd.DataFrame(rows, columns=["plan", "metric", "value"])


def timeline_frame(buckets: List[TimelineBucket]) -> pd.DataFrame:
    rows = []
    for order, b in enumerate(buckets):
        rows.append({"order": order, "date": b.date, "series": "Total Payments", "count": b.payments})
        rows.append({"order": order, "date": b.date, "series": "Approved", "count": b.approved})
    return pd.DataFrame(rows, columns=["order", "date", "series", "count"])
