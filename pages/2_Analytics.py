# pages/2_Analytics.py
import altair as alt
import streamlit as st

# ── Page config FIRST ─────────────────────────────────────────
st.set_page_config(page_title="Analytics", page_icon="📊", layout="wide")
st.markdown("<div style='margin-bottom: 1.5rem;'></div>", unsafe_allow_html=True)

# ── Shared styling/auth/services ──────────────────────────────
from utils.styling import inject_global_styles, inject_sidebar_styles, metric_card
from utils.auth_sidebar import render_auth_in_sidebar, require_auth
from utils.db import get_store
from utils.log_utils import configure_logging
from utils.session_cache import ensure_payments, mount_page

from config import CURRENCY_SYMBOL, DISPLAY_TZ, LOG_LEVEL, PAYMENTS_COLLECTION
from domain.analytics import (
    STATUS_COLORS, plan_frame, revenue_frame, status_frame, summarize, timeline_frame,
)
from domain.models import format_amount
from services.payment_service import fetch_payments

PAGE = "analytics"

configure_logging(LOG_LEVEL)
inject_global_styles()
inject_sidebar_styles()
mount_page(PAGE)
render_auth_in_sidebar()
require_auth()

store = get_store()

# ── Accent bar ───────────────────────────────────────────────
st.markdown("""
<style>
.bar {background: linear-gradient(90deg,#dc2626 0 20%, #eab308 20% 70%, #16a34a 70% 100%);
      height:10px; border-radius:6px; margin:4px 0 12px;}
</style>
<div class="bar"></div>
""", unsafe_allow_html=True)

title_col, refresh_col = st.columns([5, 1], vertical_alignment="bottom")
with title_col:
    st.title("📊 Analytics")
with refresh_col:
    refresh = st.button("🔄 Refresh", use_container_width=True)

with st.spinner("Loading analytics…"):
    payments = ensure_payments(
        PAGE, lambda: fetch_payments(store, PAYMENTS_COLLECTION), refresh=refresh,
    )

summary = summarize(payments, DISPLAY_TZ)
counts, revenue = summary.counts, summary.revenue

# ── KPIs ─────────────────────────────────────────────────────
k1, k2, k3, k4 = st.columns(4)
k1.markdown(metric_card("Active Members", f"{counts.active_members:,}", "#dc2626"), unsafe_allow_html=True)
k2.markdown(metric_card("Pending", f"{counts.pending:,}", STATUS_COLORS["Pending"]), unsafe_allow_html=True)
k3.markdown(metric_card("Approved", f"{counts.approved:,}", STATUS_COLORS["Approved"]), unsafe_allow_html=True)
k4.markdown(metric_card("Rejected", f"{counts.rejected:,}", STATUS_COLORS["Rejected"]), unsafe_allow_html=True)

st.markdown("<div style='margin-top:1rem;'></div>", unsafe_allow_html=True)
r1, r2 = st.columns(2)
r1.markdown(metric_card("Total Revenue", format_amount(revenue.total_revenue, CURRENCY_SYMBOL),
                        STATUS_COLORS["Approved"]), unsafe_allow_html=True)
r2.markdown(metric_card("Pending Revenue", format_amount(revenue.pending_revenue, CURRENCY_SYMBOL),
                        STATUS_COLORS["Pending"]), unsafe_allow_html=True)

st.markdown("---")

# ── Status donut (left) + revenue bars (right) ───────────────
left, right = st.columns(2)

with left:
    st.subheader("Payment Status")
    df_status = status_frame(counts)
    if counts.total == 0:
        st.caption("No payments yet.")
    else:
        donut = alt.Chart(df_status).mark_arc(innerRadius=70).encode(
            theta=alt.Theta("value:Q"),
            color=alt.Color(
                "label:N",
                legend=alt.Legend(title=None),
                scale=alt.Scale(domain=df_status["label"].tolist(), range=df_status["color"].tolist()),
            ),
            tooltip=["label:N", "value:Q"],
        ).properties(height=280)
        st.altair_chart(donut, use_container_width=True)

with right:
    st.subheader("Revenue by Status")
    df_rev = revenue_frame(revenue)
    bars = alt.Chart(df_rev).mark_bar(cornerRadiusTopLeft=6, cornerRadiusTopRight=6).encode(
        x=alt.X("label:N", title=None, sort=None),
        y=alt.Y("value:Q", title=f"Revenue ({CURRENCY_SYMBOL})"),
        color=alt.Color(
            "label:N",
            legend=None,
            scale=alt.Scale(domain=df_rev["label"].tolist(), range=df_rev["color"].tolist()),
        ),
        tooltip=["label:N", alt.Tooltip("value:Q", format=",.2f")],
    ).properties(height=280)
    st.altair_chart(bars, use_container_width=True)

# ── Plan distribution ────────────────────────────────────────
st.subheader("Plan Distribution")
df_plan = plan_frame(summary.plans)
if df_plan.empty:
    st.caption("No plans to show.")
else:
    plan_order = [b.name for b in summary.plans]
    plan_chart = alt.Chart(df_plan).mark_bar().encode(
        x=alt.X("plan:N", title=None, sort=plan_order),
        xOffset=alt.XOffset("metric:N"),
        y=alt.Y("value:Q", title=None),
        color=alt.Color(
            "metric:N",
            legend=alt.Legend(title=None),
            scale=alt.Scale(domain=["Members", "Revenue"], range=["#dc2626", "#16a34a"]),
        ),
        tooltip=["plan:N", "metric:N", alt.Tooltip("value:Q", format=",")],
    ).properties(height=320)
    st.altair_chart(plan_chart, use_container_width=True)

# ── Timeline (only when there is something to plot) ──────────
if summary.timeline:
    st.subheader("Payment Timeline")
    df_tl = timeline_frame(summary.timeline)
    date_order = [b.date for b in summary.timeline]
    line = alt.Chart(df_tl).mark_line(point=True).encode(
        x=alt.X("date:N", title=None, sort=date_order),
        y=alt.Y("count:Q", title="Payments"),
        color=alt.Color(
            "series:N",
            legend=alt.Legend(title=None),
            scale=alt.Scale(domain=["Total Payments", "Approved"], range=["#dc2626", "#16a34a"]),
        ),
        tooltip=["date:N", "series:N", "count:Q"],
    ).properties(height=320)
    st.altair_chart(line, use_container_width=True)
