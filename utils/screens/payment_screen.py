# utils/screens/payment_screen.py
"""
Detail panel + actions for one selected payment on the Payments page.
- Details (member, payment, emergency contact)
- Approve / Reject for pending records
- Expiry editor (specific date or duration) for approved records

Every action goes through services.payment_service.PaymentBoard; on success the
patched list is put back in the session cache, on failure the error is shown
and nothing local changes.
"""
import datetime
import html
from typing import Tuple

import streamlit as st

from config import CURRENCY_SYMBOL, DEFAULT_DURATION_DAYS, DISPLAY_TZ, DURATION_PRESETS, QUICK_ADD_DAYS
from domain.expiry import expiry_status
from domain.models import APPROVED, PENDING, Payment, format_amount
from domain.timestamps import format_date, now_utc, to_instant
from services.payment_service import PaymentBoard, earliest_expiry_date
from utils.session_cache import put_payments
from utils.styling import expiry_badge, status_badge

TOAST_KEY = "payments_toast"


def _finish(board: PaymentBoard, page: str, result: Tuple[bool, str]) -> None:
    ok, msg = result
    if not ok:
        st.error(f"❌ {msg}")
        return
    put_payments(page, board.payments)
    st.session_state[TOAST_KEY] = (f"✅ {msg}", "success")
    st.rerun()


def render_payment_details(p: Payment, now: datetime.datetime) -> None:
    def _row(label: str, value: str) -> str:
        return f"<div class='label'>{html.escape(label)}</div><div class='row'>{html.escape(value or '—')}</div>"

    expiry = expiry_status(p.expires_at, now)
    left, right = st.columns(2)
    with left:
        st.markdown(
            "<div class='card'><h4>Member</h4>"
            + _row("Full name", p.full_name)
            + _row("Email", p.email)
            + _row("Contact number", p.contact_number)
            + "</div>",
            unsafe_allow_html=True,
        )
    with right:
        st.markdown(
            "<div class='card'><h4>Payment</h4>"
            + _row("Reference number", p.reference_number)
            + _row("Amount", format_amount(p.amount, CURRENCY_SYMBOL))
            + _row("Method", p.payment_method)
            + _row("Plan", p.plan)
            + f"<div class='label'>Status</div><div class='row'>{status_badge(p.status)}</div>"
            + "</div>",
            unsafe_allow_html=True,
        )

    st.markdown(
        "<div class='card'><h4>Dates</h4>"
        + _row("Submitted", format_date(p.created_at, with_time=True, tz=DISPLAY_TZ))
        + _row("Expires", format_date(p.expires_at, with_time=True, tz=DISPLAY_TZ))
        + f"<div class='row'>{expiry_badge(expiry)}</div>"
        + "</div>",
        unsafe_allow_html=True,
    )

    ec = p.emergency_contact
    if ec is not None:
        st.markdown(
            "<div class='card'><h4>Emergency contact</h4>"
            + _row("Person", ec.person)
            + _row("Contact number", ec.contact_number)
            + _row("Address", ec.address)
            + "</div>",
            unsafe_allow_html=True,
        )


def render_status_actions(board: PaymentBoard, p: Payment, page: str) -> None:
    if p.status != PENDING:
        return
    c1, c2, _ = st.columns([1, 1, 3])
    with c1:
        if st.button("✅ Approve", key=f"approve_{p.id}", type="primary", use_container_width=True):
            _finish(board, page, board.approve(p.id))
    with c2:
        if st.button("✖️ Reject", key=f"reject_{p.id}", use_container_width=True):
            _finish(board, page, board.reject(p.id))


def _duration_key(pid: str) -> str:
    return f"expiry_duration_{pid}"


def _add_days(pid: str, days: int) -> None:
    key = _duration_key(pid)
    st.session_state[key] = int(st.session_state.get(key, DEFAULT_DURATION_DAYS)) + days


def _set_days(pid: str, days: int) -> None:
    st.session_state[_duration_key(pid)] = days


def render_expiry_editor(board: PaymentBoard, p: Payment, page: str) -> None:
    if p.status != APPROVED:
        return

    st.markdown(f"#### 📅 Set Expiry Date: {html.escape(p.full_name)}")
    tab_date, tab_duration = st.tabs(["Set Specific Date", "Set Duration"])

    earliest = earliest_expiry_date()
    current = to_instant(p.expires_at)

    with tab_date:
        default = current.date() if current is not None and current.date() >= earliest else earliest
        picked = st.date_input("Expiry Date", value=default, min_value=earliest, key=f"expiry_date_{p.id}")
        if picked:
            st.caption(f"Expiry: **{picked:%B} {picked.day}, {picked.year}**")
        if st.button("Update Expiry Date", key=f"save_date_{p.id}", type="primary", disabled=not picked):
            with st.spinner("Updating…"):
                result = board.set_expiry_date(p.id, picked)
            _finish(board, page, result)

    with tab_duration:
        key = _duration_key(p.id)
        st.session_state.setdefault(key, p.duration_days or DEFAULT_DURATION_DAYS)
        days = st.number_input("Duration (Days)", min_value=1, step=1, key=key)

        quick = st.columns(len(QUICK_ADD_DAYS))
        for col, n in zip(quick, QUICK_ADD_DAYS):
            col.button(f"+{n}d", key=f"add_{n}_{p.id}", on_click=_add_days, args=(p.id, n),
                       use_container_width=True)

        presets = st.columns(len(DURATION_PRESETS))
        for col, (label, n) in zip(presets, DURATION_PRESETS.items()):
            col.button(label, key=f"preset_{n}_{p.id}", on_click=_set_days, args=(p.id, n),
                       use_container_width=True)

        if days and days > 0:
            will_expire = now_utc() + datetime.timedelta(days=int(days))
            st.caption(f"Will expire on: **{format_date(will_expire, tz=DISPLAY_TZ)}**")

        if st.button("Update Expiry Date", key=f"save_duration_{p.id}", type="primary",
                     disabled=not days or days <= 0):
            with st.spinner("Updating…"):
                result = board.set_expiry_duration(p.id, int(days))
            _finish(board, page, result)
