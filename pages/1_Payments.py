# pages/1_Payments.py: Review payments, approve/reject, set expiry, export CSV
import html

import streamlit as st

# ── Page config FIRST ─────────────────────────────────────────
st.set_page_config(page_title="Payments", page_icon="💳", layout="wide")
st.markdown("<div style='margin-bottom: 1.5rem;'></div>", unsafe_allow_html=True)

# ── Shared styling/auth/services ──────────────────────────────
from utils.styling import expiry_badge, inject_global_styles, inject_sidebar_styles, status_badge
from utils.auth_sidebar import render_auth_in_sidebar, require_auth
from utils.db import get_store
from utils.log_utils import configure_logging
from utils.session_cache import ensure_payments, mount_page
from utils.screens.payment_screen import (
    TOAST_KEY, render_expiry_editor, render_payment_details, render_status_actions,
)

from config import CURRENCY_SYMBOL, DISPLAY_TZ, LOG_LEVEL, PAYMENTS_COLLECTION
from domain.csv_export import export_filename, payments_to_csv
from domain.expiry import expiry_status
from domain.models import format_amount
from domain.timestamps import format_date, now_utc
from services.payment_service import STATUS_FILTERS, PaymentBoard, fetch_payments, filter_payments

PAGE = "payments"

configure_logging(LOG_LEVEL)
inject_global_styles()
inject_sidebar_styles()
mount_page(PAGE)
render_auth_in_sidebar()
require_auth()

store = get_store()

st.title("💳 Payments")

# Post-action toast (persisted across reruns)
toast = st.session_state.pop(TOAST_KEY, None)
if toast:
    msg, level = toast
    getattr(st, level if level in {"success", "warning", "info", "error"} else "info")(msg)

# ── Controls ─────────────────────────────────────────────────
c_search, c_status, c_refresh = st.columns([3, 1.2, 0.8], vertical_alignment="bottom")
with c_search:
    search = st.text_input("Search", placeholder="Name, email or reference number", key="payments_search")
with c_status:
    status = st.selectbox(
        "Status", STATUS_FILTERS, key="payments_status",
        format_func=lambda s: "All" if s == "all" else s.capitalize(),
    )
with c_refresh:
    refresh = st.button("🔄 Refresh", use_container_width=True)

with st.spinner("Loading payments…"):
    payments = ensure_payments(
        PAGE, lambda: fetch_payments(store, PAYMENTS_COLLECTION), refresh=refresh,
    )

board = PaymentBoard(store, PAYMENTS_COLLECTION, payments)
shown = filter_payments(board.payments, search, status)
now = now_utc()


def _date(value) -> str:
    return format_date(value, tz=DISPLAY_TZ)


st.download_button(
    "⬇️ Export CSV",
    data=payments_to_csv(shown, _date),
    file_name=export_filename(now.date()),
    mime="text/csv",
    disabled=not shown,
)

if not board.payments:
    st.info("No payments found.")
    st.stop()
if not shown:
    st.info("No payments match your filters.")
    st.stop()

st.caption(f"{len(shown)} of {len(board.payments)} payments")

# ── Table ────────────────────────────────────────────────────
rows = []
for p in shown:
    rows.append(
        "<tr>"
        f"<td>{html.escape(p.full_name)}<div class='muted'>{html.escape(p.email)}</div></td>"
        f"<td>{html.escape(p.reference_number)}</td>"
        f"<td>{html.escape(format_amount(p.amount, CURRENCY_SYMBOL))}</td>"
        f"<td>{html.escape(p.plan)}</td>"
        f"<td>{status_badge(p.status)}</td>"
        f"<td>{html.escape(_date(p.created_at))}</td>"
        f"<td>{html.escape(_date(p.expires_at))}<div>{expiry_badge(expiry_status(p.expires_at, now))}</div></td>"
        "</tr>"
    )

st.markdown("""
<style>
.pay-table-wrap { max-height: 520px; overflow:auto; border:1px solid rgba(220,38,38,0.3); border-radius:12px; }
.pay-table { width:100%; border-collapse:collapse; font-size:.92rem; }
.pay-table th { position:sticky; top:0; background:#1f2937; color:#9ca3af; text-align:left;
                padding:.6rem .75rem; font-size:.78rem; text-transform:uppercase; letter-spacing:.04em; }
.pay-table td { padding:.6rem .75rem; border-top:1px solid #1f2937; vertical-align:top; }
</style>
""", unsafe_allow_html=True)

st.markdown(
    "<div class='pay-table-wrap'><table class='pay-table'><thead><tr>"
    "<th>Member</th><th>Reference</th><th>Amount</th><th>Plan</th>"
    "<th>Status</th><th>Submitted</th><th>Expires</th>"
    "</tr></thead><tbody>" + "".join(rows) + "</tbody></table></div>",
    unsafe_allow_html=True,
)

# ── Selector (Prev / centered Pick a payment / Next) ──────────
st.markdown("### Review a payment")
options = [p.id for p in shown]
label_by_id = {
    p.id: f"{p.full_name or '(no name)'} · {p.reference_number or '(no ref)'}  —  {p.status_label}"
    for p in shown
}

if st.session_state.get("payments_select") not in options:
    st.session_state["payments_select"] = options[0]


def _step(delta: int) -> None:
    pos = options.index(st.session_state["payments_select"])
    st.session_state["payments_select"] = options[(pos + delta) % len(options)]


col_prev, col_sel, col_next = st.columns([1, 4, 1])
with col_prev:
    st.button("◀ Prev", use_container_width=True, disabled=len(options) <= 1, on_click=_step, args=(-1,))
with col_sel:
    st.markdown('<div style="text-align:center; font-weight:700; margin-bottom:0.25rem;">Pick a payment</div>',
                unsafe_allow_html=True)
    selected_id = st.selectbox(
        "Payment selection",
        options=options,
        format_func=lambda pid: label_by_id.get(pid, pid),
        key="payments_select",
        label_visibility="collapsed",
    )
with col_next:
    st.button("Next ▶", use_container_width=True, disabled=len(options) <= 1, on_click=_step, args=(1,))

selected = board.get(selected_id)
if selected is None:
    st.stop()

render_payment_details(selected, now)
render_status_actions(board, selected, PAGE)
render_expiry_editor(board, selected, PAGE)
