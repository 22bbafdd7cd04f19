# pages/3_Members.py: Active (approved) members, searchable + paginated cards
import html

import streamlit as st

# ── Page config FIRST ─────────────────────────────────────────
st.set_page_config(page_title="Members", page_icon="👥", layout="wide")
st.markdown("<div style='margin-bottom: 1.5rem;'></div>", unsafe_allow_html=True)

# ── Shared styling/auth/services ──────────────────────────────
from utils.styling import expiry_badge, inject_global_styles, inject_sidebar_styles
from utils.auth_sidebar import render_auth_in_sidebar, require_auth
from utils.db import get_store
from utils.log_utils import configure_logging
from utils.session_cache import ensure_payments, mount_page

from config import DISPLAY_TZ, LOG_LEVEL, MEMBERS_PAGE_SIZE, PAYMENTS_COLLECTION
from domain.timestamps import format_date, now_utc
from services.members_service import active_members, member_cards, paginate, search_members
from services.payment_service import fetch_payments

PAGE = "members"

configure_logging(LOG_LEVEL)
inject_global_styles()
inject_sidebar_styles()
if mount_page(PAGE):
    st.session_state.members_page = 1
render_auth_in_sidebar()
require_auth()

store = get_store()

title_col, refresh_col = st.columns([5, 1], vertical_alignment="bottom")
with title_col:
    st.title("👥 Members")
with refresh_col:
    refresh = st.button("🔄 Refresh", use_container_width=True)

with st.spinner("Loading members…"):
    payments = ensure_payments(
        PAGE, lambda: fetch_payments(store, PAYMENTS_COLLECTION), refresh=refresh,
    )

members = active_members(payments)

# --- Search (reset to page 1 when the term changes) --------------------------
if "members_page" not in st.session_state:
    st.session_state.members_page = 1
if "members_last_search" not in st.session_state:
    st.session_state.members_last_search = ""

term = st.text_input("Search", placeholder="Name, email or phone number", key="members_search")
if term != st.session_state.members_last_search:
    st.session_state.members_page = 1
    st.session_state.members_last_search = term

found = search_members(members, term)

if not members:
    st.info("No active members yet.")
    st.stop()
if not found:
    st.info("No members match your search.")
    st.stop()

# --- Pagination controls ------------------------------------------------------
sl = paginate(found, st.session_state.members_page, MEMBERS_PAGE_SIZE)
st.session_state.members_page = sl.page

top_l, top_c, top_r = st.columns([1, 2, 1], vertical_alignment="center")
with top_l:
    st.caption(f"{len(members)} active members")
with top_c:
    st.markdown(
        f"<div style='text-align:center; font-weight:600;'>Page {sl.page} / {sl.total_pages} &nbsp;•&nbsp; {sl.total_items} members</div>",
        unsafe_allow_html=True,
    )
with top_r:
    c1, c2 = st.columns(2)
    prev_clicked = c1.button("◀ Prev", disabled=not sl.has_prev)
    next_clicked = c2.button("Next ▶", disabled=not sl.has_next)
    if prev_clicked:
        st.session_state.members_page = sl.page - 1; st.rerun()
    if next_clicked:
        st.session_state.members_page = sl.page + 1; st.rerun()

# --- Cards --------------------------------------------------------------------
def _card(card) -> str:
    m = card.payment
    e = html.escape
    ec = m.emergency_contact
    emergency = ""
    if ec is not None:
        emergency = (
            "<div class='label' style='margin-top:.5rem;'>Emergency contact</div>"
            f"<div class='row'>{e(ec.person or '—')} · {e(ec.contact_number or '—')}</div>"
            f"<div class='row'>{e(ec.address or '—')}</div>"
        )
    border = " style='border-color:rgba(234,179,8,0.6);'" if card.shows_alert else ""
    return (
        f"<div class='card'{border}>"
        f"<h4>{e(m.full_name or '(no name)')}</h4>"
        f"<div class='row'>✉️ {e(m.email or '—')}</div>"
        f"<div class='row'>📞 {e(m.contact_number or '—')}</div>"
        f"<div class='row'>🏷️ {e(m.plan or '—')}</div>"
        "<div class='label' style='margin-top:.5rem;'>Expires</div>"
        f"<div class='row'>{e(format_date(m.expires_at, tz=DISPLAY_TZ))} &nbsp; {expiry_badge(card.expiry)}</div>"
        f"{emergency}"
        "</div>"
    )


cards = member_cards(sl.items, now_utc())
cols = st.columns(2)
for i, card in enumerate(cards):
    cols[i % 2].markdown(_card(card), unsafe_allow_html=True)
