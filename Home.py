# Home.py
import html

import streamlit as st

# ── Page config FIRST ─────────────────────────────────────────
st.set_page_config(
    page_title="🏋️ GRIT Admin",
    page_icon="🏋️",
    layout="wide",
)

# ── Env + styling ─────────────────────────────────────────────
from config import APP_TITLE, GYM_NAME, LOG_LEVEL, validate_config
from utils.log_utils import configure_logging
from utils.styling import inject_global_styles, inject_sidebar_styles
from utils.auth_sidebar import get_gate, render_auth_in_sidebar, render_login_form
from utils.session_cache import mount_page
from utils.session_gate import CHECKING

configure_logging(LOG_LEVEL)
validate_config()
inject_global_styles()
inject_sidebar_styles()
mount_page("home")

# ── Sidebar auth on EVERY page ────────────────────────────────
render_auth_in_sidebar()

gate = get_gate()
if gate.state == CHECKING:
    st.info("Checking session…")
    st.stop()

if not gate.is_authenticated:
    render_login_form()
    st.stop()

# ── Hero ──────────────────────────────────────────────────────
st.markdown(
    f"""
    <h2 class="big-title">
        <span class='emoji'>🏋️</span> {GYM_NAME} <span class="accent">Admin</span>
    </h2>
    <div class='subtitle'>Welcome back, {html.escape(gate.session.name)}. Review payments, track revenue and manage members.</div>
    """,
    unsafe_allow_html=True,
)

# ── Robust page URL helper (works with server.baseUrlPath) ────
def page_href(page_name: str) -> str:
    base = st.get_option("server.baseUrlPath") or ""
    base = "" if base in ("", "/") else "/" + base.strip("/")
    return f"{base}/{page_name}"

payments_href  = page_href("Payments")    # pages/1_Payments.py
analytics_href = page_href("Analytics")   # pages/2_Analytics.py
members_href   = page_href("Members")     # pages/3_Members.py

# ── Feature cards ─────────────────────────────────────────────
st.markdown(f"""
<div class="feature-grid">

  <div class="feature-card">
    <div class="fc-head">
      <div class="fc-icon">💳</div>
      <div class="fc-title"><a href="{payments_href}" target="_self">Payments</a></div>
    </div>
    <div class="fc-body">
      <p class="fc-desc">
        Review submitted payments, approve or reject them, set membership expiry dates
        and export the list to CSV.
      </p>
    </div>
  </div>

  <div class="feature-card">
    <div class="fc-head">
      <div class="fc-icon">📊</div>
      <div class="fc-title"><a href="{analytics_href}" target="_self">Analytics</a></div>
    </div>
    <div class="fc-body">
      <p class="fc-desc">
        Status breakdown, approved and pending revenue, plan distribution and the payment
        timeline at a glance.
      </p>
    </div>
  </div>

  <div class="feature-card">
    <div class="fc-head">
      <div class="fc-icon">👥</div>
      <div class="fc-title"><a href="{members_href}" target="_self">Members</a></div>
    </div>
    <div class="fc-body">
      <p class="fc-desc">
        Browse active members, search by name, email or phone, and spot memberships
        that are about to expire.
      </p>
    </div>
  </div>

</div>
""", unsafe_allow_html=True)

st.caption(APP_TITLE)
