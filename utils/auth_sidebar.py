# utils/auth_sidebar.py
import streamlit as st

from config import ADMIN_EMAIL, ADMIN_NAME, ADMIN_PASSWORD
from services.auth_service import EnvAuthProvider, build_directory
from utils.session_gate import CHECKING, SessionGate, end_gate, gate_for

__all__ = ["get_gate", "render_login_form", "render_auth_in_sidebar", "require_auth"]

_GATE_KEY = "_session_gate"


def get_gate() -> SessionGate:
    """One provider + gate per browser session, created on first use."""
    return gate_for(
        st.session_state, _GATE_KEY,
        lambda: EnvAuthProvider(build_directory(ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_NAME)),
    )


def render_login_form() -> None:
    gate = get_gate()

    st.markdown(
        "<h2 class='big-title' style='text-align:center;'>GRIT <span class='accent'>Admin</span></h2>"
        "<div class='subtitle' style='text-align:center;'>Sign in to access the dashboard</div>",
        unsafe_allow_html=True,
    )

    _, mid, _ = st.columns([1, 2, 1])
    with mid:
        with st.form("login_form", clear_on_submit=False):
            email = st.text_input("Email", placeholder="admin@gritgym.com", key="__login_email__")
            pwd = st.text_input("Password", type="password", key="__login_pass__")
            submitted = st.form_submit_button("Sign In", type="primary", use_container_width=True)

        if submitted:
            ok, msg = gate.provider.sign_in(email, pwd)
            if ok:
                st.rerun()
            else:
                st.error(f"❌ {msg}")


def render_auth_in_sidebar() -> None:
    gate = get_gate()

    with st.sidebar:
        st.markdown("### 🏋️ GRIT")
        if gate.state == CHECKING:
            st.info("Checking session…")
            return
        if not gate.is_authenticated:
            st.caption("Not signed in.")
            return

        who = gate.session.name or gate.session.email
        st.success(f"✅ Signed in as {who}")
        if st.button("🚪 Logout", use_container_width=True):
            ok, msg = gate.provider.sign_out()
            if not ok:
                st.error(f"Failed to logout: {msg}")
            else:
                end_gate(st.session_state, _GATE_KEY)
                st.rerun()


def require_auth() -> None:
    """Call near the top of a protected page."""
    gate = get_gate()
    if not gate.is_authenticated:
        st.error("Please sign in on the Home page to access this page.")
        st.page_link("Home.py", label="Go to sign in", icon="🔐")
        st.stop()
