import html

import streamlit as st

from domain.expiry import ExpiryStatus

STATUS_BADGE_CLASS = {
    "approved": "badge-approved",
    "pending": "badge-pending",
    "rejected": "badge-rejected",
}


def inject_global_styles():
    st.markdown("""
    <style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700;800;900&display=swap');

    html, body, .stApp, [data-testid="stAppViewContainer"] {
      font-family: "Inter", -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial,
                   "Apple Color Emoji","Segoe UI Emoji","Segoe UI Symbol" !important;
      -webkit-font-smoothing: antialiased; -moz-osx-font-smoothing: grayscale;
      font-size: 16px; line-height: 1.55;
    }

    .stApp { background-color: #030712; }
    .block-container { max-width: 1280px; padding-top: 2rem; margin-top: .75rem; }

    /* Headings */
    h1, h2, h3, h4 { color:#ffffff; font-weight: 800; letter-spacing:-0.015em; margin: .2rem 0 .6rem; }
    h1 { font-size: 2.1rem; }
    h2 { font-size: 1.6rem; }
    h3 { font-size: 1.25rem; }
    .big-title { font-size: 2.6rem; font-weight: 900; margin-bottom:.25rem; color:#fff; }
    .big-title span.accent { color:#dc2626; }
    .subtitle { font-size:1.05rem; color:#9ca3af; margin-bottom:1.2rem; }

    p, li, label, span, div, small { color:#e5e7eb; }
    small, .muted { color:#9ca3af; }

    /* Inputs & buttons */
    .stTextInput > div > div input,
    .stSelectbox div[data-baseweb="select"] div,
    .stNumberInput input, .stDateInput input {
      background:#1f2937 !important; color:#fff !important; font-size: 1rem !important;
    }
    .stButton > button, .stDownloadButton > button {
      font-weight: 700 !important;
      border-radius: 8px !important;
      border: 1px solid rgba(220,38,38,0.5) !important;
    }
    .stButton > button[kind="primary"], .stDownloadButton > button {
      background:#dc2626 !important; color:#fff !important;
    }

    /* Cards */
    .card {
      background:#111827; border:1px solid rgba(220,38,38,0.3); border-radius:12px;
      padding:1rem 1.1rem; margin-bottom:1rem;
    }
    .card:hover { border-color: rgba(220,38,38,0.6); box-shadow:0 8px 20px rgba(220,38,38,0.15); }
    .card h4 { margin:0 0 .4rem; font-size:1.1rem; }
    .card .row { font-size:.92rem; color:#d1d5db; margin:.15rem 0; word-break: break-all; }
    .card .label { color:#9ca3af; font-size:.8rem; text-transform:uppercase; letter-spacing:.04em; }

    .metric-card { background:#111827; border-radius:12px; padding:1rem 1.2rem; border:1px solid; }
    .metric-card .value { font-size:2rem; font-weight:800; color:#fff; }
    .metric-card .label { color:#9ca3af; font-size:.9rem; }

    /* Badges */
    .badge { display:inline-block; padding:2px 10px; border-radius:999px; font-size:0.75rem; font-weight:600; }
    .badge-approved { background:rgba(22,163,74,0.15); color:#4ade80; border:1px solid rgba(22,163,74,0.3); }
    .badge-pending  { background:rgba(202,138,4,0.15); color:#facc15; border:1px solid rgba(202,138,4,0.3); }
    .badge-rejected { background:rgba(220,38,38,0.15); color:#f87171; border:1px solid rgba(220,38,38,0.3); }

    /* Landing feature cards */
    .feature-grid { display:grid; gap:1rem; grid-template-columns:repeat(3,minmax(0,1fr)); }
    @media (max-width:1100px){ .feature-grid { grid-template-columns:1fr 1fr; } }
    @media (max-width:700px){  .feature-grid { grid-template-columns:1fr; } }
    .feature-card {
      background:#111827; border:1px solid rgba(220,38,38,0.3); border-radius:16px; padding:1rem 1.1rem;
      position:relative; overflow:hidden; transition:transform .18s, border-color .18s;
    }
    .feature-card::before { content:""; position:absolute; inset:0 0 auto 0; height:4px; background:#dc2626; }
    .feature-card:hover { transform:translateY(-3px); border-color:rgba(220,38,38,0.6); }
    .fc-title a { color:#fff; font-weight:700; text-decoration:none; font-size:1.15rem; }
    .fc-desc { font-size:.95rem; line-height:1.45; color:#9ca3af; margin:.4rem 0 0; }
    </style>
    """, unsafe_allow_html=True)


def inject_sidebar_styles():
    st.markdown("""
    <style>
    section[data-testid="stSidebar"] {
      background-color: #111827 !important;
      border-right: 1px solid rgba(220,38,38,0.3);
    }
    section[data-testid="stSidebar"] nav a {
      border-radius: 8px !important;
      padding: 10px 14px !important;
      font-weight: 600 !important;
    }
    section[data-testid="stSidebar"] nav a[aria-current="page"] {
      background: #dc2626 !important;
      color: #ffffff !important;
    }
    section[data-testid="stSidebar"] .stButton > button {
      width: 100% !important;
      min-height: 44px !important;
      background: #dc2626 !important;
      color: #ffffff !important;
      border: 0 !important;
    }
    section[data-testid="stSidebar"] .stButton > button:hover { background:#b91c1c !important; }
    </style>
    """, unsafe_allow_html=True)


def status_badge(status: str) -> str:
    cls = STATUS_BADGE_CLASS.get(status, "badge-pending")
    return f"<span class='badge {cls}'>{html.escape(status.capitalize())}</span>"


def expiry_badge(expiry: ExpiryStatus) -> str:
    if expiry.color is None:
        return f"<span class='muted'>{html.escape(expiry.label)}</span>"
    alert = "⚠️ " if expiry.days is not None and expiry.days <= 7 else ""
    return (
        f"<span class='badge' style='color:{expiry.color}; background:{expiry.background};'>"
        f"{alert}{html.escape(expiry.days_left_text)}</span>"
    )


def metric_card(label: str, value, accent: str = "#dc2626") -> str:
    return (
        f"<div class='metric-card' style='border-color:{accent}55;'>"
        f"<div class='label'>{html.escape(label)}</div>"
        f"<div class='value'>{html.escape(str(value))}</div>"
        f"</div>"
    )
