# config.py
from __future__ import annotations
import os
from typing import Optional
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from dotenv import load_dotenv, find_dotenv

# Load .env once, globally
load_dotenv(find_dotenv() or (Path(__file__).parent / ".env"))

def _clean(val: Optional[str], default: Optional[str] = None) -> Optional[str]:
    if val is None:
        return default
    v = val.strip()
    if (v.startswith('"') and v.endswith('"')) or (v.startswith("'") and v.endswith("'")):
        v = v[1:-1].strip()
    return v or default

def _must(name: str) -> str:
    v = _clean(os.getenv(name))
    if not v:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return v

def _maybe_int(name: str, default: Optional[int] = None) -> Optional[int]:
    v = _clean(os.getenv(name))
    try:
        return int(v) if v is not None else default
    except ValueError:
        return default

# ----- Branding -----
GYM_NAME = _clean(os.getenv("GYM_NAME"), "GRIT")
APP_TITLE = f"{GYM_NAME} Admin"

# Dates are stored in UTC and shown in this timezone
DISPLAY_TZ = _clean(os.getenv("DISPLAY_TZ"), "Asia/Manila")
CURRENCY_SYMBOL = _clean(os.getenv("CURRENCY_SYMBOL"), "₱")

# ----- Admin credentials -----
ADMIN_EMAIL    = _must("ADMIN_EMAIL")
ADMIN_PASSWORD = _must("ADMIN_PASSWORD")
ADMIN_NAME     = _clean(os.getenv("ADMIN_NAME"), "Administrator")

# ----- Database -----
# utils/db.get_engine() reads DATABASE_URL or DB_HOST / DB_PORT / DB_NAME / DB_USER / DB_PASSWORD
PAYMENTS_COLLECTION = _clean(os.getenv("PAYMENTS_COLLECTION"), "payments")

# ----- Members / expiry -----
MEMBERS_PAGE_SIZE = _maybe_int("MEMBERS_PAGE_SIZE", 10) or 10
DEFAULT_DURATION_DAYS = _maybe_int("DEFAULT_DURATION_DAYS", 30) or 30

# label -> days, shown as one-click presets in the expiry editor
DURATION_PRESETS = {
    "1 Month": 30,
    "3 Months": 90,
    "6 Months": 180,
    "1 Year": 365,
}
QUICK_ADD_DAYS = [7, 30, 90]

# ----- Logging -----
LOG_LEVEL = _clean(os.getenv("LOG_LEVEL"), "INFO").upper()

def validate_config() -> None:
    try:
        ZoneInfo(DISPLAY_TZ)
    except (ZoneInfoNotFoundError, ValueError):
        raise RuntimeError(f"DISPLAY_TZ is not a known timezone: {DISPLAY_TZ}")
    if MEMBERS_PAGE_SIZE <= 0:
        raise RuntimeError("MEMBERS_PAGE_SIZE must be positive")
    if DEFAULT_DURATION_DAYS <= 0:
        raise RuntimeError("DEFAULT_DURATION_DAYS must be positive")
