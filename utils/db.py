# utils/db.py
import os
from functools import lru_cache
from sqlalchemy import create_engine

from services.payment_store import PaymentStore


def database_url() -> str:
    url = (os.getenv("DATABASE_URL") or "").strip()
    if url:
        return url
    host = os.getenv("DB_HOST")
    port = os.getenv("DB_PORT", "5432")
    name = os.getenv("DB_NAME")
    user = os.getenv("DB_USER")
    pwd  = os.getenv("DB_PASSWORD")
    return f"postgresql+psycopg2://{user}:{pwd}@{host}:{port}/{name}"


@lru_cache(maxsize=1)
def get_engine():
    return create_engine(database_url(), pool_pre_ping=True)


def get_store():
    return PaymentStore(get_engine())
