# services/payment_store.py
"""
Document store for payment records.

Each collection is one table:  (id TEXT PRIMARY KEY, doc JSONB)
Only two operations are used by the dashboard: list every document, and merge
a partial document into one record. Filtering happens in memory afterwards.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Tuple

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from utils.json_utils import json_default

log = logging.getLogger(__name__)

_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class StoreError(RuntimeError):
    pass


class DocumentNotFound(StoreError):
    pass


def _table(collection: str) -> str:
    if not _IDENT_RE.match(collection or ""):
        raise StoreError(f"Invalid collection name: {collection!r}")
    return collection


def _load_doc(raw: Any) -> Dict[str, Any]:
    if raw is None:
        return {}
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        raw = json.loads(raw) if raw.strip() else {}
    return dict(raw) if isinstance(raw, dict) else {}


class PaymentStore:
    def __init__(self, engine: Engine):
        self.engine = engine

    @property
    def _is_postgres(self) -> bool:
        return self.engine.dialect.name == "postgresql"

    def create_collection(self, collection: str) -> None:
        table = _table(collection)
        doc_type = "JSONB" if self._is_postgres else "JSON"
        with self.engine.begin() as conn:
            conn.execute(text(f"""
                CREATE TABLE IF NOT EXISTS {table} (
                    id  TEXT PRIMARY KEY,
                    doc {doc_type} NOT NULL
                )
            """))

    def list_all(self, collection: str) -> List[Tuple[str, Dict[str, Any]]]:
        table = _table(collection)
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(
                    text(f"SELECT id, doc FROM {table} ORDER BY id")
                ).mappings().all()
            return [(str(r["id"]), _load_doc(r["doc"])) for r in rows]
        except (SQLAlchemyError, ValueError) as e:
            raise StoreError(f"Could not read collection '{collection}': {e}") from e

    def update_fields(self, collection: str, doc_id: str, partial: Dict[str, Any]) -> None:
        """Merge `partial` into one document (last write wins per field)."""
        table = _table(collection)
        lock = " FOR UPDATE" if self._is_postgres else ""
        doc_param = "CAST(:doc AS JSONB)" if self._is_postgres else ":doc"
        try:
            with self.engine.begin() as conn:  # BEGIN … COMMIT
                row = conn.execute(
                    text(f"SELECT doc FROM {table} WHERE id = :id{lock}"),
                    {"id": doc_id},
                ).mappings().first()
                if not row:
                    raise DocumentNotFound(f"No document '{doc_id}' in '{collection}'")

                doc = _load_doc(row["doc"])
                doc.update(partial)
                conn.execute(
                    text(f"UPDATE {table} SET doc = {doc_param} WHERE id = :id"),
                    {"doc": json.dumps(doc, default=json_default), "id": doc_id},
                )
        except StoreError:
            raise
        except (SQLAlchemyError, TypeError, ValueError) as e:
            raise StoreError(f"Could not update '{doc_id}' in '{collection}': {e}") from e
        log.debug("Updated %s/%s fields=%s", collection, doc_id, sorted(partial))
