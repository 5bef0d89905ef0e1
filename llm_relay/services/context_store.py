"""
Context Store

In-memory store for per-session dog behavior context records. Records live
for the lifetime of the owning app; there is no eviction or persistence.
"""

from typing import Any, Dict, Optional

from ..exceptions import ContextNotFoundError
from ..utils.timestamps import utc_now_iso


class ContextStore:
    """Key-value store of context records keyed by an opaque session id"""

    def __init__(self, records: Optional[Dict[str, Dict[str, Any]]] = None):
        self._records: Dict[str, Dict[str, Any]] = dict(records or {})

    def upsert(self, context_id: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Replace the record for context_id (no merge), stamping lastUpdated"""
        stored = {**record, "lastUpdated": utc_now_iso()}
        self._records[context_id] = stored
        return stored

    def get(self, context_id: str) -> Dict[str, Any]:
        try:
            return self._records[context_id]
        except KeyError:
            raise ContextNotFoundError(context_id) from None

    def __contains__(self, context_id: str) -> bool:
        return context_id in self._records

    def __len__(self) -> int:
        return len(self._records)
