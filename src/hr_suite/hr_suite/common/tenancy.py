from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Callable, Generic, List, Optional, TypeVar

from ..core.exceptions import NotFoundError
from ..query import ListQuery, Page, QueryProfile, run_query
from ..store import CollectionStore
from .datetime_utils import now_local

T = TypeVar("T")


class TenantScopedService(Generic[T]):
    """Base for facades over one tenant-partitioned collection.

    Records are re-fetched from the store on every call; nothing is cached
    between operations.
    """

    entity_name = "Record"
    profile: QueryProfile

    def __init__(self, store: CollectionStore[T], *, clock: Callable[[], datetime] = now_local):
        self._store = store
        self._clock = clock

    def _owned(self, tenant_id: str) -> List[T]:
        return [r for r in self._store.enumerate() if getattr(r, "tenant_id") == tenant_id]

    def _find(self, record_id: str, tenant_id: str) -> Optional[T]:
        record = self._store.get_by_id(record_id)
        if record is None or getattr(record, "tenant_id") != tenant_id:
            return None
        return record

    def _require(self, record_id: str, tenant_id: str) -> T:
        record = self._find(record_id, tenant_id)
        if record is None:
            raise NotFoundError(f"{self.entity_name} not found")
        return record

    def _list(self, tenant_id: str, query: Optional[ListQuery] = None) -> Page[T]:
        return run_query(self._owned(tenant_id), query or ListQuery(), profile=self.profile)

    def _save(self, record: T, **changes) -> T:
        updated = replace(record, updated_at=self._clock(), **changes)
        return self._store.update(getattr(updated, "id"), updated)
