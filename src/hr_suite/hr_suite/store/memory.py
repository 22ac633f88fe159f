from __future__ import annotations

import logging
import threading
from typing import Dict, Generic, List, Optional, TypeVar

from ..core.exceptions import DuplicateKeyError, InvalidArgumentError, NotFoundError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class InMemoryCollectionStore(Generic[T]):
    """Dict-backed store keyed by ``record.id``.

    Note: dicts keep insertion order and an assignment to an existing key keeps
    its position, so ``enumerate`` is stable across updates.
    """

    def __init__(self, name: str = "records"):
        self.name = name
        self._records: Dict[str, T] = {}
        self._lock = threading.RLock()

    def insert(self, record: T) -> T:
        record_id = getattr(record, "id")
        with self._lock:
            if record_id in self._records:
                raise DuplicateKeyError(f"{self.name}: id {record_id} already exists")
            self._records[record_id] = record
        logger.debug("%s: inserted %s", self.name, record_id)
        return record

    def get_by_id(self, record_id: str) -> Optional[T]:
        with self._lock:
            return self._records.get(record_id)

    def update(self, record_id: str, record: T) -> T:
        if getattr(record, "id") != record_id:
            raise InvalidArgumentError(f"{self.name}: record id does not match {record_id}")
        with self._lock:
            if record_id not in self._records:
                raise NotFoundError(f"{self.name}: {record_id} not found")
            self._records[record_id] = record
        logger.debug("%s: updated %s", self.name, record_id)
        return record

    def enumerate(self) -> List[T]:
        with self._lock:
            return list(self._records.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
