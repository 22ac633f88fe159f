from __future__ import annotations

from typing import Generic, List, Optional, Protocol, TypeVar

T = TypeVar("T")


class CollectionStore(Protocol, Generic[T]):
    """Keyed container for one entity type.

    Service facades depend on this interface, not on a concrete backend.
    Records are immutable; ``update`` swaps in a new record under the same id.
    """

    def insert(self, record: T) -> T:
        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[T]:
        raise NotImplementedError

    def update(self, record_id: str, record: T) -> T:
        raise NotImplementedError

    def enumerate(self) -> List[T]:
        """Snapshot of all records in insertion order."""

        raise NotImplementedError

    def __len__(self) -> int:
        raise NotImplementedError
