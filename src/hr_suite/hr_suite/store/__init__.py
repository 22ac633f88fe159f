from .memory import InMemoryCollectionStore
from .repository import CollectionStore

__all__ = ["CollectionStore", "InMemoryCollectionStore"]
