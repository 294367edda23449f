"""
Postboard API: Entity Store
============================

What:  Storage interface for users and posts, plus its in-memory implementation.
How:   `EntityStore` is the contract services depend on; `InMemoryStore`
       keeps entities in an insertion-ordered list and answers every query
       with a linear scan. Entities only need an `id` attribute.
Who:   UserService and PostService (injected through postboard.dependencies).

Design Decision:
    Services receive a store instead of reaching for module-level lists, so
    a database-backed EntityStore can replace InMemoryStore without touching
    handler logic.

Thread Safety:
    Each InMemoryStore owns a re-entrant lock. Handlers run on the event loop
    today, but sync handlers would run in a thread pool and must not observe
    a half-finished insert or delete.
"""

import threading
from abc import ABC, abstractmethod
from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")


class EntityStore(ABC, Generic[T]):
    """
    Contract for an ordered collection of entities keyed by `id`.

    Implementations must preserve insertion order for find_all() and filter().
    """

    @abstractmethod
    def find_by_id(self, entity_id: str) -> Optional[T]:
        """Return the entity with this id, or None."""
        ...

    @abstractmethod
    def find_all(self) -> List[T]:
        """Return every entity in insertion order (a copy, safe to iterate)."""
        ...

    @abstractmethod
    def filter(self, predicate: Callable[[T], bool]) -> List[T]:
        """Return the entities for which `predicate` is true, in insertion order."""
        ...

    @abstractmethod
    def insert(self, entity: T) -> T:
        """Append an entity and return it."""
        ...

    @abstractmethod
    def replace_at(self, entity_id: str, entity: T) -> bool:
        """Replace the entity with this id in place. Returns False if absent."""
        ...

    @abstractmethod
    def remove_by_id(self, entity_id: str) -> bool:
        """Remove the entity with this id. Returns True if one was removed."""
        ...

    @abstractmethod
    def count(self) -> int:
        ...


class InMemoryStore(EntityStore[T]):
    """Process-local list store. All state is lost on restart."""

    def __init__(self) -> None:
        self._items: List[T] = []
        self._lock = threading.RLock()

    def _index_of(self, entity_id: str) -> int:
        for index, item in enumerate(self._items):
            if getattr(item, "id") == entity_id:
                return index
        return -1

    def find_by_id(self, entity_id: str) -> Optional[T]:
        with self._lock:
            index = self._index_of(entity_id)
            return self._items[index] if index >= 0 else None

    def find_all(self) -> List[T]:
        with self._lock:
            return list(self._items)

    def filter(self, predicate: Callable[[T], bool]) -> List[T]:
        with self._lock:
            return [item for item in self._items if predicate(item)]

    def insert(self, entity: T) -> T:
        with self._lock:
            self._items.append(entity)
            return entity

    def replace_at(self, entity_id: str, entity: T) -> bool:
        with self._lock:
            index = self._index_of(entity_id)
            if index < 0:
                return False
            self._items[index] = entity
            return True

    def remove_by_id(self, entity_id: str) -> bool:
        with self._lock:
            index = self._index_of(entity_id)
            if index < 0:
                return False
            del self._items[index]
            return True

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def clear(self) -> None:
        """Drop every entity (used by tests and local resets)."""
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        return self.count()
