"""
Thread-safe least-recently-used cache.

Used by the ContentModerator to store results keyed by normalized text.
Hash map + doubly linked recency list: head is the most recently used node,
tail the least recently used. Every public operation runs under one lock.
"""

import threading
from dataclasses import dataclass
from typing import Generic, Hashable, Optional, TypeVar

import structlog

logger = structlog.get_logger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(frozen=True)
class CacheStatistics:
    """Snapshot of cache occupancy."""

    capacity: int
    count: int

    @property
    def utilization(self) -> float:
        return self.count / self.capacity


class _Node(Generic[K, V]):
    __slots__ = ("key", "value", "prev", "next")

    def __init__(self, key: K, value: V):
        self.key = key
        self.value = value
        self.prev: Optional["_Node[K, V]"] = None
        self.next: Optional["_Node[K, V]"] = None


class LRUCache(Generic[K, V]):
    """
    Bounded LRU cache with O(1) get/set/remove.

    Capacity is fixed at construction. Inserting a new key into a full cache
    evicts exactly the least recently used entry; overwriting an existing key
    never changes `count`.
    """

    def __init__(self, capacity: int = 1000):
        """
        Args:
            capacity: Maximum number of entries (must be > 0)
        """
        if capacity <= 0:
            raise ValueError(f"LRUCache capacity must be positive, got {capacity}")

        self._capacity = capacity
        self._nodes: dict[K, _Node[K, V]] = {}
        self._head: Optional[_Node[K, V]] = None
        self._tail: Optional[_Node[K, V]] = None
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._nodes)

    def __len__(self) -> int:
        return self.count

    @property
    def statistics(self) -> CacheStatistics:
        return CacheStatistics(capacity=self._capacity, count=self.count)

    def get(self, key: K) -> Optional[V]:
        """Return the cached value and mark it most recently used, or None on miss."""
        with self._lock:
            node = self._nodes.get(key)
            if node is None:
                return None
            self._move_to_head(node)
            return node.value

    def set(self, key: K, value: V) -> None:
        """Insert or overwrite a value, evicting the LRU entry if over capacity."""
        with self._lock:
            node = self._nodes.get(key)
            if node is not None:
                node.value = value
                self._move_to_head(node)
                return

            node = _Node(key, value)
            self._nodes[key] = node
            self._add_to_head(node)

            if len(self._nodes) > self._capacity:
                evicted = self._pop_tail()
                if evicted is not None:
                    del self._nodes[evicted.key]
                    logger.debug("Evicted LRU cache entry", capacity=self._capacity)

    def remove(self, key: K) -> None:
        """Drop a key if present."""
        with self._lock:
            node = self._nodes.pop(key, None)
            if node is not None:
                self._unlink(node)

    def clear(self) -> None:
        with self._lock:
            self._nodes.clear()
            self._head = None
            self._tail = None

    # -- recency list (caller holds the lock) --------------------------------

    def _add_to_head(self, node: _Node[K, V]) -> None:
        node.prev = None
        node.next = self._head
        if self._head is not None:
            self._head.prev = node
        self._head = node
        if self._tail is None:
            self._tail = node

    def _unlink(self, node: _Node[K, V]) -> None:
        if node.prev is not None:
            node.prev.next = node.next
        else:
            self._head = node.next

        if node.next is not None:
            node.next.prev = node.prev
        else:
            self._tail = node.prev

        node.prev = None
        node.next = None

    def _move_to_head(self, node: _Node[K, V]) -> None:
        if node is self._head:
            return
        self._unlink(node)
        self._add_to_head(node)

    def _pop_tail(self) -> Optional[_Node[K, V]]:
        tail = self._tail
        if tail is not None:
            self._unlink(tail)
        return tail

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(capacity={self._capacity}, count={self.count})"
