"""Single-slot memoisation for same-set aspect detection."""

from __future__ import annotations

import hashlib
import threading
from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

from cachetools import LRUCache

from astrowheel.models import Body

from .settings import AspectSettings

__all__ = ["AspectCache", "fingerprint"]

T = TypeVar("T")


def fingerprint(bodies: Sequence[Body], settings: AspectSettings) -> str:
    """Digest of the serialised settings plus the ordered ``name:longitude`` pairs.

    Longitudes go through ``repr`` so that any non-zero change, however
    small, yields a different key.
    """

    body_key = "|".join(f"{body.name}:{body.longitude!r}" for body in bodies)
    raw = f"{settings.model_dump_json()}|{body_key}"
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


class AspectCache(Generic[T]):
    """Holds the most recent result; lookup and store happen under one lock."""

    def __init__(self) -> None:
        self._store: LRUCache[str, T] = LRUCache(maxsize=1)
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, key: str, compute: Callable[[], T]) -> tuple[T, bool]:
        """Return ``(value, cached)`` for ``key``, computing on a miss."""

        with self._lock:
            cached = self._store.get(key)
            if cached is not None:
                self.hits += 1
                return cached, True
            value = compute()
            self._store[key] = value
            self.misses += 1
            return value, False

    def clear(self) -> None:
        """Expose a hook for tests to reset memoised results."""
        with self._lock:
            self._store.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        return len(self._store)
