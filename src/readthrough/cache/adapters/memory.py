# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""In-process cache store."""

from __future__ import annotations

import time
from collections.abc import Hashable, Sequence
from typing import Any

from readthrough.cache.adapters.options import namespace, ttl_seconds
from readthrough.cache.ports.outbound import StoreOptions


class InMemoryCacheStore:
    """Dict-backed store with optional TTL and namespace support.

    Suitable for development, testing, and single-process applications.
    Keys may be any hashable value. Expired entries are dropped lazily,
    when they are next read.
    """

    def __init__(self) -> None:
        self._store: dict[tuple[str | None, Hashable], tuple[Any, float | None]] = {}

    @staticmethod
    def _slot(key: Hashable, options: StoreOptions) -> tuple[str | None, Hashable]:
        return (namespace(options), key)

    def _lookup(self, slot: tuple[str | None, Hashable]) -> Any | None:
        entry = self._store.get(slot)
        if entry is None:
            return None

        value, expires_at = entry
        if expires_at is not None and time.monotonic() >= expires_at:
            del self._store[slot]
            return None

        return value

    async def read(self, key: Hashable, options: StoreOptions) -> Any | None:
        """Get a value by key. Returns None if missing or expired."""
        return self._lookup(self._slot(key, options))

    async def read_multi(self, keys: Sequence[Hashable], options: StoreOptions) -> dict[Hashable, Any]:
        """Get all present, unexpired values among ``keys``."""
        found: dict[Hashable, Any] = {}
        for key in keys:
            value = self._lookup(self._slot(key, options))
            if value is not None:
                found[key] = value
        return found

    async def write(self, key: Hashable, value: Any, options: StoreOptions) -> None:
        """Store a value, expiring after the ``ttl`` option if given."""
        ttl = ttl_seconds(options)
        if ttl is not None and ttl <= 0:
            self._store.pop(self._slot(key, options), None)
            return
        expires_at = time.monotonic() + ttl if ttl is not None else None
        self._store[self._slot(key, options)] = (value, expires_at)

    async def delete(self, key: Hashable, options: StoreOptions) -> None:
        self._store.pop(self._slot(key, options), None)

    def size(self) -> int:
        """Number of entries held, including expired ones not yet dropped."""
        return len(self._store)

    def clear(self) -> None:
        self._store.clear()
