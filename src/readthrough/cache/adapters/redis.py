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
"""Redis-backed cache store."""

from __future__ import annotations

import json
import logging
from collections.abc import Hashable, Sequence
from typing import Any

from readthrough.cache.adapters.options import namespace, ttl_milliseconds, ttl_seconds
from readthrough.cache.ports.outbound import StoreOptions

_logger = logging.getLogger(__name__)


class RedisCacheStore:
    """Cache store that delegates to a ``redis.asyncio.Redis``-like client.

    Values are JSON-serialized before storage so that any JSON-compatible
    Python object can be cached transparently. Keys are flattened into
    strings: ``key_prefix``, the ``namespace`` option, then the key itself,
    joined with ``:``. Tuple and list keys contribute one segment per item,
    so ``("user", 42)`` becomes ``user:42``.
    """

    def __init__(self, client: Any, key_prefix: str = "") -> None:
        self._client = client
        self._key_prefix = key_prefix

    def encode_key(self, key: Hashable, options: StoreOptions) -> str:
        parts: list[str] = []
        if self._key_prefix:
            parts.append(self._key_prefix)
        ns = namespace(options)
        if ns:
            parts.append(ns)
        if isinstance(key, (tuple, list)):
            parts.extend(str(part) for part in key)
        else:
            parts.append(str(key))
        return ":".join(parts)

    def _decode(self, redis_key: str, raw: Any) -> Any | None:
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            _logger.warning("Failed to deserialize cached value for key '%s'", redis_key)
            return None

    async def read(self, key: Hashable, options: StoreOptions) -> Any | None:
        """Retrieve and deserialize a cached value."""
        redis_key = self.encode_key(key, options)
        return self._decode(redis_key, await self._client.get(redis_key))

    async def read_multi(self, keys: Sequence[Hashable], options: StoreOptions) -> dict[Hashable, Any]:
        """Fetch all ``keys`` with a single MGET; misses are left out."""
        if not keys:
            return {}
        redis_keys = [self.encode_key(key, options) for key in keys]
        raws = await self._client.mget(redis_keys)

        found: dict[Hashable, Any] = {}
        for key, redis_key, raw in zip(keys, redis_keys, raws):
            value = self._decode(redis_key, raw)
            if value is not None:
                found[key] = value
        return found

    async def write(self, key: Hashable, value: Any, options: StoreOptions) -> None:
        """Serialize and store a value, with ``ttl`` mapped to a PX expiry.

        Redis rejects a zero expiry, so a non-positive ttl deletes the key.
        """
        raw = json.dumps(value)
        ttl = ttl_seconds(options)
        redis_key = self.encode_key(key, options)
        if ttl is not None and ttl <= 0:
            await self._client.delete(redis_key)
            return
        px = ttl_milliseconds(ttl) if ttl is not None else None
        await self._client.set(redis_key, raw.encode(), px=px)

    async def delete(self, key: Hashable, options: StoreOptions) -> None:
        await self._client.delete(self.encode_key(key, options))

    async def start(self) -> None:
        """Validate connectivity by pinging Redis."""
        await self._client.ping()

    async def stop(self) -> None:
        """Close the underlying Redis connection."""
        await self._client.aclose()
