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
"""Tests for RedisCacheStore using a FakeRedis stub."""

from __future__ import annotations

from datetime import timedelta

import pytest

from readthrough.cache.adapters.redis import RedisCacheStore
from readthrough.cache.ports.outbound import CacheStore


class FakeRedis:
    """Minimal in-memory stub matching the redis.asyncio.Redis interface."""

    def __init__(self) -> None:
        self._store: dict[str, bytes] = {}
        self.expiries: dict[str, int | None] = {}
        self.mget_calls: list[list[str]] = []
        self.pinged = False
        self.closed = False

    async def get(self, key: str) -> bytes | None:
        return self._store.get(key)

    async def mget(self, keys: list[str]) -> list[bytes | None]:
        self.mget_calls.append(list(keys))
        return [self._store.get(k) for k in keys]

    async def set(self, key: str, value: bytes, ex: int | None = None, px: int | None = None) -> None:
        self._store[key] = value
        self.expiries[key] = px

    async def delete(self, *keys: str) -> int:
        count = 0
        for k in keys:
            if k in self._store:
                del self._store[k]
                count += 1
        return count

    async def ping(self) -> bool:
        self.pinged = True
        return True

    async def aclose(self) -> None:
        self.closed = True


class TestRedisCacheStore:
    def test_protocol_compliance(self):
        assert isinstance(RedisCacheStore(FakeRedis()), CacheStore)

    @pytest.mark.asyncio
    async def test_write_and_read(self):
        store = RedisCacheStore(FakeRedis())
        await store.write("key", {"name": "Alice", "age": 30}, {})
        assert await store.read("key", {}) == {"name": "Alice", "age": 30}

    @pytest.mark.asyncio
    async def test_read_missing_key(self):
        store = RedisCacheStore(FakeRedis())
        assert await store.read("no-such-key", {}) is None

    @pytest.mark.asyncio
    async def test_tuple_keys_joined_with_colons(self):
        client = FakeRedis()
        store = RedisCacheStore(client)
        await store.write(("user", 42), "Alice", {})
        assert "user:42" in client._store

    @pytest.mark.asyncio
    async def test_prefix_and_namespace(self):
        client = FakeRedis()
        store = RedisCacheStore(client, key_prefix="app")
        await store.write(("user", 1), "x", {"namespace": "v2"})
        assert list(client._store) == ["app:v2:user:1"]
        assert await store.read(("user", 1), {"namespace": "v2"}) == "x"
        assert await store.read(("user", 1), {}) is None

    @pytest.mark.asyncio
    async def test_read_multi_uses_single_mget(self):
        client = FakeRedis()
        store = RedisCacheStore(client)
        await store.write("a", 1, {})
        await store.write("c", 3, {})

        assert await store.read_multi(["a", "b", "c"], {}) == {"a": 1, "c": 3}
        assert client.mget_calls == [["a", "b", "c"]]

    @pytest.mark.asyncio
    async def test_read_multi_empty(self):
        client = FakeRedis()
        assert await RedisCacheStore(client).read_multi([], {}) == {}
        assert client.mget_calls == []

    @pytest.mark.asyncio
    async def test_ttl_option_sets_expiry(self):
        client = FakeRedis()
        store = RedisCacheStore(client)
        await store.write("a", 1, {"ttl": timedelta(seconds=2)})
        await store.write("b", 1, {"ttl": 0.5})
        await store.write("c", 1, {})
        assert client.expiries == {"a": 2000, "b": 500, "c": None}

    @pytest.mark.asyncio
    async def test_sub_millisecond_ttl_rounds_up(self):
        client = FakeRedis()
        store = RedisCacheStore(client)
        await store.write("a", 1, {"ttl": 0.0001})
        assert client.expiries == {"a": 1}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("ttl", [0, -5, timedelta(0)])
    async def test_non_positive_ttl_removes_key(self, ttl):
        client = FakeRedis()
        store = RedisCacheStore(client)
        await store.write("a", "old", {})
        await store.write("a", "new", {"ttl": ttl})
        assert await store.read("a", {}) is None
        assert client.expiries == {"a": None}

    @pytest.mark.asyncio
    async def test_delete(self):
        store = RedisCacheStore(FakeRedis())
        await store.write("key", "value", {})
        await store.delete("key", {})
        assert await store.read("key", {}) is None

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self):
        store = RedisCacheStore(FakeRedis())
        await store.delete("missing", {})

    @pytest.mark.asyncio
    async def test_corrupt_value_treated_as_miss(self, caplog):
        client = FakeRedis()
        client._store["bad"] = b"{not json"
        store = RedisCacheStore(client)

        assert await store.read("bad", {}) is None
        assert await store.read_multi(["bad"], {}) == {}
        assert "Failed to deserialize" in caplog.text

    @pytest.mark.asyncio
    async def test_start_and_stop(self):
        client = FakeRedis()
        store = RedisCacheStore(client)
        await store.start()
        await store.stop()
        assert client.pinged and client.closed
