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
"""Tests for InMemoryCacheStore."""

import asyncio
from datetime import timedelta

import pytest

from readthrough.cache.adapters.memory import InMemoryCacheStore
from readthrough.cache.ports.outbound import CacheStore


class TestInMemoryCacheStore:
    @pytest.mark.asyncio
    async def test_write_and_read(self):
        s = InMemoryCacheStore()
        await s.write("key1", "value1", {})
        assert await s.read("key1", {}) == "value1"

    @pytest.mark.asyncio
    async def test_read_missing_returns_none(self):
        s = InMemoryCacheStore()
        assert await s.read("missing", {}) is None

    @pytest.mark.asyncio
    async def test_tuple_keys(self):
        s = InMemoryCacheStore()
        await s.write(("user", 1), {"name": "Alice"}, {})
        assert await s.read(("user", 1), {}) == {"name": "Alice"}

    @pytest.mark.asyncio
    async def test_read_multi_returns_only_hits(self):
        s = InMemoryCacheStore()
        await s.write("a", 1, {})
        await s.write("c", 3, {})
        assert await s.read_multi(["a", "b", "c"], {}) == {"a": 1, "c": 3}

    @pytest.mark.asyncio
    async def test_write_overwrites(self):
        s = InMemoryCacheStore()
        await s.write("k", "old", {})
        await s.write("k", "new", {})
        assert await s.read("k", {}) == "new"

    @pytest.mark.asyncio
    async def test_delete(self):
        s = InMemoryCacheStore()
        await s.write("k", "v", {})
        await s.delete("k", {})
        assert await s.read("k", {}) is None

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self):
        s = InMemoryCacheStore()
        await s.delete("missing", {})
        assert s.size() == 0

    @pytest.mark.asyncio
    async def test_ttl_expiry(self):
        s = InMemoryCacheStore()
        await s.write("k", "v", {"ttl": timedelta(milliseconds=50)})
        assert await s.read("k", {}) == "v"
        await asyncio.sleep(0.1)
        assert await s.read("k", {}) is None
        assert s.size() == 0

    @pytest.mark.asyncio
    async def test_numeric_ttl_in_seconds(self):
        s = InMemoryCacheStore()
        await s.write("k", "v", {"ttl": 0})
        assert await s.read_multi(["k"], {}) == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("ttl", [0, -1, timedelta(seconds=-1)])
    async def test_non_positive_ttl_removes_entry(self, ttl):
        s = InMemoryCacheStore()
        await s.write("k", "old", {})
        await s.write("k", "new", {"ttl": ttl})
        assert await s.read("k", {}) is None
        assert s.size() == 0

    @pytest.mark.asyncio
    async def test_namespaces_are_isolated(self):
        s = InMemoryCacheStore()
        await s.write("k", "users", {"namespace": "users"})
        await s.write("k", "orders", {"namespace": "orders"})
        assert await s.read("k", {"namespace": "users"}) == "users"
        assert await s.read("k", {"namespace": "orders"}) == "orders"
        assert await s.read("k", {}) is None

    @pytest.mark.asyncio
    async def test_unknown_options_ignored(self):
        s = InMemoryCacheStore()
        await s.write("k", "v", {"deadline": 3})
        assert await s.read("k", {"deadline": 3}) == "v"

    @pytest.mark.asyncio
    async def test_clear(self):
        s = InMemoryCacheStore()
        await s.write("a", 1, {})
        await s.write("b", 2, {})
        s.clear()
        assert s.size() == 0

    def test_protocol_compliance(self):
        assert isinstance(InMemoryCacheStore(), CacheStore)
