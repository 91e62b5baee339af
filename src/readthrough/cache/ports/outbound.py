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
"""Cache store protocol: the key-value backend a read-through cache sits on."""

from __future__ import annotations

from collections.abc import Hashable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

StoreOptions = Mapping[str, Any]


@runtime_checkable
class CacheStore(Protocol):
    """Abstract key-value store interface.

    All cache backends (Redis, in-memory, etc.) must implement this protocol.
    ``options`` comes from the cache's ``cache_store_call_options`` hook and is
    passed through untouched on every call.
    """

    async def read(self, key: Hashable, options: StoreOptions) -> Any | None:
        """Return the stored value, or ``None`` on a miss."""
        ...

    async def read_multi(self, keys: Sequence[Hashable], options: StoreOptions) -> dict[Hashable, Any]:
        """Return a mapping holding only the keys that were hits."""
        ...

    async def write(self, key: Hashable, value: Any, options: StoreOptions) -> None:
        """Unconditionally store ``value`` under ``key``."""
        ...

    async def delete(self, key: Hashable, options: StoreOptions) -> None:
        """Remove ``key``; deleting an absent key is not an error."""
        ...
