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
"""Readthrough cache: read-through cache base class and store adapters."""

from readthrough.cache.adapters.memory import InMemoryCacheStore
from readthrough.cache.adapters.redis import RedisCacheStore
from readthrough.cache.auto_configuration import create_cache_store
from readthrough.cache.base import ReadThroughCache, shared_operation
from readthrough.cache.ports.outbound import CacheStore, StoreOptions

__all__ = [
    "CacheStore",
    "InMemoryCacheStore",
    "ReadThroughCache",
    "RedisCacheStore",
    "StoreOptions",
    "create_cache_store",
    "shared_operation",
]
