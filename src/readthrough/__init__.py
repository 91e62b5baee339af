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
"""Readthrough: read-through/write-through caching over any key-value store."""

from readthrough.cache import (
    CacheStore,
    InMemoryCacheStore,
    ReadThroughCache,
    RedisCacheStore,
    create_cache_store,
)
from readthrough.core.config import Config
from readthrough.kernel.exceptions import (
    ConfigurationException,
    IncompleteLoadError,
    LoaderNotDefinedError,
    ReadThroughException,
)

__version__ = "0.1.0"

__all__ = [
    "CacheStore",
    "Config",
    "ConfigurationException",
    "InMemoryCacheStore",
    "IncompleteLoadError",
    "LoaderNotDefinedError",
    "ReadThroughCache",
    "ReadThroughException",
    "RedisCacheStore",
    "create_cache_store",
]
