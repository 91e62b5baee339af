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
"""Cache store selection from configuration, with provider detection."""

from __future__ import annotations

import importlib

import structlog

from readthrough.cache.ports.outbound import CacheStore
from readthrough.config.properties.cache import CacheProperties
from readthrough.core.config import Config
from readthrough.kernel.exceptions import CacheConfigurationError

logger = structlog.get_logger("readthrough.cache.auto_configuration")

PROVIDERS = ("memory", "redis")


def is_available(module_name: str) -> bool:
    """Check if a Python package is importable."""
    try:
        importlib.import_module(module_name)
        return True
    except ImportError:
        return False


def detect_provider() -> str:
    """Detect the best available cache provider."""
    if is_available("redis.asyncio"):
        return "redis"
    return "memory"


def create_cache_store(config: Config | None = None) -> CacheStore:
    """Instantiate the store configured under ``readthrough.cache``.

    Args:
        config: Application configuration. Defaults to provider auto-detection
            with default settings.

    Returns:
        A ready-to-use CacheStore. Redis connections are opened lazily by
        the client, on the first command.

    Raises:
        CacheConfigurationError: the provider is unknown, or ``redis`` was
            requested but the ``redis`` package is not installed.
    """
    props = (config or Config()).bind(CacheProperties)
    configured = props.provider.lower()
    provider = detect_provider() if configured == "auto" else configured

    if provider not in PROVIDERS:
        raise CacheConfigurationError(
            f"Unsupported cache provider: {props.provider!r}",
            code="UNSUPPORTED_PROVIDER",
            context={"provider": props.provider, "supported": list(PROVIDERS)},
        )

    if provider == "redis":
        if not is_available("redis.asyncio"):
            raise CacheConfigurationError(
                "redis package required for provider 'redis': pip install readthrough[redis]",
                code="PROVIDER_UNAVAILABLE",
                context={"provider": provider},
            )
        import redis.asyncio as aioredis

        from readthrough.cache.adapters.redis import RedisCacheStore

        logger.info("cache_store_selected", provider=provider, configured=configured)
        return RedisCacheStore(aioredis.from_url(props.redis_url), key_prefix=props.key_prefix)

    from readthrough.cache.adapters.memory import InMemoryCacheStore

    logger.info("cache_store_selected", provider=provider, configured=configured)
    return InMemoryCacheStore()
