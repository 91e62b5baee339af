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
"""Exception hierarchy for readthrough.

Categories:
- ConfigurationException: a cache or store is set up incorrectly. These are
  programming errors and are raised on every call, never retried.
- LoaderException: the authoritative source produced an unusable result.

Errors raised by loaders and store clients themselves are not wrapped;
they reach the caller unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


# =============================================================================
# Base Exception
# =============================================================================


class ReadThroughException(Exception):
    """Base exception for all readthrough errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CACHE_STORE_NOT_SET").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(ReadThroughException):
    """A cache, store, or setting is misconfigured."""


class CacheStoreNotConfiguredError(ConfigurationException):
    """A cache reached the base ``cache_store`` hook."""

    def __init__(self, cache_name: str) -> None:
        super().__init__(
            f"Cache store not set for {cache_name}",
            code="CACHE_STORE_NOT_SET",
            context={"cache": cache_name},
        )


class LoaderNotDefinedError(ConfigurationException):
    """Neither ``load_object`` nor ``load_objects`` is overridden."""

    def __init__(self, cache_name: str) -> None:
        super().__init__(
            f"{cache_name} must override load_object or load_objects",
            code="LOADER_NOT_DEFINED",
            context={"cache": cache_name},
        )


class CacheConfigurationError(ConfigurationException):
    """Invalid store selection settings."""


# =============================================================================
# Loader Exceptions
# =============================================================================


class LoaderException(ReadThroughException):
    """The authoritative source returned an unusable result."""


class IncompleteLoadError(LoaderException):
    """A batch load returned no entry for some requested keys."""

    def __init__(self, cache_name: str, missing_keys: Iterable[Any]) -> None:
        self.missing_keys: list[Any] = list(missing_keys)
        super().__init__(
            f"{cache_name} loaded no value for {len(self.missing_keys)} requested key(s)",
            code="INCOMPLETE_LOAD",
            context={"cache": cache_name, "missing_keys": self.missing_keys},
        )
