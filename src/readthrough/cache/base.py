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
"""Read-through cache base class.

A ``ReadThroughCache`` subclass describes one kind of cached entity: how its
store key is derived, how it is loaded on a miss, and how values move between
their stored and caller-facing forms. The base class supplies the four cache
operations on top of those hooks.

Usage:
    class UserCache(ReadThroughCache[int, User]):
        def cache_store(self) -> CacheStore:
            return STORE

        def transform_cache_key(self, key: int) -> tuple[str, int]:
            return ("user", key)

        async def load_objects(self, keys: Sequence[int]) -> dict[int, User]:
            return {user.id: user for user in await repo.find_all(keys)}

    user = await UserCache.fetch(42)
"""

from __future__ import annotations

import abc
import functools
import logging
import threading
from collections.abc import Callable, Hashable, Iterable, Sequence
from typing import Any, Generic, TypeVar

from readthrough.cache.ports.outbound import CacheStore, StoreOptions
from readthrough.kernel.exceptions import (
    CacheStoreNotConfiguredError,
    IncompleteLoadError,
    LoaderNotDefinedError,
)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

logger = logging.getLogger("readthrough.cache")


class shared_operation:  # noqa: N801
    """Make a cache operation callable on the class as well as on instances.

    Looked up on an instance, the wrapped coroutine function binds normally.
    Looked up on the class, it returns a coroutine function that calls through
    to that class's shared instance, so ``await UserCache.fetch(1)`` is
    ``await UserCache.instance().fetch(1)``. The lookup itself builds nothing.
    """

    def __init__(self, func: Callable[..., Any]) -> None:
        self._func = func
        self._name = func.__name__
        functools.update_wrapper(self, func)

    def __set_name__(self, owner: type, name: str) -> None:
        self._name = name

    def __get__(self, obj: Any, owner: type | None = None) -> Any:
        if obj is None:
            if owner is None:
                return self
            return self._class_entry_point(owner)
        return self._func.__get__(obj, owner)

    def _class_entry_point(self, owner: type) -> Callable[..., Any]:
        # The shared instance is built on the first call, never on lookup.
        name = self._name

        async def call_shared(*args: Any, **kwargs: Any) -> Any:
            return await getattr(owner.instance(), name)(*args, **kwargs)  # type: ignore[attr-defined]

        functools.update_wrapper(call_shared, self._func)
        return call_shared


class ReadThroughCache(abc.ABC, Generic[K, V]):
    """Abstract read-through cache over a :class:`CacheStore`.

    Subclasses must implement :meth:`cache_store` and at least one of
    :meth:`load_object` / :meth:`load_objects`. Every other hook has an
    identity or empty default.

    A stored value of ``None`` cannot be told apart from a miss, so loaders
    should not produce ``None`` for values meant to be cached.

    The read, load, and write steps of a miss are not atomic: concurrent
    misses on one key may each load and write, and the last write wins.
    Store and loader errors are never caught here. In particular a failed
    write while filling a miss fails the whole call.
    """

    _instance_lock = threading.RLock()

    def __init__(self) -> None:
        cls = type(self)
        if (
            cls.load_object is ReadThroughCache.load_object
            and cls.load_objects is ReadThroughCache.load_objects
        ):
            raise LoaderNotDefinedError(cls.__qualname__)

    # ------------------------------------------------------------------
    # Shared instance
    # ------------------------------------------------------------------

    @classmethod
    def instance(cls) -> ReadThroughCache[K, V]:
        """Return this class's process-wide instance, creating it on first use.

        Each subclass owns its own instance; it is never inherited from a
        parent class.
        """
        inst = cls.__dict__.get("_shared_instance")
        if inst is None:
            with cls._instance_lock:
                inst = cls.__dict__.get("_shared_instance")
                if inst is None:
                    inst = cls()
                    cls._shared_instance = inst
        return inst

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the shared instance; the next class-level call builds a new one."""
        with cls._instance_lock:
            if "_shared_instance" in cls.__dict__:
                delattr(cls, "_shared_instance")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @shared_operation
    async def fetch(self, key: K) -> V:
        """Return the value for ``key``, loading and storing it on a miss."""
        store_key = self.transform_cache_key(key)
        store = self.cache_store()
        options = self.cache_store_call_options()

        stored = await store.read(store_key, options)
        if stored is None:
            logger.debug("%s miss for %r", type(self).__qualname__, store_key)
            stored = self.transform_cache_object(await self.load_object(key))
            await store.write(store_key, stored, options)
        else:
            logger.debug("%s hit for %r", type(self).__qualname__, store_key)

        return self.transform_value_object(stored)

    @shared_operation
    async def fetch_multi(self, keys: Iterable[K]) -> dict[K, V]:
        """Return values for all ``keys`` using one batched store read.

        Missed keys are loaded with a single :meth:`load_objects` call and
        written back one by one. The result holds one entry per unique key,
        in the order the keys were given.
        """
        key_map = {key: self.transform_cache_key(key) for key in keys}
        if not key_map:
            return {}

        store = self.cache_store()
        options = self.cache_store_call_options()
        cached = await store.read_multi(list(key_map.values()), options)

        values: dict[K, V] = {}
        missed: list[K] = []
        for key, store_key in key_map.items():
            stored = cached.get(store_key)
            if stored is None:
                missed.append(key)
            else:
                values[key] = self.transform_value_object(stored)

        logger.debug(
            "%s batch read: %d hit(s), %d miss(es)",
            type(self).__qualname__,
            len(values),
            len(missed),
        )

        if missed:
            loaded = await self.load_objects(missed)
            absent = [key for key in missed if key not in loaded]
            if absent:
                raise IncompleteLoadError(type(self).__qualname__, absent)

            for key in missed:
                stored = self.transform_cache_object(loaded[key])
                await store.write(key_map[key], stored, options)
                values[key] = self.transform_value_object(stored)

        return {key: values[key] for key in key_map}

    @shared_operation
    async def update(self, key: K, value: Any = None) -> None:
        """Overwrite the entry for ``key``.

        ``value`` is taken as the freshly loaded object; when omitted it is
        loaded with :meth:`load_object`.
        """
        if value is None:
            value = await self.load_object(key)
        store_key = self.transform_cache_key(key)
        logger.debug("%s update for %r", type(self).__qualname__, store_key)
        await self.cache_store().write(
            store_key, self.transform_cache_object(value), self.cache_store_call_options()
        )

    @shared_operation
    async def invalidate(self, key: K) -> None:
        """Remove the entry for ``key``, if any."""
        store_key = self.transform_cache_key(key)
        logger.debug("%s invalidate for %r", type(self).__qualname__, store_key)
        await self.cache_store().delete(store_key, self.cache_store_call_options())

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    async def load_objects(self, keys: Sequence[K]) -> dict[K, Any]:
        """Load several objects from the authoritative source.

        Implemented with :meth:`load_object`; override one of the two.
        """
        return {key: await self.load_object(key) for key in keys}

    async def load_object(self, key: K) -> Any:
        """Load one object from the authoritative source.

        Implemented with :meth:`load_objects`; override one of the two.
        """
        loaded = await self.load_objects([key])
        if key not in loaded:
            raise IncompleteLoadError(type(self).__qualname__, [key])
        return loaded[key]

    def transform_cache_key(self, key: K) -> Hashable:
        return key

    def transform_cache_object(self, obj: Any) -> Any:
        return obj

    def transform_value_object(self, obj: Any) -> V:
        return obj  # type: ignore[no-any-return]

    @abc.abstractmethod
    def cache_store(self) -> CacheStore:
        """Return the store this cache reads from and writes to."""
        raise CacheStoreNotConfiguredError(type(self).__qualname__)

    def cache_store_call_options(self) -> StoreOptions:
        """Options passed with every store call (``ttl``, ``namespace``, ...)."""
        return {}
