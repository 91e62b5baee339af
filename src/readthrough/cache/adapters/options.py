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
"""Interpretation of the call options understood by the built-in stores."""

from __future__ import annotations

import math
from datetime import timedelta

from readthrough.cache.ports.outbound import StoreOptions


def ttl_seconds(options: StoreOptions) -> float | None:
    """Return the ``ttl`` option in seconds, accepting timedelta or a number.

    A ttl of zero or less means the entry is already expired; stores treat a
    write with such a ttl as a delete.
    """
    ttl = options.get("ttl")
    if ttl is None:
        return None
    if isinstance(ttl, timedelta):
        return ttl.total_seconds()
    return float(ttl)


def ttl_milliseconds(ttl: float) -> int:
    """Round a positive ttl up to whole milliseconds, never below 1."""
    return max(1, math.ceil(ttl * 1000))


def namespace(options: StoreOptions) -> str | None:
    ns = options.get("namespace")
    return str(ns) if ns else None
