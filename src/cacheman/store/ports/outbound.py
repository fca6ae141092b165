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
"""Store ports — the cache contract offered and the Redis capability consumed."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol, runtime_checkable

from cacheman.store.types import ScanResult


@runtime_checkable
class CacheStore(Protocol):
    """Abstract cache-store interface consumed by caching middleware.

    ``ttl`` is seconds (or a ``timedelta``); ``-1`` stores without expiry and
    ``None`` applies the store's default TTL.
    """

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any, ttl: int | float | timedelta | None = None) -> str: ...

    async def delete(self, key: str) -> None: ...

    async def clear(self) -> None: ...

    async def scan(self, cursor: int = 0, count: int = 10) -> ScanResult: ...


@runtime_checkable
class RedisClient(Protocol):
    """The subset of ``redis.asyncio.Redis`` the store relies on."""

    async def get(self, name: Any) -> Any: ...

    async def set(self, name: Any, value: Any, ex: Any = None) -> Any: ...

    async def delete(self, *names: Any) -> int: ...

    async def keys(self, pattern: Any = "*") -> list[Any]: ...

    async def scan(self, cursor: int = 0, match: Any = None, count: int | None = None) -> tuple[int, list[Any]]: ...

    async def ping(self) -> Any: ...

    async def execute_command(self, *args: Any, **options: Any) -> Any: ...


def is_redis_client(obj: Any) -> bool:
    """Return True when *obj* offers the Redis commands a store needs."""
    return isinstance(obj, RedisClient)
