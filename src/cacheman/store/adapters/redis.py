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
"""Redis-backed cache store."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from datetime import timedelta
from typing import Any

import redis.asyncio as aioredis

from cacheman.kernel.exceptions import CacheConnectionException
from cacheman.store import codec
from cacheman.store.bulk import delete_matching
from cacheman.store.errors import BACKEND_ERRORS, backend_failure
from cacheman.store.keys import KeyNamespace
from cacheman.store.ports.outbound import is_redis_client
from cacheman.store.scanner import iter_entries, scan_page
from cacheman.store.ttl import DEFAULT_TTL, NO_EXPIRY, resolve_ttl
from cacheman.store.types import DeleteStrategy, ScanEntry, ScanResult, StoreOptions

_logger = logging.getLogger(__name__)


class RedisStore:
    """Cache store over a ``redis.asyncio.Redis``-like client.

    Every key is namespaced under ``prefix`` and every value travels as JSON.
    Pick a constructor by what you hold:

    - :meth:`from_url` for a ``redis://`` connection string
    - :meth:`from_options` for a :class:`StoreOptions` record
    - :meth:`from_client` for a client that is already open
    - :meth:`create` to dispatch on any of the above

    A client passed in is borrowed: the store never closes it. A client the
    store opens itself is closed by :meth:`stop`.

    Usage:
        async with RedisStore.from_url("redis://localhost:6379/0") as store:
            await store.set("user:1", {"name": "Alice"}, ttl=300)
            await store.get("user:1")
    """

    def __init__(
        self,
        client: Any,
        *,
        prefix: str | None = None,
        default_ttl: int = DEFAULT_TTL,
        delete_strategy: DeleteStrategy | str = DeleteStrategy.KEYS,
        owns_client: bool = False,
        username: str | None = None,
        password: str | None = None,
        database: int | None = None,
    ) -> None:
        self._client = client
        self._keys = KeyNamespace(prefix)
        if default_ttl != NO_EXPIRY and not (isinstance(default_ttl, int) and default_ttl > 0):
            raise ValueError(f"default_ttl must be a positive number of seconds or {NO_EXPIRY}, got {default_ttl!r}")
        self._default_ttl = default_ttl
        self._delete_strategy = DeleteStrategy(delete_strategy)
        self._owns_client = owns_client
        # Handshake for borrowed clients; owned clients carry these in their pool.
        self._username = username
        self._password = password
        self._database = database

    # -- construction ---------------------------------------------------------

    @classmethod
    def create(
        cls,
        source: str | StoreOptions | Mapping[str, Any] | Any = None,
        **settings: Any,
    ) -> RedisStore:
        """Build a store from a URL, an options record or mapping, or a live client."""
        if source is None:
            return cls.from_options(StoreOptions(), **settings)
        if isinstance(source, str):
            return cls.from_url(source, **settings)
        if isinstance(source, StoreOptions):
            return cls.from_options(source, **settings)
        if isinstance(source, Mapping):
            return cls.from_options(StoreOptions.from_mapping(source), **settings)
        if is_redis_client(source):
            return cls.from_client(source, **settings)
        raise TypeError(f"Cannot build a RedisStore from {type(source).__name__}")

    @classmethod
    def from_url(cls, url: str, **settings: Any) -> RedisStore:
        """Open a client from a ``redis://[[user]:password@]host[:port][/db]`` URL."""
        return cls.from_options(StoreOptions.from_url(url), **settings)

    @classmethod
    def from_client(cls, client: Any, **settings: Any) -> RedisStore:
        """Borrow an open client."""
        return cls(client, **settings)

    @classmethod
    def from_options(cls, options: StoreOptions, **settings: Any) -> RedisStore:
        """Borrow ``options.client`` if set, otherwise open a new client."""
        settings.setdefault("prefix", options.prefix)
        if options.client is not None:
            return cls(
                options.client,
                username=options.username,
                password=options.password,
                database=options.database,
                **settings,
            )
        return cls(_open_client(options), owns_client=True, **settings)

    # -- properties -----------------------------------------------------------

    @property
    def client(self) -> Any:
        return self._client

    @property
    def prefix(self) -> str:
        return self._keys.prefix

    @property
    def default_ttl(self) -> int:
        return self._default_ttl

    @property
    def owns_client(self) -> bool:
        return self._owns_client

    # -- cache operations -----------------------------------------------------

    async def get(self, key: str) -> Any | None:
        """Retrieve and deserialize a cached value; ``None`` on a miss.

        Raises:
            BackendException: the ``GET`` failed.
            DecodeException: a payload is stored but is not valid JSON.
        """
        backing = self._keys.backing(key)
        try:
            raw = await self._client.get(backing)
        except BACKEND_ERRORS as exc:
            raise backend_failure("GET", exc, key=backing) from exc
        if not raw:
            return None
        return codec.decode(raw, key=backing)

    async def set(self, key: str, value: Any, ttl: int | float | timedelta | None = None) -> str:
        """Serialize and store a value, returning the stored JSON text.

        ``ttl`` is seconds or a ``timedelta``; ``None`` applies the default
        TTL and ``-1`` stores without expiry. Serialization happens first, so
        an unserializable value never reaches Redis.

        Raises:
            EncodeException: the value is not JSON-serializable.
            BackendException: the ``SET`` failed.
        """
        backing = self._keys.backing(key)
        payload = codec.encode(value, key=backing)
        ex = resolve_ttl(ttl, self._default_ttl)
        try:
            await self._client.set(backing, payload, ex=ex)
        except BACKEND_ERRORS as exc:
            raise backend_failure("SET", exc, key=backing) from exc
        return payload

    async def delete(self, key: str) -> None:
        """Delete an entry.

        *key* is a Redis glob pattern within the namespace: ``delete("foo*")``
        removes every entry whose key starts with ``foo``.
        """
        await delete_matching(self._client, self._keys.backing(key), self._delete_strategy)

    async def clear(self) -> None:
        """Delete every entry in this store's namespace, and only those."""
        await delete_matching(self._client, self._keys.pattern(), self._delete_strategy)

    async def scan(self, cursor: int = 0, count: int = 10) -> ScanResult:
        """Return one page of entries and the cursor to continue from.

        Start at cursor 0 and follow the returned cursor until it is 0 again.
        """
        return await scan_page(self._client, self._keys, self.get, cursor=cursor, count=count)

    def scan_iter(self, count: int = 10) -> AsyncIterator[ScanEntry]:
        """Iterate over every entry in the namespace, one scan page at a time."""
        return iter_entries(self._client, self._keys, self.get, count=count)

    # -- lifecycle ------------------------------------------------------------

    async def start(self) -> None:
        """Authenticate and select the database, then ping.

        Raises:
            CacheConnectionException: the handshake failed. This is fatal;
                it points at a configuration or credentials error.
        """
        try:
            if self._password:
                auth_args = (self._username, self._password) if self._username else (self._password,)
                await self._client.execute_command("AUTH", *auth_args)
            if self._database is not None:
                await self._client.execute_command("SELECT", self._database)
            await self._client.ping()
        except BACKEND_ERRORS as exc:
            raise CacheConnectionException(
                f"Redis handshake failed: {exc}",
                context={"prefix": self.prefix, "database": self._database},
            ) from exc
        _logger.info("Redis store ready (prefix '%s')", self.prefix)

    async def stop(self) -> None:
        """Close the client if this store opened it."""
        if self._owns_client:
            await self._client.aclose()
            _logger.info("Redis store closed (prefix '%s')", self.prefix)

    async def __aenter__(self) -> RedisStore:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()


def _open_client(options: StoreOptions) -> aioredis.Redis:
    """Open a client whose pool authenticates and selects on every connection."""
    kwargs: dict[str, Any] = dict(options.extra)
    if options.username is not None:
        kwargs["username"] = options.username
    if options.password is not None:
        kwargs["password"] = options.password
    if options.database is not None:
        kwargs["db"] = options.database

    if options.host is None and options.port is None:
        _logger.debug("Opening Redis client with library defaults")
    else:
        if options.host is not None:
            kwargs["host"] = options.host
        if options.port is not None:
            kwargs["port"] = int(options.port)
        _logger.debug("Opening Redis client for %s:%s", options.host, options.port)

    return aioredis.Redis.from_pool(aioredis.ConnectionPool(**kwargs))
