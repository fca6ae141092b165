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
"""Shared fixtures for store tests."""

from __future__ import annotations

from typing import Any

import fakeredis
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from cacheman.store.adapters.redis import RedisStore


class StubRedis:
    """Minimal async Redis stub that records calls and can fail on demand.

    ``fail`` maps a command name (``"get"``, ``"delete"``, ...) to the
    exception it should raise. ``fail_keys`` restricts ``delete`` failures
    to specific keys.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self.data: dict[str, Any] = dict(data or {})
        self.fail: dict[str, Exception] = {}
        self.fail_keys: set[str] = set()
        self.calls: list[tuple[Any, ...]] = []
        self.closed = False

    def _maybe_fail(self, command: str, key: Any = None) -> None:
        if command in self.fail and (not self.fail_keys or key in self.fail_keys):
            raise self.fail[command]

    async def get(self, name: Any) -> Any:
        self.calls.append(("get", name))
        self._maybe_fail("get", name)
        return self.data.get(name)

    async def set(self, name: Any, value: Any, ex: Any = None) -> bool:
        self.calls.append(("set", name, value, ex))
        self._maybe_fail("set", name)
        self.data[name] = value
        return True

    async def delete(self, *names: Any) -> int:
        self.calls.append(("delete", *names))
        for name in names:
            self._maybe_fail("delete", name)
        return sum(1 for name in names if self.data.pop(name, None) is not None)

    async def keys(self, pattern: Any = "*") -> list[Any]:
        self.calls.append(("keys", pattern))
        self._maybe_fail("keys")
        prefix = pattern.rstrip("*")
        return [k for k in self.data if k.startswith(prefix)]

    async def scan(self, cursor: int = 0, match: Any = None, count: int | None = None) -> tuple[int, list[Any]]:
        self.calls.append(("scan", cursor, match, count))
        self._maybe_fail("scan")
        prefix = (match or "*").rstrip("*")
        return 0, [k for k in self.data if k.startswith(prefix)]

    async def ping(self) -> bool:
        self.calls.append(("ping",))
        self._maybe_fail("ping")
        return True

    async def execute_command(self, *args: Any, **options: Any) -> Any:
        self.calls.append(("execute_command", *args))
        self._maybe_fail(str(args[0]).lower())
        return b"OK"

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def server() -> fakeredis.FakeServer:
    return fakeredis.FakeServer()


@pytest.fixture
def redis_client(server: fakeredis.FakeServer) -> fakeredis.FakeAsyncRedis:
    return fakeredis.FakeAsyncRedis(server=server)


@pytest.fixture
def store(redis_client: fakeredis.FakeAsyncRedis) -> RedisStore:
    return RedisStore.from_client(redis_client)


@pytest.fixture
def stub() -> StubRedis:
    return StubRedis()


@pytest.fixture
def connection_error() -> Exception:
    return RedisConnectionError("connection refused")
