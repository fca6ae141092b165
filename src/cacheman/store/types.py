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
"""Value types shared by the store components."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import StrEnum
from typing import Any

from redis.asyncio.connection import parse_url


class DeleteStrategy(StrEnum):
    """How bulk deletion enumerates the keys matching a pattern."""

    KEYS = "keys"
    SCAN = "scan"


@dataclass
class StoreOptions:
    """Connection options for a store.

    ``client`` holds an already-open client the store borrows; when it is
    set, ``host``, ``port`` and ``extra`` are ignored. ``extra`` carries any
    further keyword options for the Redis connection pool. ``prefix`` is
    never forwarded to the client.
    """

    host: str | None = None
    port: int | None = None
    username: str | None = None
    password: str | None = None
    database: int | None = None
    prefix: str | None = None
    client: Any = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_url(cls, url: str) -> StoreOptions:
        """Parse a ``redis://``, ``rediss://`` or ``unix://`` URI.

        The path segment selects the database (``redis://host:6379/5``) and
        a ``prefix`` query argument sets the namespace. Other query arguments
        are passed through to the connection pool.
        """
        kwargs: dict[str, Any] = dict(parse_url(url))
        return cls(
            host=kwargs.pop("host", None),
            port=kwargs.pop("port", None),
            username=kwargs.pop("username", None),
            password=kwargs.pop("password", None),
            database=kwargs.pop("db", None),
            prefix=kwargs.pop("prefix", None),
            extra=kwargs,
        )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> StoreOptions:
        """Build options from a plain mapping; unknown keys land in ``extra``."""
        known = {f.name for f in fields(cls)} - {"extra"}
        values = dict(options)
        if "db" in values and "database" not in values:
            values["database"] = values.pop("db")
        kwargs = {name: values.pop(name) for name in list(values) if name in known}
        extra = dict(values.pop("extra", None) or {})
        extra.update(values)
        return cls(**kwargs, extra=extra)


@dataclass(frozen=True)
class ScanEntry:
    """One decoded entry of a scan page, keyed by its logical key."""

    key: str
    data: Any


@dataclass(frozen=True)
class ScanResult:
    """One page of a cursor-based scan.

    A ``cursor`` of 0 means the pass has wrapped around; it does not imply
    the namespace is empty.
    """

    cursor: int
    entries: list[ScanEntry] = field(default_factory=list)

    @property
    def done(self) -> bool:
        return self.cursor == 0
