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
"""Cursor-based scanning of a store namespace."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from cacheman.store.concurrency import gather_bounded
from cacheman.store.errors import BACKEND_ERRORS, backend_failure
from cacheman.store.keys import KeyNamespace
from cacheman.store.types import ScanEntry, ScanResult

Fetch = Callable[[str], Awaitable[Any]]


async def scan_page(
    client: Any,
    namespace: KeyNamespace,
    fetch: Fetch,
    cursor: int = 0,
    count: int = 10,
) -> ScanResult:
    """Fetch one page of entries starting at *cursor*.

    Issues a single ``SCAN cursor MATCH prefix* COUNT count`` and resolves
    each returned key through *fetch* (the store's ``get``) concurrently,
    at most :data:`~cacheman.store.concurrency.MAX_IN_FLIGHT` at a time.
    ``count`` is only a hint: Redis may return fewer or more keys. If any
    fetch fails its error propagates and the page is abandoned.

    Entry order is unspecified. An entry that expires between ``SCAN`` and
    ``GET`` is reported with ``data=None``.
    """
    match = namespace.pattern()
    try:
        next_cursor, keys = await client.scan(cursor=cursor, match=match, count=count)
    except BACKEND_ERRORS as exc:
        raise backend_failure("SCAN", exc, cursor=cursor, pattern=match) from exc

    logical_keys = [namespace.logical(key) for key in keys]
    values = await gather_bounded(fetch(key) for key in logical_keys)
    entries = [ScanEntry(key=key, data=data) for key, data in zip(logical_keys, values)]
    return ScanResult(cursor=int(next_cursor), entries=entries)


async def iter_entries(
    client: Any,
    namespace: KeyNamespace,
    fetch: Fetch,
    count: int = 10,
) -> AsyncIterator[ScanEntry]:
    """Yield every entry of the namespace, following cursors until 0.

    Keys modified during the walk may be yielded more than once.
    """
    cursor = 0
    while True:
        page = await scan_page(client, namespace, fetch, cursor=cursor, count=count)
        for entry in page.entries:
            yield entry
        if page.done:
            return
        cursor = page.cursor
