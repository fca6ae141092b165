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
"""Pattern-based bulk deletion.

Redis offers no namespace delete, only key enumeration by glob pattern and
per-key ``DEL``. Bulk deletion enumerates the matching keys, then issues the
``DEL`` commands concurrently, a bounded number at a time, and joins them:
it completes exactly once, with success or with the first failure.
"""

from __future__ import annotations

import logging
from typing import Any

from cacheman.store.concurrency import gather_bounded
from cacheman.store.errors import BACKEND_ERRORS, backend_failure
from cacheman.store.types import DeleteStrategy

_logger = logging.getLogger(__name__)

SCAN_BATCH = 100


async def delete_matching(
    client: Any,
    pattern: str,
    strategy: DeleteStrategy | str = DeleteStrategy.KEYS,
) -> None:
    """Delete every Redis key matching *pattern*.

    With :attr:`DeleteStrategy.KEYS` the matches are enumerated by a single
    ``KEYS`` call, which loads the whole matching set into memory;
    :attr:`DeleteStrategy.SCAN` walks ``SCAN`` pages instead.

    An empty match set is not an error. If any ``DEL`` fails, its error is
    raised as :class:`~cacheman.kernel.exceptions.BackendException` and the
    outcomes of the other in-flight deletes are discarded.
    """
    if DeleteStrategy(strategy) is DeleteStrategy.SCAN:
        keys = await _scan_keys(client, pattern)
    else:
        keys = await _keys(client, pattern)

    if not keys:
        return

    _logger.debug("Deleting %d keys matching '%s'", len(keys), pattern)
    await gather_bounded(_delete_one(client, key) for key in keys)


async def _keys(client: Any, pattern: str) -> list[Any]:
    try:
        return list(await client.keys(pattern))
    except BACKEND_ERRORS as exc:
        raise backend_failure("KEYS", exc, pattern=pattern) from exc


async def _scan_keys(client: Any, pattern: str) -> list[Any]:
    # SCAN may report a key more than once within a pass.
    found: dict[Any, None] = {}
    cursor = 0
    while True:
        try:
            cursor, page = await client.scan(cursor=cursor, match=pattern, count=SCAN_BATCH)
        except BACKEND_ERRORS as exc:
            raise backend_failure("SCAN", exc, pattern=pattern) from exc
        found.update(dict.fromkeys(page))
        if int(cursor) == 0:
            return list(found)


async def _delete_one(client: Any, key: Any) -> None:
    try:
        await client.delete(key)
    except BACKEND_ERRORS as exc:
        raise backend_failure("DEL", exc, key=key) from exc
