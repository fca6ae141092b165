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
"""Bounded fan-out of per-key Redis commands."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable
from typing import TypeVar

T = TypeVar("T")

MAX_IN_FLIGHT = 32
"""Commands one bulk operation keeps in flight; stays below the client's pool size."""


async def gather_bounded(aws: Iterable[Awaitable[T]], limit: int = MAX_IN_FLIGHT) -> list[T]:
    """Await every awaitable concurrently, at most *limit* at a time.

    Results keep input order. The first failure propagates; the other
    awaitables still run to completion and their outcomes are discarded.
    """
    semaphore = asyncio.Semaphore(limit)

    async def _run(aw: Awaitable[T]) -> T:
        async with semaphore:
            return await aw

    return list(await asyncio.gather(*(_run(aw) for aw in aws)))
