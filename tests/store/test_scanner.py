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
"""Tests for cursor-based namespace scanning."""

from __future__ import annotations

import pytest

from cacheman.store.keys import KeyNamespace
from cacheman.store.scanner import iter_entries, scan_page


class PagedRedis:
    """Serves SCAN pages from a fixed cursor table, with bytes keys."""

    def __init__(self, pages: dict[int, tuple[int, list[bytes]]]) -> None:
        self.pages = pages
        self.requests: list[tuple[int, str, int]] = []

    async def scan(self, cursor: int = 0, match: str | None = None, count: int | None = None):
        self.requests.append((cursor, match, count))
        return self.pages[cursor]


async def fetch_upper(key: str) -> str:
    return key.upper()


class TestScanPage:
    @pytest.mark.asyncio
    async def test_strips_prefix_and_fetches_values(self):
        client = PagedRedis({0: (17, [b"ns:a", b"ns:b"])})
        result = await scan_page(client, KeyNamespace("ns:"), fetch_upper, cursor=0, count=2)
        assert result.cursor == 17
        assert not result.done
        assert sorted((e.key, e.data) for e in result.entries) == [("a", "A"), ("b", "B")]
        assert client.requests == [(0, "ns:*", 2)]

    @pytest.mark.asyncio
    async def test_string_cursor_is_converted(self):
        client = PagedRedis({3: ("0", [])})
        result = await scan_page(client, KeyNamespace("ns:"), fetch_upper, cursor=3)
        assert result.cursor == 0
        assert result.done

    @pytest.mark.asyncio
    async def test_fetch_failure_abandons_page(self):
        client = PagedRedis({0: (0, [b"ns:a", b"ns:b"])})

        async def failing_fetch(key: str) -> str:
            if key == "b":
                raise RuntimeError("lost")
            return key

        with pytest.raises(RuntimeError, match="lost"):
            await scan_page(client, KeyNamespace("ns:"), failing_fetch)


class TestIterEntries:
    @pytest.mark.asyncio
    async def test_follows_cursors_until_zero(self):
        client = PagedRedis(
            {
                0: (5, [b"ns:a"]),
                5: (9, []),
                9: (0, [b"ns:b", b"ns:c"]),
            }
        )
        entries = [entry async for entry in iter_entries(client, KeyNamespace("ns:"), fetch_upper, count=1)]
        assert [e.key for e in entries] == ["a", "b", "c"]
        assert [cursor for cursor, _, _ in client.requests] == [0, 5, 9]
