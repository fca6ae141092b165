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
"""Time-to-live policy."""

from __future__ import annotations

import math
from datetime import timedelta

NO_EXPIRY = -1
"""Sentinel TTL: store the entry without an expiration."""

DEFAULT_TTL = 60


def resolve_ttl(ttl: int | float | timedelta | None, default: int = DEFAULT_TTL) -> int | None:
    """Translate a caller TTL into the ``EX`` seconds sent to Redis.

    Returns ``None`` for :data:`NO_EXPIRY`. A missing or zero TTL falls back
    to *default*, which may itself be :data:`NO_EXPIRY`. Fractional seconds
    round up to whole seconds since ``EX`` takes an integer.
    """
    if isinstance(ttl, timedelta):
        seconds: float | None = ttl.total_seconds()
    else:
        if ttl == NO_EXPIRY:
            return None
        seconds = ttl

    if not seconds:
        return None if default == NO_EXPIRY else default
    if seconds < 0:
        raise ValueError(f"TTL must be positive or {NO_EXPIRY} for no expiry, got {ttl!r}")
    return max(1, math.ceil(seconds))
