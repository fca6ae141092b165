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
"""Key namespacing: logical cache keys to prefixed Redis keys and back."""

from __future__ import annotations

import logging

_logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "cacheman:"

_GLOB_CHARS = frozenset("*?[]\\")


class KeyNamespace:
    """Maps logical keys into one store's slice of the Redis key space.

    The backing key is always exactly ``prefix + key``. Glob metacharacters
    in logical keys are not escaped, so ``delete``, ``clear`` and ``scan``
    treat them as Redis patterns (``*``, ``?``, ``[...]``).
    """

    __slots__ = ("_prefix",)

    def __init__(self, prefix: str | None = None) -> None:
        self._prefix = prefix or DEFAULT_PREFIX
        if _GLOB_CHARS.intersection(self._prefix):
            _logger.warning(
                "Key prefix '%s' contains glob metacharacters; pattern operations will match beyond it",
                self._prefix,
            )

    @property
    def prefix(self) -> str:
        return self._prefix

    def backing(self, key: str) -> str:
        """Return the Redis key for a logical key."""
        return f"{self._prefix}{key}"

    def logical(self, backing_key: str | bytes) -> str:
        """Strip the prefix from a Redis key returned by KEYS or SCAN."""
        if isinstance(backing_key, bytes):
            backing_key = backing_key.decode()
        return backing_key.removeprefix(self._prefix)

    def pattern(self, glob: str = "*") -> str:
        """Return a Redis match pattern scoped to this namespace."""
        return f"{self._prefix}{glob}"
