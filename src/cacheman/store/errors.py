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
"""Translation of Redis client failures into store exceptions."""

from __future__ import annotations

from typing import Any

from redis.exceptions import AuthenticationError, RedisError

from cacheman.kernel.exceptions import BackendException, CacheConnectionException, InfrastructureException

BACKEND_ERRORS: tuple[type[Exception], ...] = (RedisError, OSError)
"""Exceptions a Redis client raises for wire-level failures."""

_CREDENTIAL_ERRORS: tuple[type[Exception], ...] = (AuthenticationError,)


def backend_failure(command: str, exc: Exception, **context: Any) -> InfrastructureException:
    """Wrap a client failure; callers raise it ``from exc``.

    Rejected credentials surface as :class:`CacheConnectionException` even
    when a pooled connection first authenticates inside a cache command.
    """
    context = {"command": command, **context}
    if isinstance(exc, _CREDENTIAL_ERRORS):
        return CacheConnectionException(f"Redis authentication failed during {command}: {exc}", context=context)
    return BackendException(f"Redis {command} failed: {exc}", context=context)
