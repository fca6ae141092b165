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
"""Unified exception hierarchy for cacheman.

All store exceptions inherit from CachemanException, so callers can catch the
base class to handle every adapter failure, or a subclass for targeted
handling.

Categories:
- BusinessException: values that cannot cross the serialization boundary
- InfrastructureException: connection handshake and Redis wire failures
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class CachemanException(Exception):
    """Base exception for all cacheman errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CACHE_BACKEND").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(CachemanException):
    """Caller-supplied data violates the store contract."""


class SerializationException(BusinessException):
    """A value could not cross the JSON serialization boundary."""


class EncodeException(SerializationException):
    """A value cannot be serialized; raised before any backend call is made."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="CACHE_ENCODE", context=context)


class DecodeException(SerializationException):
    """A stored payload is present but is not valid serialized data.

    Distinct from a cache miss: a corrupt entry is never reported as ``None``.
    """

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="CACHE_DECODE", context=context)


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(CachemanException):
    """Infrastructure failures: connection, network, backend."""


class CacheConnectionException(InfrastructureException):
    """Authentication or database selection failed during the handshake.

    Fatal to the store: it signals a configuration or security error rather
    than a transient condition.
    """

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="CACHE_CONNECTION", context=context)


class BackendException(InfrastructureException):
    """A Redis command failed during get/set/delete/keys/scan."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="CACHE_BACKEND", context=context)
