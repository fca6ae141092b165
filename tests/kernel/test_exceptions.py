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
"""Tests for the cacheman exception hierarchy."""

from cacheman.kernel.exceptions import (
    BackendException,
    BusinessException,
    CacheConnectionException,
    CachemanException,
    DecodeException,
    EncodeException,
    InfrastructureException,
    SerializationException,
)


class TestCachemanException:
    def test_basic_creation(self):
        exc = CachemanException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_error_code(self):
        exc = CachemanException("bad value", code="CACHE_ENCODE")
        assert exc.code == "CACHE_ENCODE"

    def test_with_context(self):
        exc = CachemanException("failed", code="CACHE_BACKEND", context={"key": "cacheman:a"})
        assert exc.context["key"] == "cacheman:a"

    def test_context_defaults_to_empty_dict(self):
        exc = CachemanException("test")
        assert exc.context == {}
        # Ensure it's not shared between instances
        exc.context["key"] = "value"
        exc2 = CachemanException("test2")
        assert exc2.context == {}


class TestExceptionHierarchy:
    def test_serialization_is_business(self):
        assert issubclass(SerializationException, BusinessException)

    def test_codec_errors_are_serialization(self):
        assert issubclass(EncodeException, SerializationException)
        assert issubclass(DecodeException, SerializationException)

    def test_connection_and_backend_are_infrastructure(self):
        assert issubclass(CacheConnectionException, InfrastructureException)
        assert issubclass(BackendException, InfrastructureException)

    def test_fixed_codes(self):
        assert EncodeException("x").code == "CACHE_ENCODE"
        assert DecodeException("x").code == "CACHE_DECODE"
        assert CacheConnectionException("x").code == "CACHE_CONNECTION"
        assert BackendException("x").code == "CACHE_BACKEND"

    def test_catch_all_cacheman_exceptions(self):
        """Verify all exceptions can be caught with a single handler."""
        exceptions = [
            EncodeException("bad value"),
            DecodeException("corrupt", context={"key": "k"}),
            CacheConnectionException("auth failed"),
            BackendException("timeout"),
        ]
        for exc in exceptions:
            try:
                raise exc
            except CachemanException as caught:
                assert caught is exc
