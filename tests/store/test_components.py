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
"""Tests for key namespacing, the JSON codec and the TTL policy."""

from __future__ import annotations

import logging
import math
from datetime import timedelta

import pytest

from cacheman.kernel.exceptions import DecodeException, EncodeException, SerializationException
from cacheman.store import codec
from cacheman.store.keys import DEFAULT_PREFIX, KeyNamespace
from cacheman.store.ttl import DEFAULT_TTL, NO_EXPIRY, resolve_ttl


class TestKeyNamespace:
    def test_default_prefix(self):
        assert KeyNamespace().prefix == DEFAULT_PREFIX == "cacheman:"

    def test_empty_prefix_falls_back_to_default(self):
        assert KeyNamespace("").prefix == "cacheman:"

    def test_backing_key_is_prefix_plus_key(self):
        assert KeyNamespace("app:").backing("user:1") == "app:user:1"

    def test_glob_characters_are_not_escaped(self):
        assert KeyNamespace("app:").backing("foo*") == "app:foo*"

    def test_logical_strips_prefix(self):
        ns = KeyNamespace("app:")
        assert ns.logical("app:user:1") == "user:1"
        assert ns.logical(b"app:user:1") == "user:1"

    def test_logical_only_strips_leading_prefix(self):
        assert KeyNamespace("a:").logical("a:b:a:c") == "b:a:c"

    def test_pattern(self):
        ns = KeyNamespace("app:")
        assert ns.pattern() == "app:*"
        assert ns.pattern("user:?") == "app:user:?"

    def test_glob_prefix_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="cacheman.store.keys"):
            KeyNamespace("app[1]:")
        assert "glob metacharacters" in caplog.text


class TestCodec:
    def test_encode_is_compact_json(self):
        assert codec.encode({"a": [1, 2]}) == '{"a":[1,2]}'

    def test_decode_accepts_bytes(self):
        assert codec.decode(b'{"a":1}') == {"a": 1}

    def test_tuples_come_back_as_lists(self):
        assert codec.decode(codec.encode((1, 2))) == [1, 2]

    def test_encode_rejects_unserializable(self):
        with pytest.raises(EncodeException) as exc_info:
            codec.encode(object(), key="k")
        assert exc_info.value.code == "CACHE_ENCODE"
        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_encode_rejects_circular_structures(self):
        data: dict = {}
        data["self"] = data
        with pytest.raises(EncodeException):
            codec.encode(data)

    def test_decode_rejects_corrupt_payload(self):
        with pytest.raises(DecodeException) as exc_info:
            codec.decode("{oops", key="k")
        assert exc_info.value.code == "CACHE_DECODE"
        assert exc_info.value.context == {"key": "k"}

    def test_decode_rejects_invalid_utf8(self):
        with pytest.raises(DecodeException):
            codec.decode(b"\xff\xfe")

    def test_both_are_serialization_errors(self):
        assert issubclass(EncodeException, SerializationException)
        assert issubclass(DecodeException, SerializationException)


class TestResolveTtl:
    def test_sentinel_means_no_expiry(self):
        assert resolve_ttl(NO_EXPIRY) is None

    @pytest.mark.parametrize("ttl", [None, 0, 0.0, timedelta(0)])
    def test_missing_ttl_uses_default(self, ttl):
        assert resolve_ttl(ttl) == DEFAULT_TTL == 60

    def test_custom_default(self):
        assert resolve_ttl(None, default=300) == 300

    def test_default_may_be_no_expiry(self):
        assert resolve_ttl(None, default=NO_EXPIRY) is None

    def test_positive_seconds(self):
        assert resolve_ttl(10) == 10

    def test_fractions_round_up(self):
        assert resolve_ttl(1.2) == 2
        assert resolve_ttl(0.01) == 1

    def test_timedelta(self):
        assert resolve_ttl(timedelta(minutes=5)) == 300

    @pytest.mark.parametrize("ttl", [-2, -0.5, timedelta(seconds=-10)])
    def test_other_negative_values_rejected(self, ttl):
        with pytest.raises(ValueError):
            resolve_ttl(ttl)

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            resolve_ttl(math.nan)
