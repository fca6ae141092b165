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
"""JSON value codec.

Values cross the Redis boundary as compact JSON text, so anything
``json.dumps`` accepts can be cached. Tuples come back as lists and
non-string dict keys come back as strings.
"""

from __future__ import annotations

import json
from typing import Any

from cacheman.kernel.exceptions import DecodeException, EncodeException


def encode(value: Any, key: str | None = None) -> str:
    """Serialize *value* to JSON text.

    Raises:
        EncodeException: the value is not JSON-serializable (unsupported
            type or circular reference).
    """
    try:
        return json.dumps(value, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        raise EncodeException(f"Cannot serialize value for key '{key}': {exc}", context={"key": key}) from exc


def decode(raw: str | bytes, key: str | None = None) -> Any:
    """Parse a stored JSON payload.

    Raises:
        DecodeException: the payload is present but corrupt.
    """
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodeException(f"Corrupt cached payload for key '{key}': {exc}", context={"key": key}) from exc
