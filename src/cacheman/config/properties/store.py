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
"""Store configuration properties."""

from __future__ import annotations

from dataclasses import dataclass

from cacheman.core.config import config_properties


@config_properties(prefix="cacheman.store")
@dataclass
class StoreProperties:
    """Configuration for the Redis store (cacheman.store.*).

    ``url`` wins over ``host``/``port`` when both are set.
    """

    url: str | None = None
    host: str | None = None
    port: int | None = None
    username: str | None = None
    password: str | None = None
    database: int | None = None
    prefix: str = "cacheman:"
    ttl: int = 60
    delete_strategy: str = "keys"

