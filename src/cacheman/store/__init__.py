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
"""cacheman store — Redis cache-store adapter and its components."""

from cacheman.store.adapters.redis import RedisStore
from cacheman.store.factory import create_store
from cacheman.store.keys import DEFAULT_PREFIX, KeyNamespace
from cacheman.store.ports.outbound import CacheStore, RedisClient, is_redis_client
from cacheman.store.ttl import DEFAULT_TTL, NO_EXPIRY, resolve_ttl
from cacheman.store.types import DeleteStrategy, ScanEntry, ScanResult, StoreOptions

__all__ = [
    "DEFAULT_PREFIX",
    "DEFAULT_TTL",
    "NO_EXPIRY",
    "CacheStore",
    "DeleteStrategy",
    "KeyNamespace",
    "RedisClient",
    "RedisStore",
    "ScanEntry",
    "ScanResult",
    "StoreOptions",
    "create_store",
    "is_redis_client",
    "resolve_ttl",
]
