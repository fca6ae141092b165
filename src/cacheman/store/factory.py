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
"""Build a store from configuration."""

from __future__ import annotations

from typing import Any

from cacheman.config.properties.store import StoreProperties
from cacheman.core.config import Config
from cacheman.store.adapters.redis import RedisStore
from cacheman.store.types import StoreOptions


def create_store(config: Config, client: Any = None) -> RedisStore:
    """Create a :class:`RedisStore` from the ``cacheman.store`` section.

    When *client* is given it is borrowed and only the namespace, TTL and
    delete-strategy settings apply.

    The store is returned unstarted: await :meth:`RedisStore.start` (or use it
    as an async context manager) to run the fatal connection handshake before
    first use. Rejected credentials still raise
    :class:`~cacheman.kernel.exceptions.CacheConnectionException` from a later
    command if the handshake is skipped.
    """
    props = config.bind(StoreProperties)
    settings: dict[str, Any] = {
        "prefix": props.prefix,
        "default_ttl": props.ttl,
        "delete_strategy": props.delete_strategy,
    }

    if client is not None:
        return RedisStore.from_client(client, **settings)

    if props.url:
        options = StoreOptions.from_url(props.url)
        # An explicit prefix in the URL wins over the configured one.
        settings["prefix"] = options.prefix or props.prefix
    else:
        options = StoreOptions(host=props.host, port=props.port)

    for name in ("username", "password", "database"):
        value = getattr(props, name)
        if value is not None:
            setattr(options, name, value)

    return RedisStore.from_options(options, **settings)
