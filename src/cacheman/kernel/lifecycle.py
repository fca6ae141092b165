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
"""Unified lifecycle protocol for stores that own connections."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Lifecycle(Protocol):
    """Standard lifecycle for store adapters.

    Stores that own or handshake a connection implement this protocol.
    Callers invoke start() once before first use and stop() on shutdown.
    """

    async def start(self) -> None:
        """Perform the connection handshake and validate connectivity.

        A failure here is fatal and must propagate to the caller.
        """
        ...

    async def stop(self) -> None:
        """Release resources the store owns.

        Connections the store merely borrows are left open.
        """
        ...
