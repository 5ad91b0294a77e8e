"""Which Socket.IO connections belong to which user.

The registry is the relay's only shared mutable state. Socket handlers run on
the ASGI event loop while Django request threads reach it through
``forward_to_user``; the table is therefore guarded by a ``threading.Lock``.
Delivery is at-most-once: nothing is queued for users who are offline.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Awaitable
from collections.abc import Callable
from typing import Any

from asgiref.sync import async_to_sync

logger = logging.getLogger(__name__)

Emitter = Callable[[str, Any, str], Awaitable[None]]


class PresenceRegistry:
    def __init__(self, emitter: Emitter | None = None) -> None:
        self._emitter = emitter
        self._lock = threading.Lock()
        self._by_user: dict[int, set[str]] = {}
        self._by_connection: dict[str, int] = {}

    def register(self, user_id: int, connection: str) -> None:
        user_id = int(user_id)
        with self._lock:
            previous = self._by_connection.get(connection)
            if previous is not None and previous != user_id:
                self._discard(previous, connection)
            self._by_connection[connection] = user_id
            self._by_user.setdefault(user_id, set()).add(connection)
        logger.debug("Registered connection %s for user %s", connection, user_id)

    def unregister(self, connection: str) -> int | None:
        with self._lock:
            user_id = self._by_connection.pop(connection, None)
            if user_id is not None:
                self._discard(user_id, connection)
        if user_id is not None:
            logger.debug("Unregistered connection %s for user %s", connection, user_id)
        return user_id

    def _discard(self, user_id: int, connection: str) -> None:
        connections = self._by_user.get(user_id)
        if connections is None:
            return
        connections.discard(connection)
        if not connections:
            del self._by_user[user_id]

    def connections_for(self, user_id: int) -> frozenset[str]:
        with self._lock:
            return frozenset(self._by_user.get(int(user_id), ()))

    def is_online(self, user_id: int) -> bool:
        return bool(self.connections_for(user_id))

    def user_for(self, connection: str) -> int | None:
        with self._lock:
            return self._by_connection.get(connection)

    def online_users(self) -> frozenset[int]:
        with self._lock:
            return frozenset(self._by_user)

    async def forward(self, user_id: int, event: str, payload: Any) -> int:
        """Emit ``event`` to every live connection of ``user_id``."""

        connections = self.connections_for(user_id)
        if not connections:
            logger.debug("User %s offline; dropping %s", user_id, event)
            return 0
        emit = self._emitter or _socketio_emitter
        delivered = 0
        for connection in connections:
            try:
                await emit(event, payload, connection)
            except Exception:
                logger.warning(
                    "Failed to emit %s to connection %s",
                    event,
                    connection,
                    exc_info=True,
                )
                continue
            delivered += 1
        return delivered


async def _socketio_emitter(event: str, payload: Any, connection: str) -> None:
    from alumni_connect.realtime.socketio import sio

    await sio.emit(event, payload, to=connection)


_registry = PresenceRegistry()


def get_presence_registry() -> PresenceRegistry:
    return _registry


def set_presence_registry(registry: PresenceRegistry) -> PresenceRegistry:
    """Swap the process-wide registry; returns the previous one."""

    global _registry  # noqa: PLW0603
    previous = _registry
    _registry = registry
    return previous


def forward_to_user(user_id: int, event: str, payload: Any) -> int:
    """Sync bridge for Django code paths (views, signals, on_commit hooks)."""

    try:
        return async_to_sync(get_presence_registry().forward)(user_id, event, payload)
    except Exception:
        logger.warning("Relay of %s to user %s failed", event, user_id, exc_info=True)
        return 0
