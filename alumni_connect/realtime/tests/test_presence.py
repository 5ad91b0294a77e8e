from __future__ import annotations

import threading

from asgiref.sync import async_to_sync

from alumni_connect.realtime.presence import PresenceRegistry
from alumni_connect.realtime.presence import forward_to_user


def test_register_and_unregister(emitter):
    registry = PresenceRegistry(emitter=emitter)
    registry.register(1, "a")
    registry.register(1, "b")
    registry.register(2, "c")

    assert registry.connections_for(1) == frozenset({"a", "b"})
    assert registry.is_online(2)

    assert registry.unregister("c") == 2
    assert not registry.is_online(2)
    assert registry.online_users() == frozenset({1})


def test_unregister_unknown_connection_is_noop(emitter):
    registry = PresenceRegistry(emitter=emitter)
    assert registry.unregister("missing") is None


def test_reregister_moves_connection_to_new_user(emitter):
    registry = PresenceRegistry(emitter=emitter)
    registry.register(1, "a")
    registry.register(2, "a")
    assert registry.connections_for(1) == frozenset()
    assert registry.user_for("a") == 2


def test_forward_reaches_every_connection(emitter):
    registry = PresenceRegistry(emitter=emitter)
    registry.register(7, "tab-1")
    registry.register(7, "tab-2")

    delivered = async_to_sync(registry.forward)(7, "message received", {"id": 1})

    assert delivered == 2
    assert sorted(c for _, _, c in emitter.sent) == ["tab-1", "tab-2"]


def test_forward_to_offline_user_emits_nothing(emitter):
    registry = PresenceRegistry(emitter=emitter)
    assert async_to_sync(registry.forward)(9, "message received", {}) == 0
    assert emitter.sent == []


def test_failing_connection_does_not_block_others():
    seen = []

    async def flaky(event, payload, connection):
        if connection == "bad":
            msg = "socket gone"
            raise RuntimeError(msg)
        seen.append(connection)

    registry = PresenceRegistry(emitter=flaky)
    registry.register(3, "bad")
    registry.register(3, "good")

    assert async_to_sync(registry.forward)(3, "x", {}) == 1
    assert seen == ["good"]


def test_forward_to_user_uses_installed_registry(presence, emitter):
    presence.register(4, "sid")
    assert forward_to_user(4, "connected", {"ok": True}) == 1
    assert emitter.sent == [("connected", {"ok": True}, "sid")]


def test_concurrent_registration_is_consistent(emitter):
    registry = PresenceRegistry(emitter=emitter)

    def worker(offset: int) -> None:
        for i in range(200):
            sid = f"{offset}-{i}"
            registry.register(offset, sid)
            registry.unregister(sid)
        registry.register(offset, f"{offset}-final")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert registry.online_users() == frozenset(range(8))
    for n in range(8):
        assert registry.connections_for(n) == frozenset({f"{n}-final"})
