from __future__ import annotations

import pytest
from rest_framework.test import APIClient

from alumni_connect.realtime.presence import PresenceRegistry
from alumni_connect.realtime.presence import set_presence_registry
from alumni_connect.users.models import User
from tests.factories import create_user


class RecordingEmitter:
    """Collects (event, payload, connection) triples instead of emitting."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, object, str]] = []

    async def __call__(self, event: str, payload: object, connection: str) -> None:
        self.sent.append((event, payload, connection))

    def events_for(self, connection: str) -> list[tuple[str, object]]:
        return [(e, p) for e, p, c in self.sent if c == connection]


@pytest.fixture(autouse=True)
def _media_storage(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / "media"


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture
def presence(emitter):
    registry = PresenceRegistry(emitter=emitter)
    previous = set_presence_registry(registry)
    yield registry
    set_presence_registry(previous)


@pytest.fixture
def user(db) -> User:
    return create_user("member")


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def auth_client(user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=user)
    return client
