"""Socket.IO relay for chat.

Frontend convention:
- Socket.IO path: /socket.io/ (``SOCKETIO_PATH``)
- Auth: JWT access token in ``query.token`` or ``auth.token``

Client events: ``setup``, ``join chat``, ``new message``.
Server events: ``connected``, ``message received``.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import parse_qs

import socketio
from channels.db import database_sync_to_async
from django.conf import settings
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import TokenError

from .presence import get_presence_registry

logger = logging.getLogger(__name__)


sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins=getattr(settings, "SOCKETIO_CORS_ALLOWED_ORIGINS", "*"),
    logger=False,
    engineio_logger=False,
)


def room_for_user(user_id: int) -> str:
    return f"user_{int(user_id)}"


def room_for_chat(name: str) -> str:
    return f"chat_{name.strip()}"


@database_sync_to_async
def _get_user_id_from_access_token(token: str) -> int:
    jwt_auth = JWTAuthentication()
    validated = jwt_auth.get_validated_token(token)
    user = jwt_auth.get_user(validated)
    return int(user.id)


def _extract_token(environ: dict[str, Any], auth: Any | None) -> str | None:
    """Extract JWT token from Socket.IO environ/auth.

    Handles python-socketio environ shapes across ASGI/WSGI servers.
    """

    scope: Any = environ
    if isinstance(environ, dict) and "asgi.scope" in environ:
        inner = environ.get("asgi.scope")
        if isinstance(inner, dict):
            scope = inner

    query_string: str | bytes = ""
    if isinstance(scope, dict) and "query_string" in scope:
        query_string = scope.get("query_string", b"")
    elif isinstance(scope, dict) and "QUERY_STRING" in scope:
        query_string = scope.get("QUERY_STRING", "")

    if isinstance(query_string, (bytes, bytearray)):
        query_string = query_string.decode(errors="ignore")

    token = parse_qs(str(query_string)).get("token", [None])[0]
    if isinstance(token, str) and token:
        return token

    if isinstance(auth, dict):
        auth_token = auth.get("token")
        if isinstance(auth_token, str) and auth_token:
            return auth_token

    return None


def _coerce_user_id(value: Any) -> int | None:
    if isinstance(value, dict):
        value = value.get("id", value.get("_id"))
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


async def _session_user_id(sid: str) -> int | None:
    session = await sio.get_session(sid)
    return session.get("user_id") if isinstance(session, dict) else None


@sio.event
async def connect(sid: str, environ: dict[str, Any], auth: Any | None = None):
    token = _extract_token(environ, auth)
    if not token:
        msg = "unauthorized"
        raise ConnectionRefusedError(msg)

    try:
        user_id = await _get_user_id_from_access_token(token)
    except TokenError as exc:
        message = str(exc)
        if "expired" in message.lower():
            msg = "jwt_expired"
            raise ConnectionRefusedError(msg) from exc
        msg = "unauthorized"
        raise ConnectionRefusedError(msg) from exc
    except AuthenticationFailed as exc:  # user not found / inactive, etc.
        msg = "unauthorized"
        raise ConnectionRefusedError(msg) from exc
    except Exception as exc:
        logger.exception("Socket.IO connect error")
        msg = "server_error"
        raise ConnectionRefusedError(msg) from exc

    await sio.save_session(sid, {"user_id": user_id})
    logger.debug("Socket %s authenticated as user %s", sid, user_id)


@sio.event
async def setup(sid: str, data: Any = None):
    user_id = await _session_user_id(sid)
    if user_id is None:
        return
    claimed = _coerce_user_id(data)
    if claimed is not None and claimed != user_id:
        logger.warning(
            "Refusing setup on %s: claimed user %s but token is for %s",
            sid,
            claimed,
            user_id,
        )
        return
    try:
        get_presence_registry().register(user_id, sid)
        await sio.enter_room(sid, room_for_user(user_id))
        await sio.emit("connected", to=sid)
    except Exception:
        logger.exception("Socket.IO setup failed for %s", sid)


@sio.on("join chat")
async def join_chat(sid: str, data: Any = None):
    room = data.get("room") if isinstance(data, dict) else data
    if room is None or not str(room).strip():
        return
    try:
        await sio.enter_room(sid, room_for_chat(str(room)))
    except Exception:
        logger.exception("Socket.IO join chat failed for %s", sid)


@sio.on("new message")
async def new_message(sid: str, data: Any = None):
    registry = get_presence_registry()
    if registry.user_for(sid) is None:
        return
    if not isinstance(data, dict):
        return
    recipient_id = _coerce_user_id(data.get("recipient"))
    if recipient_id is None:
        return
    try:
        await registry.forward(recipient_id, "message received", data)
    except Exception:
        logger.exception("Socket.IO relay failed for %s", sid)


@sio.event
async def disconnect(sid: str, *args: Any):
    user_id = get_presence_registry().unregister(sid)
    if user_id is not None:
        logger.debug("User %s disconnected from %s", user_id, sid)
