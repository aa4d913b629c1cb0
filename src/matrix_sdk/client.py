"""High-level Matrix client composing HTTP, API groups, room tracking and sync."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from matrix_sdk.api.auth import AuthAPI
from matrix_sdk.crypto import OneTimeKeyCounts
from matrix_sdk.errors import (
    MatrixRequestError,
    MatrixUnexpectedResponse,
    MatrixValidationError,
)
from matrix_sdk.http import HTTPClient
from matrix_sdk.listeners import Callback, ListenerKind, ListenerRegistry
from matrix_sdk.models.auth import LoginResponse, RegisterResponse
from matrix_sdk.models.enums import CacheLevel
from matrix_sdk.models.sync import SyncResponse
from matrix_sdk.room import Room
from matrix_sdk.rooms import RoomStore
from matrix_sdk.sync import ExceptionHandler, SyncLoop
from matrix_sdk.user import User
from matrix_sdk.util import check_user_id

log = logging.getLogger(__name__)


def _sync_filter(limit: int) -> str:
    return json.dumps({"room": {"timeline": {"limit": limit}}})


class Client:
    """Top-level SDK client.

    Usage::

        async with Client("https://matrix.org") as client:
            await client.login("alice", "secret")
            client.add_listener(on_message, "m.room.message")
            await client.listen_forever()

    Global listeners receive the event; invite listeners receive
    ``(room_id, invite_state_events)``; leave listeners receive
    ``(room_id, left_room)``. The client is not safe for concurrent syncs.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        *,
        user_id: str | None = None,
        timeout: float = 30.0,
        sync_filter_limit: int = 20,
        cache_level: CacheLevel = CacheLevel.ALL,
        encryption: bool = False,
    ) -> None:
        if not isinstance(cache_level, CacheLevel):
            raise MatrixValidationError(
                "cache_level must be one of CacheLevel.NONE, CacheLevel.SOME, CacheLevel.ALL"
            )
        self.http = HTTPClient(base_url, token, timeout=timeout)
        self.auth = AuthAPI(self.http)
        self.user_id = user_id
        self.device_id: str | None = None
        self.homeserver: str | None = None
        self.cache_level = cache_level
        self.encryption = encryption

        self.users: dict[str, User] = {}
        self.listeners = ListenerRegistry()
        self._rooms = RoomStore(self)
        self.key_counts = OneTimeKeyCounts() if encryption else None

        # Lazily populated API groups
        self._room_api: Any = None
        self._media: Any = None
        self._sync_api: Any = None
        self._syncer: SyncLoop | None = None
        self._sync_filter = _sync_filter(sync_filter_limit)

    # --- API group properties ---

    @property
    def room_api(self) -> Any:
        if self._room_api is None:
            from matrix_sdk.api.rooms import RoomsAPI
            self._room_api = RoomsAPI(self.http)
        return self._room_api

    @property
    def media(self) -> Any:
        if self._media is None:
            from matrix_sdk.api.media import MediaAPI
            self._media = MediaAPI(self.http)
        return self._media

    @property
    def sync_api(self) -> Any:
        if self._sync_api is None:
            from matrix_sdk.api.sync import SyncAPI
            self._sync_api = SyncAPI(self.http)
        return self._sync_api

    @property
    def syncer(self) -> SyncLoop:
        if self._syncer is None:
            self._syncer = SyncLoop(
                self.sync_api,
                self._rooms,
                self.listeners,
                sync_filter=self._sync_filter,
                key_counts=self.key_counts,
            )
        return self._syncer

    @property
    def token(self) -> str | None:
        return self.http.token

    @property
    def sync_token(self) -> str | None:
        return self.syncer.next_batch

    @property
    def sync_filter(self) -> str:
        return self._sync_filter

    def set_sync_filter_limit(self, limit: int) -> None:
        self._sync_filter = _sync_filter(limit)
        self.syncer.sync_filter = self._sync_filter

    # --- Rooms ---

    @property
    def rooms(self) -> Mapping[str, Room]:
        """Read-only view of the joined rooms, keyed by room ID."""
        return self._rooms.view

    def get_rooms(self) -> dict[str, Room]:
        return dict(self._rooms.view)

    @property
    def room_store(self) -> RoomStore:
        return self._rooms

    # --- Authentication ---

    async def login(
        self,
        username: str,
        password: str,
        *,
        sync: bool = True,
        limit: int = 10,
        device_id: str | None = None,
    ) -> str:
        """Password login. Returns the access token."""
        response = await self.auth.login(
            "m.login.password",
            identifier={"type": "m.id.user", "user": username},
            password=password,
            device_id=device_id,
        )
        return await self._finalize_login(response, sync, limit)

    async def jwt_login(
        self, token: str, *, refresh_token: bool = False, sync: bool = True, limit: int = 10
    ) -> str:
        response = await self.auth.login(
            "org.matrix.login.jwt", token=token, refresh_token=refresh_token
        )
        return await self._finalize_login(response, sync, limit)

    async def _finalize_login(self, response: LoginResponse, sync: bool, limit: int) -> str:
        self.user_id = response.user_id
        self.homeserver = response.home_server
        self.device_id = response.device_id
        self.http.token = response.access_token
        log.info("Logged in as %s", self.user_id)
        if sync:
            self.set_sync_filter_limit(limit)
            await self.sync()
        return response.access_token

    async def register_as_guest(self) -> str | None:
        """Register a guest account; the homeserver must allow guests."""
        response = await self.auth.register(kind="guest")
        return await self._post_registration(response)

    async def register_with_password(self, username: str, password: str) -> str | None:
        response = await self.auth.register(
            {"type": "m.login.dummy"}, "user", username=username, password=password
        )
        return await self._post_registration(response)

    async def _post_registration(self, response: RegisterResponse) -> str | None:
        self.user_id = response.user_id
        self.homeserver = response.home_server
        self.device_id = response.device_id
        self.http.token = response.access_token
        await self.sync()
        return response.access_token

    async def whoami(self) -> str:
        response = await self.auth.whoami()
        self.user_id = response.user_id
        return response.user_id

    async def logout(self) -> None:
        self.stop_listening()
        await self.auth.logout()
        self.http.token = None

    # --- Room operations ---

    async def create_room(
        self,
        alias: str | None = None,
        is_public: bool = False,
        invitees: Iterable[str] = (),
        is_space: bool = False,
    ) -> Room:
        """Create a room. For spaces, ``alias`` is used as the space name."""
        name = None
        additional = None
        if is_space:
            additional = {"creation_content": {"type": "m.space"}}
            name, alias = alias, None
        response = await self.room_api.create_room(
            alias, name, is_public, list(invitees), additional
        )
        return await self._rooms.ensure_room(response.room_id)

    async def join_room(self, room_id_or_alias: str) -> Room:
        response = await self.room_api.join_room(room_id_or_alias)
        return await self._rooms.ensure_room(response.room_id)

    async def invite_user(self, room_id: str, user_id: str) -> None:
        check_user_id(user_id)
        await self.room_api.invite_user(room_id, user_id)

    async def remove_room_alias(self, room_alias: str) -> bool:
        """Remove an alias mapping. Returns False if the homeserver refused."""
        try:
            await self.room_api.remove_room_alias(room_alias)
        except MatrixRequestError:
            return False
        return True

    async def upload(
        self, content: bytes, content_type: str, filename: str | None = None
    ) -> str:
        """Upload media and return its ``mxc://`` URI."""
        try:
            response = await self.media.upload(content, content_type, filename)
        except MatrixRequestError as exc:
            raise MatrixRequestError(
                exc.status, f"Upload failed: {exc}", response=exc.response
            ) from exc
        if not response.content_uri:
            raise MatrixUnexpectedResponse(
                "The upload was successful, but content_uri wasn't found."
            )
        return response.content_uri

    # --- Listeners ---

    def add_listener(self, callback: Callback, event_type: str | None = None) -> str:
        """Register a callback for timeline events, optionally for one event type."""
        return self.listeners.register(ListenerKind.EVENT, callback, event_type)

    def remove_listener(self, uid: str) -> None:
        self.listeners.unregister(ListenerKind.EVENT, uid)

    def add_presence_listener(self, callback: Callback) -> str:
        return self.listeners.register(ListenerKind.PRESENCE, callback)

    def remove_presence_listener(self, uid: str) -> None:
        self.listeners.unregister(ListenerKind.PRESENCE, uid)

    def add_invite_listener(self, callback: Callback) -> str:
        return self.listeners.register(ListenerKind.INVITE, callback)

    def remove_invite_listener(self, uid: str) -> None:
        self.listeners.unregister(ListenerKind.INVITE, uid)

    def add_leave_listener(self, callback: Callback) -> str:
        return self.listeners.register(ListenerKind.LEAVE, callback)

    def remove_leave_listener(self, uid: str) -> None:
        self.listeners.unregister(ListenerKind.LEAVE, uid)

    def add_ephemeral_listener(self, callback: Callback, event_type: str | None = None) -> str:
        return self.listeners.register(ListenerKind.EPHEMERAL, callback, event_type)

    def remove_ephemeral_listener(self, uid: str) -> None:
        self.listeners.unregister(ListenerKind.EPHEMERAL, uid)

    # --- Sync ---

    async def sync(self, timeout_ms: int = 30000) -> SyncResponse:
        return await self.syncer.perform_sync(timeout_ms)

    async def listen_forever(
        self,
        timeout_ms: int = 30000,
        exception_handler: ExceptionHandler | None = None,
        bad_sync_timeout: float = 5,
    ) -> None:
        """Block in the sync loop until :meth:`stop_listening` is called.

        Run it as a task to keep using the client meanwhile::

            task = asyncio.create_task(client.listen_forever())
        """
        await self.syncer.listen_forever(timeout_ms, exception_handler, bad_sync_timeout)

    def stop_listening(self) -> None:
        """Ask the sync loop to exit after the in-flight request completes."""
        if self._syncer is not None:
            self._syncer.stop()

    # --- Context manager ---

    async def close(self) -> None:
        self.stop_listening()
        await self.http.close()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()
