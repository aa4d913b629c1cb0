"""Sync loop: cursor, response decomposition, dispatch and backoff."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from matrix_sdk.errors import MatrixRequestError
from matrix_sdk.listeners import ListenerKind, ListenerRegistry
from matrix_sdk.models.sync import JoinedRoom, SyncResponse

if TYPE_CHECKING:
    from matrix_sdk.api.sync import SyncAPI
    from matrix_sdk.crypto import OneTimeKeyCounts
    from matrix_sdk.rooms import RoomStore

log = logging.getLogger(__name__)

ExceptionHandler = Callable[[Exception], Any]

_BAD_SYNC_TIMEOUT_LIMIT = 3600


async def _call_handler(handler: ExceptionHandler, exc: Exception) -> None:
    result = handler(exc)
    if inspect.isawaitable(result):
        await result


class SyncLoop:
    """Drives ``/sync`` for one client.

    Holds the ``next_batch`` cursor and the sync filter. Each successful
    response replaces the cursor *before* dispatch, so a listener that raises
    mid-pass does not roll it back; the next sync starts after that batch.

    At most one sync may be in flight per instance. :meth:`stop` is
    cooperative: it is observed between iterations and never interrupts a
    pending long-poll.
    """

    def __init__(
        self,
        api: SyncAPI,
        rooms: RoomStore,
        listeners: ListenerRegistry,
        *,
        sync_filter: str | None = None,
        key_counts: OneTimeKeyCounts | None = None,
    ) -> None:
        self._api = api
        self._rooms = rooms
        self._listeners = listeners
        self.sync_filter = sync_filter
        self.key_counts = key_counts
        self.bad_sync_timeout_limit = _BAD_SYNC_TIMEOUT_LIMIT
        self._next_batch: str | None = None
        self._should_listen = False

    @property
    def next_batch(self) -> str | None:
        return self._next_batch

    @property
    def is_listening(self) -> bool:
        return self._should_listen

    async def perform_sync(self, timeout_ms: int = 30000) -> SyncResponse:
        """Run one sync request and process its response.

        Request errors propagate without touching the cursor.
        """
        response = await self._api.sync(self._next_batch, timeout_ms, self.sync_filter)
        self._next_batch = response.next_batch
        log.debug("Sync cursor advanced to %s", response.next_batch)
        await self._process(response)
        return response

    async def _process(self, response: SyncResponse) -> None:
        for presence in response.presence.events:
            await self._listeners.dispatch(ListenerKind.PRESENCE, presence)

        for room_id, invite in response.rooms.invite.items():
            await self._listeners.dispatch(
                ListenerKind.INVITE, room_id, invite.invite_state.events
            )

        for room_id, left in response.rooms.leave.items():
            await self._listeners.dispatch(ListenerKind.LEAVE, room_id, left)
            self._rooms.remove_room(room_id)

        if self.key_counts is not None and response.device_one_time_keys_count is not None:
            self.key_counts.update(response.device_one_time_keys_count)

        for room_id, joined in response.rooms.join.items():
            await self._process_joined(room_id, joined, response)

    async def _process_joined(
        self, room_id: str, joined: JoinedRoom, response: SyncResponse
    ) -> None:
        room = await self._rooms.ensure_room(room_id)
        if joined.timeline.prev_batch is not None:
            room.prev_batch = joined.timeline.prev_batch

        # The room-independent section is applied to every joined room in
        # the pass, after the room's own state.
        for event in [*joined.state.events, *response.state.events]:
            event = event.model_copy()
            event.room_id = room_id
            await self._rooms.apply_state_event(room, event)

        for event in joined.timeline.events:
            event.room_id = room_id
            # Incremental syncs deliver state changes in the timeline.
            if event.is_state:
                await self._rooms.apply_state_event(room, event)
            await room.put_event(event)
            await self._listeners.dispatch(ListenerKind.EVENT, event, event_type=event.type)

        for event in joined.ephemeral.events:
            event.room_id = room_id
            await room.put_ephemeral_event(event)
            await self._listeners.dispatch(ListenerKind.EPHEMERAL, event, event_type=event.type)

    async def listen_forever(
        self,
        timeout_ms: int = 30000,
        exception_handler: ExceptionHandler | None = None,
        bad_sync_timeout: float = 5,
    ) -> None:
        """Sync until :meth:`stop` is called or an unhandled error escapes.

        Server errors (5xx) back off exponentially from ``bad_sync_timeout``
        up to :attr:`bad_sync_timeout_limit` and never end the loop. Any
        other error goes to ``exception_handler`` if given, otherwise it is
        re-raised.
        """
        backoff = bad_sync_timeout
        self._should_listen = True
        log.info("Starting sync loop")
        try:
            while self._should_listen:
                try:
                    await self.perform_sync(timeout_ms)
                    backoff = bad_sync_timeout
                except MatrixRequestError as exc:
                    if exc.is_server_error:
                        log.warning(
                            "Sync failed with HTTP %d, retrying in %.1fs", exc.status, backoff
                        )
                        await asyncio.sleep(backoff)
                        backoff = min(backoff * 2, self.bad_sync_timeout_limit)
                    elif exception_handler is not None:
                        await _call_handler(exception_handler, exc)
                    else:
                        raise
                except Exception as exc:
                    if exception_handler is not None:
                        await _call_handler(exception_handler, exc)
                    else:
                        raise
        finally:
            self._should_listen = False
            log.info("Sync loop stopped")

    def stop(self) -> None:
        self._should_listen = False
