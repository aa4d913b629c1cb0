"""Listener registries for sync dispatch."""

from __future__ import annotations

import inspect
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

Callback = Callable[..., Awaitable[None] | None]


class ListenerKind(str, Enum):
    EVENT = "event"
    PRESENCE = "presence"
    INVITE = "invite"
    LEAVE = "leave"
    EPHEMERAL = "ephemeral"
    STATE = "state"


@dataclass(frozen=True)
class Listener:
    uid: str
    callback: Callback
    event_type: str | None = None

    def matches(self, event_type: str | None) -> bool:
        return self.event_type is None or self.event_type == event_type


class ListenerRegistry:
    """Ordered callback registrations, one collection per :class:`ListenerKind`.

    Insertion order is delivery order. Dispatch is sequential: a callback
    that raises aborts the rest of the pass and the exception reaches the
    caller. Callbacks may be plain functions or coroutine functions.
    """

    def __init__(self) -> None:
        self._listeners: dict[ListenerKind, dict[str, Listener]] = {
            kind: {} for kind in ListenerKind
        }

    def register(
        self, kind: ListenerKind, callback: Callback, event_type: str | None = None
    ) -> str:
        uid = uuid.uuid4().hex
        self._listeners[kind][uid] = Listener(uid, callback, event_type)
        return uid

    def unregister(self, kind: ListenerKind, uid: str) -> None:
        self._listeners[kind].pop(uid, None)

    def listeners(self, kind: ListenerKind) -> list[Listener]:
        return list(self._listeners[kind].values())

    def __len__(self) -> int:
        return sum(len(v) for v in self._listeners.values())

    async def dispatch(
        self, kind: ListenerKind, *args: Any, event_type: str | None = None
    ) -> None:
        # Snapshot so callbacks may (un)register without disturbing this pass.
        for listener in self.listeners(kind):
            if not listener.matches(event_type):
                continue
            result = listener.callback(*args)
            if inspect.isawaitable(result):
                await result
