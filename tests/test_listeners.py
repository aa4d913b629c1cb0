"""Tests for the listener registry."""

from __future__ import annotations

import pytest

from matrix_sdk.listeners import ListenerKind, ListenerRegistry


class TestRegistry:
    def test_register_returns_unique_ids(self):
        reg = ListenerRegistry()
        ids = {reg.register(ListenerKind.EVENT, lambda e: None) for _ in range(50)}
        assert len(ids) == 50
        assert len(reg) == 50

    def test_unregister_is_idempotent(self):
        reg = ListenerRegistry()
        uid = reg.register(ListenerKind.PRESENCE, lambda e: None)
        reg.unregister(ListenerKind.PRESENCE, uid)
        reg.unregister(ListenerKind.PRESENCE, uid)
        reg.unregister(ListenerKind.PRESENCE, "never-registered")
        assert reg.listeners(ListenerKind.PRESENCE) == []

    def test_kinds_are_independent(self):
        reg = ListenerRegistry()
        uid = reg.register(ListenerKind.INVITE, lambda *a: None)
        reg.unregister(ListenerKind.LEAVE, uid)
        assert len(reg.listeners(ListenerKind.INVITE)) == 1

    def test_remove_keeps_order_of_rest(self):
        reg = ListenerRegistry()
        a = reg.register(ListenerKind.EVENT, lambda e: "a")
        b = reg.register(ListenerKind.EVENT, lambda e: "b")
        c = reg.register(ListenerKind.EVENT, lambda e: "c")
        reg.unregister(ListenerKind.EVENT, b)
        assert [l.uid for l in reg.listeners(ListenerKind.EVENT)] == [a, c]


class TestDispatch:
    @pytest.mark.asyncio
    async def test_filter_and_order(self):
        reg = ListenerRegistry()
        calls = []
        reg.register(ListenerKind.EVENT, lambda e: calls.append(("any", e)))
        reg.register(ListenerKind.EVENT, lambda e: calls.append(("msg", e)), "m.room.message")
        reg.register(ListenerKind.EVENT, lambda e: calls.append(("typing", e)), "m.typing")

        await reg.dispatch(ListenerKind.EVENT, "evt", event_type="m.room.message")
        assert calls == [("any", "evt"), ("msg", "evt")]

    @pytest.mark.asyncio
    async def test_exception_aborts_pass(self):
        reg = ListenerRegistry()
        calls = []

        def boom(*args):
            raise ValueError("bad listener")

        reg.register(ListenerKind.LEAVE, lambda *a: calls.append(1))
        reg.register(ListenerKind.LEAVE, boom)
        reg.register(ListenerKind.LEAVE, lambda *a: calls.append(3))

        with pytest.raises(ValueError):
            await reg.dispatch(ListenerKind.LEAVE, "!r:x", {})
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_listener_may_unregister_during_dispatch(self):
        reg = ListenerRegistry()
        calls = []
        uids = {}

        def once(e):
            calls.append("once")
            reg.unregister(ListenerKind.EVENT, uids["once"])

        uids["once"] = reg.register(ListenerKind.EVENT, once)
        reg.register(ListenerKind.EVENT, lambda e: calls.append("always"))

        await reg.dispatch(ListenerKind.EVENT, None, event_type="x")
        await reg.dispatch(ListenerKind.EVENT, None, event_type="x")
        assert calls == ["once", "always", "always"]
