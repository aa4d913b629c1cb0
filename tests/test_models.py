"""Tests for SDK response models."""

from matrix_sdk.models.auth import LoginResponse
from matrix_sdk.models.errors import ErrorCode, ErrorResponse
from matrix_sdk.models.events import RoomEvent
from matrix_sdk.models.sync import SyncResponse


class TestSyncResponse:
    def test_minimal(self):
        r = SyncResponse.model_validate({"next_batch": "s1"})
        assert r.next_batch == "s1"
        assert r.rooms.join == {}
        assert r.rooms.invite == {}
        assert r.rooms.leave == {}
        assert r.presence.events == []
        assert r.state.events == []
        assert r.device_one_time_keys_count is None

    def test_joined_room(self):
        r = SyncResponse.model_validate({
            "next_batch": "s2",
            "rooms": {"join": {"!r:x": {
                "timeline": {
                    "events": [{
                        "type": "m.room.message",
                        "event_id": "$1",
                        "sender": "@a:x",
                        "content": {"body": "hi", "msgtype": "m.text"},
                        "org.example.custom": 1,
                    }],
                    "prev_batch": "p1",
                    "limited": True,
                },
                "ephemeral": {"events": [{"type": "m.typing", "content": {"user_ids": []}}]},
            }}},
        })
        room = r.rooms.join["!r:x"]
        assert room.timeline.prev_batch == "p1"
        assert room.timeline.limited is True
        event = room.timeline.events[0]
        assert event.content["body"] == "hi"
        assert event.room_id is None
        assert not event.is_state
        assert event.model_extra["org.example.custom"] == 1
        assert room.ephemeral.events[0].type == "m.typing"
        assert room.state.events == []

    def test_invited_room_without_state(self):
        r = SyncResponse.model_validate({"next_batch": "s", "rooms": {"invite": {"!r:x": {}}}})
        assert r.rooms.invite["!r:x"].invite_state.events == []


class TestEvents:
    def test_state_event(self):
        e = RoomEvent.model_validate({"type": "m.room.name", "state_key": "", "content": {"name": "n"}})
        assert e.is_state


class TestErrorModels:
    def test_error_response(self):
        r = ErrorResponse.model_validate({"errcode": "M_UNKNOWN_TOKEN", "error": "Invalid token"})
        assert r.code == ErrorCode.UNKNOWN_TOKEN
        assert r.retry_after_ms is None


class TestAuthModels:
    def test_login_response(self):
        r = LoginResponse.model_validate({
            "user_id": "@a:x", "access_token": "tok", "home_server": "x", "device_id": "D",
        })
        assert r.access_token == "tok"
        assert r.device_id == "D"
