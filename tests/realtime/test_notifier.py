"""Tests for the connection hub and realtime notifier."""

from datetime import UTC, datetime
from types import SimpleNamespace
from typing import Any

import pytest

from cupid_stage.errors import UnauthorizedError
from cupid_stage.realtime import ConnectionHub, RealtimeNotifier, conversation_channel, user_channel
from cupid_stage.repositories.records import SentMessage


class FakeConnection:
    def __init__(self, fail: bool = False) -> None:
        self.frames: list[dict[str, Any]] = []
        self.fail = fail

    async def send_json(self, data: Any) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.frames.append(data)

    def events(self) -> list[str]:
        return [frame["event"] for frame in self.frames]


def _conversation(conversation_id: int, user1_id: int, user2_id: int) -> SimpleNamespace:
    return SimpleNamespace(
        id=conversation_id,
        has_participant=lambda user_id: user_id in (user1_id, user2_id),
    )


def _sent(conversation_id: int = 5, sender_id: int = 1, receiver_id: int = 2) -> SentMessage:
    return SentMessage(
        id=11,
        conversation_id=conversation_id,
        text="hi",
        sender_id=sender_id,
        sender_name="Alice",
        created_at=datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC),
        receiver_id=receiver_id,
    )


def test_channel_names() -> None:
    assert user_channel(3) == "user_3"
    assert conversation_channel(9) == "conversation_9"


async def test_hub_publish_respects_exclude_and_membership() -> None:
    hub = ConnectionHub()
    a, b, c = FakeConnection(), FakeConnection(), FakeConnection()
    for session_id, conn in (("a", a), ("b", b), ("c", c)):
        hub.attach(session_id, conn)
    hub.join("a", "room")
    hub.join("b", "room")

    delivered = await hub.publish("room", "ping", {"n": 1}, exclude="a")

    assert delivered == 1
    assert a.frames == []
    assert b.frames == [{"event": "ping", "data": {"n": 1}}]
    assert c.frames == []


async def test_hub_drops_session_whose_send_fails() -> None:
    hub = ConnectionHub()
    hub.attach("broken", FakeConnection(fail=True))
    hub.attach("ok", FakeConnection())
    hub.join("broken", "room")
    hub.join("ok", "room")

    assert await hub.publish("room", "ping", {}) == 1
    assert not hub.is_connected("broken")
    assert hub.members("room") == {"ok"}


async def test_hub_leave_and_detach_clean_up_channels() -> None:
    hub = ConnectionHub()
    hub.attach("s", FakeConnection())
    hub.join("s", "one")
    hub.join("s", "two")

    hub.leave("s", "one")
    assert hub.members("one") == set()
    hub.detach("s")
    assert hub.members("two") == set()
    assert await hub.send("s", "ping", {}) is False


async def test_reconnect_replaces_session_and_stale_disconnect_is_ignored() -> None:
    notifier = RealtimeNotifier()
    old, new = FakeConnection(), FakeConnection()

    await notifier.on_connect(1, "old", old)
    await notifier.on_connect(1, "new", new)
    await notifier.on_disconnect(1, "old")

    assert await notifier.registry.lookup(1) == "new"
    await notifier.on_disconnect(1, "new")
    assert await notifier.registry.lookup(1) is None


async def test_reconnect_moves_personal_channel_to_newest_session() -> None:
    notifier = RealtimeNotifier()
    old, new = FakeConnection(), FakeConnection()
    await notifier.on_connect(2, "old", old)
    await notifier.on_connect(2, "new", new)
    notifier.subscribe_conversation("old", 2, _conversation(5, 1, 2))

    assert notifier.hub.members(user_channel(2)) == {"new"}
    assert notifier.hub.is_connected("old")

    await notifier.broadcast_new_message(_sent())

    assert old.events() == ["new_message"]
    assert new.events() == ["conversation_update"]


async def test_subscribe_requires_participant() -> None:
    notifier = RealtimeNotifier()
    await notifier.on_connect(3, "s3", FakeConnection())

    with pytest.raises(UnauthorizedError):
        notifier.subscribe_conversation("s3", 3, _conversation(5, 1, 2))
    assert notifier.hub.members(conversation_channel(5)) == set()


async def test_new_message_reaches_room_and_receiver_channel() -> None:
    notifier = RealtimeNotifier()
    sender, receiver = FakeConnection(), FakeConnection()
    await notifier.on_connect(1, "s1", sender)
    await notifier.on_connect(2, "s2", receiver)
    notifier.subscribe_conversation("s1", 1, _conversation(5, 1, 2))

    await notifier.broadcast_new_message(_sent())

    assert sender.events() == ["new_message"]
    payload = sender.frames[0]["data"]
    assert payload["conversationId"] == 5
    assert payload["receiverId"] == 2
    assert payload["text"] == "hi"
    assert payload["createdAt"].startswith("2026-01-02T03:04:05")

    assert receiver.events() == ["conversation_update"]
    update = receiver.frames[0]["data"]
    assert update["lastMessage"] == "hi"
    assert update["senderId"] == 1
    assert update["senderName"] == "Alice"


async def test_new_message_skips_update_for_offline_receiver() -> None:
    notifier = RealtimeNotifier()
    sender = FakeConnection()
    await notifier.on_connect(1, "s1", sender)
    notifier.subscribe_conversation("s1", 1, _conversation(5, 1, 2))

    await notifier.broadcast_new_message(_sent())

    assert sender.events() == ["new_message"]


async def test_typing_and_read_exclude_originating_session() -> None:
    notifier = RealtimeNotifier()
    one, two = FakeConnection(), FakeConnection()
    await notifier.on_connect(1, "s1", one)
    await notifier.on_connect(2, "s2", two)
    conversation = _conversation(5, 1, 2)
    notifier.subscribe_conversation("s1", 1, conversation)
    notifier.subscribe_conversation("s2", 2, conversation)

    await notifier.broadcast_typing(5, 1, True, user_name="Alice", session_id="s1")
    await notifier.broadcast_read(5, 2)

    assert one.events() == ["messages_read"]
    assert one.frames[0]["data"] == {"conversationId": 5, "readerId": 2}
    assert two.events() == ["user_typing"]
    assert two.frames[0]["data"]["isTyping"] is True
    assert two.frames[0]["data"]["userName"] == "Alice"


async def test_failed_delivery_never_raises() -> None:
    notifier = RealtimeNotifier()
    await notifier.on_connect(1, "s1", FakeConnection(fail=True))
    await notifier.on_connect(2, "s2", FakeConnection(fail=True))
    notifier.subscribe_conversation("s1", 1, _conversation(5, 1, 2))

    await notifier.broadcast_new_message(_sent())

    assert not notifier.hub.is_connected("s1")
    assert not notifier.hub.is_connected("s2")
