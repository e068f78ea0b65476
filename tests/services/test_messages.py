"""Tests for the message store and read-state tracking."""

import pytest

from cupid_stage.core.settings import settings
from cupid_stage.errors import InvalidInputError, NotFoundError, NotMatchedError, UnauthorizedError
from cupid_stage.services import ConversationManager, MessageStore, ModerationService, SwipeEngine


@pytest.fixture()
def conversation_id(db_session, matched) -> int:
    alice, bob = matched
    return ConversationManager(db_session).start_conversation(alice.id, bob.id)


def test_swipe_match_chat_read_flow(db_session, make_user) -> None:
    ten = make_user("Ten", user_id=10)
    twenty = make_user("Twenty", user_id=20)
    swipes = SwipeEngine(db_session)

    assert swipes.record_swipe(10, 20, "right").matched is False
    assert swipes.record_swipe(20, 10, "right").matched is True

    conversation_id = ConversationManager(db_session).start_conversation(10, 20)
    store = MessageStore(db_session)
    sent = store.send_message(conversation_id, 10, "hi")
    assert sent.receiver_id == 20
    assert sent.sender_name == ten.name

    [entry] = store.list_conversations(20)
    assert entry.conversation_id == conversation_id
    assert entry.unread_count == 1
    assert entry.last_message == "hi"
    assert entry.other_user.id == 10

    store.mark_read(conversation_id, twenty.id)
    [entry] = store.list_conversations(20)
    assert entry.unread_count == 0


def test_sent_message_round_trips(db_session, matched, conversation_id) -> None:
    alice, bob = matched
    store = MessageStore(db_session)
    store.send_message(conversation_id, alice.id, "  hello there  ")
    store.send_message(conversation_id, bob.id, "hey")

    alice_view = store.list_messages(conversation_id, alice.id)
    bob_view = store.list_messages(conversation_id, bob.id)

    assert [(m.text, m.sender_id) for m in alice_view] == [
        ("hello there", alice.id),
        ("hey", bob.id),
    ]
    assert [m.is_me for m in alice_view] == [True, False]
    assert [m.is_me for m in bob_view] == [False, True]
    assert alice_view[0].sender_name == "Alice"


def test_listing_does_not_mark_read(db_session, matched, conversation_id) -> None:
    alice, bob = matched
    store = MessageStore(db_session)
    store.send_message(conversation_id, alice.id, "one")

    store.list_messages(conversation_id, bob.id)

    [entry] = store.list_conversations(bob.id)
    assert entry.unread_count == 1


def test_mark_read_is_idempotent_and_ignores_own_messages(
    db_session, matched, conversation_id
) -> None:
    alice, bob = matched
    store = MessageStore(db_session)
    store.send_message(conversation_id, alice.id, "one")
    store.send_message(conversation_id, alice.id, "two")
    store.send_message(conversation_id, bob.id, "three")

    assert store.mark_read(conversation_id, bob.id) == 2
    assert store.mark_read(conversation_id, bob.id) == 0

    [bob_entry] = store.list_conversations(bob.id)
    [alice_entry] = store.list_conversations(alice.id)
    assert bob_entry.unread_count == 0
    assert alice_entry.unread_count == 1

    own = [m for m in store.list_messages(conversation_id, bob.id) if m.is_me]
    assert [m.is_read for m in own] == [False]


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_message_is_rejected(db_session, matched, conversation_id, text) -> None:
    alice, _ = matched
    with pytest.raises(InvalidInputError):
        MessageStore(db_session).send_message(conversation_id, alice.id, text)


def test_overlong_message_is_rejected(db_session, matched, conversation_id) -> None:
    alice, _ = matched
    store = MessageStore(db_session)
    store.send_message(conversation_id, alice.id, "x" * settings.message_max_length)

    with pytest.raises(InvalidInputError):
        store.send_message(conversation_id, alice.id, "x" * (settings.message_max_length + 1))


def test_outsider_cannot_read_or_write(db_session, conversation_id, carol) -> None:
    store = MessageStore(db_session)

    with pytest.raises(UnauthorizedError):
        store.send_message(conversation_id, carol.id, "hi")
    with pytest.raises(UnauthorizedError):
        store.list_messages(conversation_id, carol.id)
    with pytest.raises(UnauthorizedError):
        store.mark_read(conversation_id, carol.id)


def test_missing_conversation_is_not_found(db_session, alice) -> None:
    with pytest.raises(NotFoundError):
        MessageStore(db_session).send_message(424242, alice.id, "hi")


def test_send_after_block_fails_not_matched(db_session, matched, conversation_id) -> None:
    alice, bob = matched
    store = MessageStore(db_session)
    store.send_message(conversation_id, alice.id, "before")

    ModerationService(db_session).block_user(bob.id, alice.id)

    with pytest.raises(NotMatchedError):
        store.send_message(conversation_id, alice.id, "after")
    # History stays readable.
    assert [m.text for m in store.list_messages(conversation_id, alice.id)] == ["before"]


def test_conversations_ordered_by_latest_activity(db_session, alice, bob, carol) -> None:
    manager = ConversationManager(db_session)
    manager.matches.create_match_if_absent(alice.id, bob.id)
    manager.matches.create_match_if_absent(alice.id, carol.id)
    with_bob = manager.start_conversation(alice.id, bob.id)
    with_carol = manager.start_conversation(alice.id, carol.id)
    store = MessageStore(db_session, conversations=manager)

    store.send_message(with_carol, carol.id, "first")
    store.send_message(with_bob, bob.id, "second")
    assert [c.conversation_id for c in store.list_conversations(alice.id)] == [with_bob, with_carol]

    store.send_message(with_carol, alice.id, "third")
    entries = store.list_conversations(alice.id)
    assert [c.conversation_id for c in entries] == [with_carol, with_bob]
    assert entries[0].last_message == "third"
    assert entries[0].unread_count == 1


def test_missing_photo_falls_back_to_default_avatar(db_session, matched, conversation_id) -> None:
    alice, bob = matched

    [alice_entry] = MessageStore(db_session).list_conversations(alice.id)
    [bob_entry] = MessageStore(db_session).list_conversations(bob.id)

    assert alice_entry.other_user.photo_url == settings.default_avatar_url
    assert bob_entry.other_user.photo_url == "https://img.example/alice.png"
    assert alice_entry.last_message is None
    assert alice_entry.unread_count == 0
