"""Tests for the swipe engine."""

import pytest
from sqlalchemy import func, select

from cupid_stage.errors import InvalidInputError, NotFoundError
from cupid_stage.models import Match, Swipe
from cupid_stage.services import MatchRegistry, ModerationService, SwipeEngine
from cupid_stage.services.swipes import parse_direction


def _match_count(db_session) -> int:
    return db_session.scalar(select(func.count()).select_from(Match))


def test_left_swipe_never_matches(db_session, alice, bob) -> None:
    engine = SwipeEngine(db_session)

    assert engine.record_swipe(alice.id, bob.id, "left").matched is False
    assert engine.record_swipe(bob.id, alice.id, "right").matched is False
    assert _match_count(db_session) == 0


def test_one_sided_right_swipe_does_not_match(db_session, alice, bob) -> None:
    result = SwipeEngine(db_session).record_swipe(alice.id, bob.id, "right")

    assert result.matched is False
    assert MatchRegistry(db_session).is_matched(alice.id, bob.id) is False


def test_mutual_right_swipes_create_exactly_one_match(db_session, alice, bob) -> None:
    engine = SwipeEngine(db_session)

    assert engine.record_swipe(alice.id, bob.id, "right").matched is False
    assert engine.record_swipe(bob.id, alice.id, "right").matched is True
    # Repeating the completing swipe reports the existing match without duplicating it.
    assert engine.record_swipe(alice.id, bob.id, "right").matched is True

    assert _match_count(db_session) == 1
    registry = MatchRegistry(db_session)
    assert registry.is_matched(alice.id, bob.id)
    assert registry.is_matched(bob.id, alice.id)


def test_repeat_swipe_overwrites_direction(db_session, alice, bob) -> None:
    engine = SwipeEngine(db_session)
    engine.record_swipe(alice.id, bob.id, "right")
    engine.record_swipe(alice.id, bob.id, "left")

    rows = db_session.scalars(select(Swipe).where(Swipe.swiper_id == alice.id)).all()
    assert len(rows) == 1
    assert rows[0].direction == "left"

    # The overwritten right swipe no longer completes a match.
    assert engine.record_swipe(bob.id, alice.id, "right").matched is False


def test_left_swipe_after_match_keeps_match(db_session, alice, bob) -> None:
    engine = SwipeEngine(db_session)
    engine.record_swipe(alice.id, bob.id, "right")
    engine.record_swipe(bob.id, alice.id, "right")

    assert engine.record_swipe(alice.id, bob.id, "left").matched is False
    assert MatchRegistry(db_session).is_matched(alice.id, bob.id)


def test_self_swipe_is_rejected(db_session, alice) -> None:
    with pytest.raises(InvalidInputError):
        SwipeEngine(db_session).record_swipe(alice.id, alice.id, "right")


@pytest.mark.parametrize("direction", ["up", "", "RIGHT "])
def test_unknown_direction_is_rejected(db_session, alice, bob, direction) -> None:
    with pytest.raises(InvalidInputError):
        SwipeEngine(db_session).record_swipe(alice.id, bob.id, direction)


def test_parse_direction_accepts_enum_values() -> None:
    assert parse_direction("left").value == "left"
    assert parse_direction("right").value == "right"


def test_swipe_on_missing_user_is_not_found(db_session, alice) -> None:
    with pytest.raises(NotFoundError):
        SwipeEngine(db_session).record_swipe(alice.id, 999_999, "right")


def test_swipe_across_block_is_not_found(db_session, alice, bob) -> None:
    ModerationService(db_session).block_user(bob.id, alice.id)

    with pytest.raises(NotFoundError):
        SwipeEngine(db_session).record_swipe(alice.id, bob.id, "right")


def test_swipe_history_lists_own_swipes(db_session, alice, bob, carol) -> None:
    engine = SwipeEngine(db_session)
    engine.record_swipe(alice.id, bob.id, "right")
    engine.record_swipe(alice.id, carol.id, "left")
    engine.record_swipe(bob.id, alice.id, "left")

    history = engine.swipe_history(alice.id)

    assert {(swipe.swipee_id, swipe.direction) for swipe in history} == {
        (bob.id, "right"),
        (carol.id, "left"),
    }
