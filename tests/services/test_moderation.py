"""Tests for blocking and reporting."""

import pytest

from cupid_stage.errors import InvalidInputError, NotFoundError
from cupid_stage.models import ReportReason, ReportStatus, UserReport
from cupid_stage.services import MatchRegistry, ModerationService, SwipeEngine


def test_block_removes_match_and_swipes(db_session, alice, bob) -> None:
    swipes = SwipeEngine(db_session)
    swipes.record_swipe(alice.id, bob.id, "right")
    swipes.record_swipe(bob.id, alice.id, "right")

    ModerationService(db_session).block_user(alice.id, bob.id, reason="spam")

    assert not MatchRegistry(db_session).is_matched(alice.id, bob.id)
    assert swipes.swipe_history(alice.id) == []
    assert swipes.swipe_history(bob.id) == []


def test_unblock_requires_new_mutual_swipes(db_session, alice, bob) -> None:
    swipes = SwipeEngine(db_session)
    swipes.record_swipe(alice.id, bob.id, "right")
    swipes.record_swipe(bob.id, alice.id, "right")
    moderation = ModerationService(db_session)
    moderation.block_user(alice.id, bob.id)

    moderation.unblock_user(alice.id, bob.id)

    assert swipes.record_swipe(alice.id, bob.id, "right").matched is False
    assert swipes.record_swipe(bob.id, alice.id, "right").matched is True


def test_block_validation(db_session, alice, bob) -> None:
    moderation = ModerationService(db_session)

    with pytest.raises(InvalidInputError):
        moderation.block_user(alice.id, alice.id)
    with pytest.raises(NotFoundError):
        moderation.block_user(alice.id, 987654)

    moderation.block_user(alice.id, bob.id)
    with pytest.raises(InvalidInputError, match="already blocked"):
        moderation.block_user(alice.id, bob.id)


def test_unblock_without_block_is_not_found(db_session, alice, bob) -> None:
    with pytest.raises(NotFoundError):
        ModerationService(db_session).unblock_user(alice.id, bob.id)


def test_list_blocked(db_session, alice, bob, carol) -> None:
    moderation = ModerationService(db_session)
    moderation.block_user(alice.id, bob.id, reason="rude")
    moderation.block_user(carol.id, alice.id)

    blocks = moderation.list_blocked(alice.id)

    assert [(b.blocked_user.id, b.reason) for b in blocks] == [(bob.id, "rude")]
    assert blocks[0].blocked_user.name == "Bob"
    assert moderation.list_blocked(bob.id) == []


def test_is_blocked_only_reports_own_blocks(db_session, alice, bob) -> None:
    moderation = ModerationService(db_session)
    moderation.block_user(alice.id, bob.id)

    assert moderation.is_blocked(alice.id, bob.id) is True
    assert moderation.is_blocked(bob.id, alice.id) is False


def test_report_user_validation(db_session, alice, bob) -> None:
    moderation = ModerationService(db_session)

    with pytest.raises(InvalidInputError, match="yourself"):
        moderation.report_user(alice.id, alice.id, "spam")
    with pytest.raises(InvalidInputError, match="reason"):
        moderation.report_user(alice.id, bob.id, "rude")
    with pytest.raises(NotFoundError):
        moderation.report_user(alice.id, 987654, "spam")


def test_open_report_blocks_duplicates_until_closed(db_session, alice, bob) -> None:
    moderation = ModerationService(db_session)
    report_id = moderation.report_user(alice.id, bob.id, ReportReason.HARASSMENT)

    with pytest.raises(InvalidInputError, match="already reported"):
        moderation.report_user(alice.id, bob.id, "spam")

    db_session.get(UserReport, report_id).status = ReportStatus.DISMISSED.value
    db_session.commit()

    second = moderation.report_user(alice.id, bob.id, "spam", "sends links")
    reports = moderation.list_reports(alice.id)

    assert {r.report_id for r in reports} == {report_id, second}
    latest = next(r for r in reports if r.report_id == second)
    assert (latest.reason, latest.description, latest.status) == ("spam", "sends links", "pending")
    assert latest.reported_user.name == "Bob"
    assert moderation.list_reports(bob.id) == []
