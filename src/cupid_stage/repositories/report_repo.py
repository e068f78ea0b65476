"""Data access helpers for user reports."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from cupid_stage.models.moderation import OPEN_REPORT_STATUSES, UserReport
from cupid_stage.models.user import User

from .records import ReportSummary, UserSummary

__all__ = ["ReportRepository"]


class ReportRepository:
    """Thin wrapper around database access for report entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def insert_report(
        self,
        reporter_id: int,
        reported_id: int,
        reason: str,
        description: str | None,
    ) -> UserReport:
        report = UserReport(
            reporter_id=reporter_id,
            reported_id=reported_id,
            reason=reason,
            description=description,
        )
        self.session.add(report)
        self.session.flush()
        return report

    def has_open_report(self, reporter_id: int, reported_id: int) -> bool:
        """Return True if ``reporter_id`` has a pending or reviewed report on ``reported_id``."""
        result = self.session.execute(
            select(UserReport.id).where(
                UserReport.reporter_id == reporter_id,
                UserReport.reported_id == reported_id,
                UserReport.status.in_(OPEN_REPORT_STATUSES),
            )
        )
        return result.first() is not None

    def list_reports(self, reporter_id: int) -> list[ReportSummary]:
        """Return the reports filed by ``reporter_id``, most recent first."""
        result = self.session.execute(
            select(UserReport, User.name, User.photo_url)
            .join(User, User.id == UserReport.reported_id)
            .where(UserReport.reporter_id == reporter_id)
            .order_by(UserReport.created_at.desc(), UserReport.id.desc())
        )
        return [
            ReportSummary(
                report_id=report.id,
                reported_user=UserSummary(id=report.reported_id, name=name, photo_url=photo_url),
                reason=report.reason,
                description=report.description,
                status=report.status,
                reported_at=report.created_at,
            )
            for report, name, photo_url in result
        ]
