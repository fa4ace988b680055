"""Audit service — append-only activity trail for feedback mutations."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from feedback_backend.core.config import settings
from feedback_backend.models.activity_log import ActivityLog

logger = logging.getLogger("feedback_api")

CREATE = "CREATE"
UPDATE = "UPDATE"
DELETE = "DELETE"


class AuditService:
    """Records immutable activity log entries for feedback mutations."""

    @staticmethod
    def record(
        db: Session,
        action: str,
        table_name: str,
        record_id: int,
        details: Optional[str] = None,
    ) -> Optional[ActivityLog]:
        """Write a single activity log row.

        Always called after the primary mutation has committed. Failures are
        logged and swallowed, and ``None`` is returned instead.
        """
        try:
            entry = ActivityLog(
                action=action,
                table_name=table_name,
                record_id=record_id,
                details=details,
            )
            db.add(entry)
            db.commit()
        except Exception:
            logger.exception("Error logging activity: %s %s #%s", action, table_name, record_id)
            db.rollback()
            return None
        return entry

    @staticmethod
    def recent(db: Session, limit: Optional[int] = None) -> List[ActivityLog]:
        """Most recent activity entries, newest first."""
        return (
            db.query(ActivityLog)
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
            .limit(limit or settings.LOG_LIMIT)
            .all()
        )


audit_service = AuditService()
