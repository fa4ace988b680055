"""Feedback service — CRUD over feedbacks with an activity entry per mutation."""

import logging
from typing import Optional, List, Union

from sqlalchemy import or_
from sqlalchemy.orm import Session

from feedback_backend.models.feedback import Feedback
from feedback_backend.schemas.schemas import FeedbackInput
from feedback_backend.services.audit_service import audit_service, CREATE, UPDATE, DELETE
from feedback_backend.core.exceptions import ResourceNotFoundError

logger = logging.getLogger("feedback_api")

TABLE_NAME = Feedback.__tablename__

# Largest value a signed 64-bit primary key can hold.
MAX_ID = 2 ** 63 - 1


def parse_feedback_id(feedback_id: Union[int, str]) -> int:
    """Turn a path id into an int, or raise not-found if it can't name a row."""
    if isinstance(feedback_id, str):
        if not (feedback_id.isascii() and feedback_id.isdigit()):
            raise ResourceNotFoundError("Feedback not found")
        feedback_id = int(feedback_id)
    if not 0 < feedback_id <= MAX_ID:
        raise ResourceNotFoundError("Feedback not found")
    return feedback_id


class FeedbackService:
    """Manages feedback records.

    Every mutation commits first, then records its activity entry, then
    returns. The returned row is detached before auditing so the audit
    commit (or its rollback) cannot expire it. The existence check and the
    mutation are separate statements; a concurrent delete between them is
    not guarded against.
    """

    @staticmethod
    def list_feedbacks(
        db: Session,
        search: Optional[str] = None,
        platform: Optional[str] = None,
        module: Optional[str] = None,
    ) -> List[Feedback]:
        """List feedbacks newest first, optionally filtered."""
        query = db.query(Feedback)

        if search:
            query = query.filter(or_(
                Feedback.title.icontains(search, autoescape=True),
                Feedback.description.icontains(search, autoescape=True),
                Feedback.tags.icontains(search, autoescape=True),
            ))
        if platform:
            query = query.filter(Feedback.platform == platform)
        if module:
            query = query.filter(Feedback.module == module)

        return query.order_by(Feedback.created_at.desc(), Feedback.id.desc()).all()

    @staticmethod
    def get(db: Session, feedback_id: Union[int, str]) -> Feedback:
        """Get a feedback by id."""
        feedback_id = parse_feedback_id(feedback_id)
        feedback = db.query(Feedback).filter(Feedback.id == feedback_id).first()
        if not feedback:
            raise ResourceNotFoundError("Feedback not found")
        return feedback

    @staticmethod
    def create(db: Session, body: FeedbackInput) -> Feedback:
        """Insert a new feedback and record a CREATE entry."""
        feedback = Feedback(
            title=body.title,
            platform=body.platform,
            module=body.module,
            description=body.description,
            attachments=body.attachments or "",
            tags=body.tags or "",
        )
        db.add(feedback)
        db.commit()
        db.refresh(feedback)
        logger.info("Created feedback #%s", feedback.id)
        db.expunge(feedback)

        audit_service.record(db, CREATE, TABLE_NAME, feedback.id, f"Created feedback: {body.title}")
        return feedback

    @staticmethod
    def update(db: Session, feedback_id: Union[int, str], body: FeedbackInput) -> Feedback:
        """Replace every editable field and record an UPDATE entry."""
        feedback = FeedbackService.get(db, feedback_id)
        feedback.title = body.title
        feedback.platform = body.platform
        feedback.module = body.module
        feedback.description = body.description
        feedback.attachments = body.attachments or ""
        feedback.tags = body.tags or ""
        db.commit()
        db.refresh(feedback)
        logger.info("Updated feedback #%s", feedback.id)
        db.expunge(feedback)

        audit_service.record(db, UPDATE, TABLE_NAME, feedback.id, f"Updated feedback: {body.title}")
        return feedback

    @staticmethod
    def delete(db: Session, feedback_id: Union[int, str]) -> None:
        """Delete a feedback and record a DELETE entry with its stored title."""
        feedback = FeedbackService.get(db, feedback_id)
        record_id, title = feedback.id, feedback.title
        db.delete(feedback)
        db.commit()
        logger.info("Deleted feedback #%s", record_id)

        audit_service.record(db, DELETE, TABLE_NAME, record_id, f"Deleted feedback: {title}")


feedback_service = FeedbackService()
