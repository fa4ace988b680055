"""Seed sample feedbacks for demo purposes."""

import logging

from sqlalchemy.orm import Session

from feedback_backend.models.feedback import Feedback
from feedback_backend.schemas.schemas import FeedbackInput
from feedback_backend.services.feedback_service import feedback_service

logger = logging.getLogger("feedback_api")

SAMPLE_FEEDBACKS = [
    {
        "title": "Login button not working",
        "platform": "Web",
        "module": "Authentication",
        "description": "The login button becomes unresponsive after clicking",
        "attachments": "screenshot.png, console_log.txt",
        "tags": "bug, critical, ui",
    },
    {
        "title": "Add dark mode support",
        "platform": "Mobile",
        "module": "Settings",
        "description": "Users would like a dark mode option in the settings",
        "attachments": "",
        "tags": "enhancement, ui, settings",
    },
    {
        "title": "Monthly report export times out",
        "platform": "Desktop",
        "module": "Reports",
        "description": "Exporting the monthly report to PDF never finishes for large accounts",
        "attachments": "export_error.log",
        "tags": "bug, performance",
    },
]


def seed_feedbacks(db: Session) -> int:
    """Insert the sample feedbacks whose titles are not present yet.

    Goes through the feedback service so each insert gets its CREATE entry.
    Returns the number of rows inserted.
    """
    inserted = 0
    for data in SAMPLE_FEEDBACKS:
        existing = db.query(Feedback).filter(Feedback.title == data["title"]).first()
        if existing:
            continue
        feedback_service.create(db, FeedbackInput(**data))
        inserted += 1

    logger.info("Seeded %s sample feedbacks", inserted)
    return inserted
