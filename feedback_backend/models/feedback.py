"""Feedback model."""

from sqlalchemy import Column, Integer, String, DateTime, func
from feedback_backend.db.base import Base, LONG_TEXT

# Options offered by the browser client; not enforced by validation.
PLATFORM_OPTIONS = ("Web", "Mobile", "Desktop", "API")
MODULE_OPTIONS = (
    "Authentication",
    "Dashboard",
    "Reports",
    "Settings",
    "Notifications",
    "User Management",
)


class Feedback(Base):
    """One submitted feedback report."""
    __tablename__ = "feedbacks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    platform = Column(String(100), nullable=False, index=True)
    module = Column(String(100), nullable=False, index=True)
    description = Column(LONG_TEXT, nullable=False)
    attachments = Column(String(500), nullable=False, default="")  # comma-separated filenames
    tags = Column(String(300), nullable=False, default="")  # comma-separated
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
