"""Activity log model — append-only."""

from sqlalchemy import Column, Integer, String, Text, DateTime, func
from feedback_backend.db.base import Base


class ActivityLog(Base):
    """Immutable audit trail of feedback mutations.

    This table is APPEND-ONLY: no UPDATE or DELETE operations are ever
    performed on it.
    """
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    action = Column(String(20), nullable=False, index=True)  # CREATE, UPDATE, DELETE
    table_name = Column(String(100), nullable=False)
    record_id = Column(Integer, nullable=False)
    details = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)
