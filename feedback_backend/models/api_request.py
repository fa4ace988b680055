"""API request log model — one row per handled HTTP request."""

from sqlalchemy import Column, Integer, String, DateTime, func
from feedback_backend.db.base import Base, LONG_TEXT


class ApiRequest(Base):
    """Trace of a single request/response cycle."""
    __tablename__ = "api_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    method = Column(String(10), nullable=False)
    endpoint = Column(String(500), nullable=False)  # path including query string
    request_body = Column(LONG_TEXT, nullable=True)
    response_body = Column(LONG_TEXT, nullable=True)  # stored verbatim
    status_code = Column(Integer, nullable=False)
    response_time = Column(Integer, nullable=False)  # milliseconds
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)
