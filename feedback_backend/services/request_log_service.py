"""Request log service — persists one trace row per HTTP request."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session, sessionmaker

from feedback_backend.core.config import settings
from feedback_backend.models.api_request import ApiRequest

logger = logging.getLogger("feedback_api")

_MAX_ENDPOINT = 500


class RequestLogService:
    """Stores and reads API request traces."""

    @staticmethod
    def record(
        session_factory: sessionmaker,
        method: str,
        endpoint: str,
        request_body: str,
        response_body: str,
        status_code: int,
        response_time: int,
    ) -> bool:
        """Insert a trace row using a session of its own.

        Runs after the response has gone out, outside any request-scoped
        session. Returns False when the row could not be written; the error
        is logged and never raised.
        """
        db = session_factory()
        try:
            db.add(ApiRequest(
                method=method,
                endpoint=endpoint[:_MAX_ENDPOINT],
                request_body=request_body,
                response_body=response_body,
                status_code=status_code,
                response_time=response_time,
            ))
            db.commit()
            return True
        except Exception:
            logger.exception("Error logging API request: %s %s", method, endpoint)
            db.rollback()
            return False
        finally:
            db.close()

    @staticmethod
    def recent(db: Session, limit: Optional[int] = None) -> List[ApiRequest]:
        """Most recent request traces, newest first."""
        return (
            db.query(ApiRequest)
            .order_by(ApiRequest.created_at.desc(), ApiRequest.id.desc())
            .limit(limit or settings.LOG_LIMIT)
            .all()
        )


request_log_service = RequestLogService()
