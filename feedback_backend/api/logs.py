"""Logs API router — read-only views of activity and request logs."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from feedback_backend.db.session import get_db
from feedback_backend.schemas.schemas import (
    ActivityLogOut, ActivityLogListResponse, ApiRequestOut, ApiRequestListResponse,
)
from feedback_backend.services.audit_service import audit_service
from feedback_backend.services.request_log_service import request_log_service

router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("/activities", response_model=ActivityLogListResponse)
def get_activity_logs(db: Session = Depends(get_db)):
    """Latest activity entries, newest first."""
    return ActivityLogListResponse(
        data=[ActivityLogOut.model_validate(log) for log in audit_service.recent(db)],
    )


@router.get("/api-requests", response_model=ApiRequestListResponse)
def get_api_request_logs(db: Session = Depends(get_db)):
    """Latest API request traces, newest first."""
    return ApiRequestListResponse(
        data=[ApiRequestOut.model_validate(log) for log in request_log_service.recent(db)],
    )
