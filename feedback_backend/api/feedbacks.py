"""Feedbacks API router."""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from feedback_backend.db.session import get_db
from feedback_backend.schemas.schemas import (
    FeedbackInput, FeedbackOut, FeedbackListResponse, FeedbackResponse,
    FeedbackMutationResponse, MessageResponse,
)
from feedback_backend.services.feedback_service import feedback_service

router = APIRouter(prefix="/feedbacks", tags=["feedbacks"])


@router.get("", response_model=FeedbackListResponse)
def list_feedbacks(
    search: Optional[str] = Query(None),
    platform: Optional[str] = Query(None),
    module: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """List all feedbacks, newest first."""
    rows = feedback_service.list_feedbacks(db, search=search, platform=platform, module=module)
    return FeedbackListResponse(
        data=[FeedbackOut.model_validate(r) for r in rows],
        count=len(rows),
    )


@router.get("/{feedback_id}", response_model=FeedbackResponse)
def get_feedback(feedback_id: str, db: Session = Depends(get_db)):
    """Get a feedback."""
    return FeedbackResponse(data=FeedbackOut.model_validate(feedback_service.get(db, feedback_id)))


@router.post("", response_model=FeedbackMutationResponse, status_code=status.HTTP_201_CREATED)
def create_feedback(body: FeedbackInput, db: Session = Depends(get_db)):
    """Create a feedback."""
    feedback = feedback_service.create(db, body)
    return FeedbackMutationResponse(
        message="Feedback created successfully",
        data=FeedbackOut.model_validate(feedback),
    )


@router.put("/{feedback_id}", response_model=FeedbackMutationResponse)
def update_feedback(feedback_id: str, body: FeedbackInput, db: Session = Depends(get_db)):
    """Replace a feedback's editable fields."""
    feedback = feedback_service.update(db, feedback_id, body)
    return FeedbackMutationResponse(
        message="Feedback updated successfully",
        data=FeedbackOut.model_validate(feedback),
    )


@router.delete("/{feedback_id}", response_model=MessageResponse)
def delete_feedback(feedback_id: str, db: Session = Depends(get_db)):
    """Delete a feedback."""
    feedback_service.delete(db, feedback_id)
    return MessageResponse(message="Feedback deleted successfully")
