"""Pydantic schemas for API request/response serialization."""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


# ---- Feedback ----
class FeedbackInput(BaseModel):
    """Payload accepted by create and update. Unknown keys are ignored."""
    title: str = Field(..., min_length=1, max_length=255)
    platform: str = Field(..., min_length=1, max_length=100)
    module: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    attachments: str = Field("", max_length=500)
    tags: str = Field("", max_length=300)

class FeedbackOut(BaseModel):
    id: int
    title: str
    platform: str
    module: str
    description: str
    attachments: str = ""
    tags: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class FeedbackListResponse(BaseModel):
    success: bool = True
    data: List[FeedbackOut]
    count: int

class FeedbackResponse(BaseModel):
    success: bool = True
    data: FeedbackOut

class FeedbackMutationResponse(BaseModel):
    success: bool = True
    message: str
    data: FeedbackOut


# ---- Logs ----
class ActivityLogOut(BaseModel):
    id: int
    action: str
    table_name: str
    record_id: int
    details: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ApiRequestOut(BaseModel):
    id: int
    method: str
    endpoint: str
    request_body: Optional[str] = None
    response_body: Optional[str] = None
    status_code: int
    response_time: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ActivityLogListResponse(BaseModel):
    success: bool = True
    data: List[ActivityLogOut]

class ApiRequestListResponse(BaseModel):
    success: bool = True
    data: List[ApiRequestOut]


# ---- Generic ----
class MessageResponse(BaseModel):
    success: bool = True
    message: str

class HealthResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: str
