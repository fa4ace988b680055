"""Models package — import all models so create_all can discover them."""

from feedback_backend.models.feedback import Feedback
from feedback_backend.models.activity_log import ActivityLog
from feedback_backend.models.api_request import ApiRequest

__all__ = ["Feedback", "ActivityLog", "ApiRequest"]
