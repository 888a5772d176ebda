from datetime import datetime
from typing import Optional

from src.app.utils.tracing_context_utils import (
    request_context,
    user_query_context,
)


class Error:
    def __init__(self, error_message: str, source: Optional[str] = None):
        self.request_id: str = str(request_context.get())
        self.user_query: str = str(user_query_context.get())
        self.source: str = source or "unknown"
        self.error_message: str = error_message
        self.timestamp: str = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    def to_dict(self):
        return {
            "request_id": self.request_id,
            "user_query": self.user_query,
            "source": self.source,
            "error_message": self.error_message,
            "timestamp": self.timestamp,
        }


class ProviderError(Exception):
    """Raised when the text generation provider cannot produce a reply."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransformError(Exception):
    """Raised when a collection cannot be turned into a workflow definition."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
