from contextvars import ContextVar
from typing import Any, Optional

# Request id of the request being served
request_context: ContextVar[Optional[str]] = ContextVar(
    "request_context", default=None
)
# Short description of what the caller asked for, e.g. "POST /api/rewrite"
user_query_context: ContextVar[Optional[str]] = ContextVar(
    "user_query_context", default=None
)
# Langfuse trace object of the current request
tracer_context: ContextVar[Optional[Any]] = ContextVar(
    "tracer_context", default=None
)
