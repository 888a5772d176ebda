import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.app.config.database import mongodb_database
from src.app.config.settings import settings
from src.app.routes.app_generation_route import router as app_generation_router
from src.app.routes.generation_route import router as generation_router
from src.app.services.langfuse_service import langfuse_service
from src.app.utils.logging_utils import loggers
from src.app.utils.tracing_context_utils import (
    request_context,
    tracer_context,
    user_query_context,
)


@asynccontextmanager
async def db_lifespan(app: FastAPI):
    mongodb_database.connect()
    yield
    await mongodb_database.disconnect()
    langfuse_service.flush()


app = FastAPI(title="Workflow Generation API", lifespan=db_lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def create_unified_trace(request: Request, call_next):
    trace_token = None
    trace = langfuse_service.create_trace(
        request_context.get(), name=f"{request.method} {request.url.path}"
    )
    if trace is not None:
        trace_token = tracer_context.set(trace)
        loggers["lfuse"].info(f"trace object created for trace_id: {trace.id}")
    try:
        response = await call_next(request)
    finally:
        if trace_token is not None:
            tracer_context.reset(trace_token)

    if trace is not None:
        response.headers["X-Trace-ID"] = trace.id
    return response


async def set_request_context(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request_token = request_context.set(request_id)
    query_token = user_query_context.set(f"{request.method} {request.url.path}")
    loggers["main"].info(
        f"Request ID: {request_id} - {request.method} {request.url.path}"
    )
    try:
        response = await call_next(request)
    finally:
        user_query_context.reset(query_token)
        request_context.reset(request_token)

    response.headers["X-Request-ID"] = request_id
    return response


# The last registered middleware runs first, so the request context is set
# before the trace is created
app.middleware("http")(create_unified_trace)
app.middleware("http")(set_request_context)


@app.get("/")
async def root():
    return {"message": "Workflow Generation API is running"}


app.include_router(generation_router, prefix="/api", tags=["Text Generation"])
app.include_router(app_generation_router, prefix="/api", tags=["App Generation"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
