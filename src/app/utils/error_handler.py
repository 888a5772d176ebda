import functools

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse

from src.app.models.domain.error import ProviderError
from src.app.utils.logging_utils import loggers


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        content={"success": False, "error": message},
        status_code=status_code,
    )


def handle_exceptions(func):
    """
    Route decorator turning exceptions into ``{"success": false, "error": ...}``
    responses.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except HTTPException as e:
            loggers["main"].warning(
                f"{func.__name__} failed with {e.status_code}: {e.detail}"
            )
            return error_response(str(e.detail), e.status_code)
        except ProviderError as e:
            loggers["main"].error(f"{func.__name__} provider error: {e.message}")
            return error_response(
                e.message, status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        except Exception as e:
            loggers["main"].exception(f"{func.__name__} unexpected error")
            return error_response(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)

    return wrapper
