"""
Application exceptions and error handling.

Defines the service's exceptions and the handlers that turn them into
``{"error": {"type", "message", "details"}}`` responses.
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .logging import get_logger

logger = get_logger(__name__)


class GradingServiceError(Exception):
    """Base exception for grading service errors"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidAnswerSpecError(GradingServiceError):
    """Raised when a question's stored correct answer does not fit its answer type"""

    def __init__(self, answer_type: str, error: str, question_id: Optional[str] = None):
        details: Dict[str, Any] = {"answer_type": answer_type, "error": error}
        if question_id:
            details["question_id"] = question_id
        super().__init__(
            message=f"Invalid correct answer for answer type '{answer_type}'",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
        )


class GradingError(GradingServiceError):
    """Raised when answer grading fails"""

    def __init__(self, question_id: Optional[str], error: str):
        super().__init__(
            message=f"Failed to grade answer for '{question_id or 'unknown question'}': {error}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"question_id": question_id, "error": error},
        )


def create_error_response(
    error: Exception,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    include_details: bool = True,
) -> JSONResponse:
    """Create standardized error response"""
    error_data: Dict[str, Any] = {
        "error": {
            "type": error.__class__.__name__,
            "message": str(error),
        }
    }

    if isinstance(error, GradingServiceError) and include_details:
        error_data["error"]["details"] = error.details

    extra_data = {
        "error_type": error.__class__.__name__,
        "status_code": status_code,
        **(error.details if isinstance(error, GradingServiceError) else {}),
    }
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"Error occurred: {error}", extra_data=extra_data, exc_info=True)
    else:
        logger.warning(f"Request rejected: {error}", extra_data=extra_data)

    return JSONResponse(status_code=status_code, content=error_data)


async def grading_service_error_handler(request: Request, exc: GradingServiceError) -> JSONResponse:
    """Handle GradingServiceError exceptions"""
    return create_error_response(exc, exc.status_code)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTPException exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "type": "HTTPException",
                "message": exc.detail,
            }
        },
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors"""
    errors = exc.errors()
    logger.warning("Validation error", extra_data={"errors": errors})

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": {
                "type": "ValidationError",
                "message": "Request validation failed",
                "details": [
                    {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
                    for error in errors
                ],
            }
        },
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected errors"""
    logger.exception("Unexpected error occurred", extra_data={"path": request.url.path})

    # Don't expose internal errors in production
    from .config import settings

    message = str(exc) if settings.DEBUG else "An internal error occurred"

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "type": "InternalServerError",
                "message": message,
            }
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register error handlers with FastAPI app"""
    app.add_exception_handler(GradingServiceError, grading_service_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)
