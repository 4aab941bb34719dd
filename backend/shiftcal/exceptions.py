from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str
    detail: str | None = None
    status_code: int
    context: dict[str, Any] | None = None


class AppError(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    @property
    def context(self) -> dict[str, Any] | None:
        return None


class IllegalTransitionError(AppError):
    """The requested kind cannot be set on a date with the current effective shift."""

    def __init__(self, message: str, *, rule: str, current: str, requested: str) -> None:
        self.rule = rule
        self.current = current
        self.requested = requested
        super().__init__(message, status_code=status.HTTP_409_CONFLICT)

    @property
    def context(self) -> dict[str, Any]:
        return {"rule": self.rule, "current": self.current, "requested": self.requested}


class InsufficientBalanceError(AppError):
    """A leave bucket does not hold enough for the requested change."""

    def __init__(self, bucket: str, required: float, available: float) -> None:
        self.bucket = bucket
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient {bucket} balance: requires {required:g}, available {available:g}",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @property
    def context(self) -> dict[str, Any]:
        return {"bucket": self.bucket, "required": self.required, "available": self.available}


class PersistenceError(AppError):
    """A shift change could not be stored; the whole transaction was rolled back."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


class ScheduleStoreError(PersistenceError):
    """Writing schedule overrides failed."""


class LedgerStoreError(PersistenceError):
    """Writing the leave profile failed."""


async def _app_exception_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=type(exc).__name__,
            detail=exc.message,
            status_code=exc.status_code,
            context=exc.context,
        ).model_dump(),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            error="ValidationError",
            detail=str(exc.errors()),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        ).model_dump(),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the application."""
    app.add_exception_handler(AppError, _app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)  # type: ignore[arg-type]
