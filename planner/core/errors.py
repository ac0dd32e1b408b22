"""
Domain errors and their HTTP mapping.

Every error the service raises on purpose derives from ``PlannerError`` and
carries a machine-readable code plus the status it maps to. The handlers at
the bottom are registered on the app in ``planner.main``.
"""

from typing import Any, Optional
from uuid import UUID

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from planner.core.logger import logger


class PlannerError(Exception):
    """Base exception for the trip planner."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        body = {"detail": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        return body


class InvalidDateRangeError(PlannerError):
    """Trip dates are in the past or ends_at precedes starts_at."""

    def __init__(self, message: str, field: str):
        super().__init__(
            message=message,
            code="INVALID_DATE_RANGE",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"field": field},
        )


class TripNotFoundError(PlannerError):
    def __init__(self, trip_id: UUID):
        super().__init__(
            message=f"Trip not found: {trip_id}",
            code="TRIP_NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"trip_id": str(trip_id)},
        )


class ParticipantNotFoundError(PlannerError):
    def __init__(self, participant_id: UUID):
        super().__init__(
            message=f"Participant not found: {participant_id}",
            code="PARTICIPANT_NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"participant_id": str(participant_id)},
        )


class DeliveryFailureError(PlannerError):
    """A mail could not be handed to the SMTP server.

    Recorded per recipient by the notification fan-out; never rendered as a
    response.
    """

    def __init__(self, recipient: str, reason: str):
        super().__init__(
            message=f"Failed to deliver mail to {recipient}: {reason}",
            code="DELIVERY_FAILED",
            status_code=status.HTTP_502_BAD_GATEWAY,
            details={"recipient": recipient, "reason": reason},
        )
        self.recipient = recipient
        self.reason = reason


async def planner_exception_handler(request: Request, exc: PlannerError) -> JSONResponse:
    logger.warning(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Invalid input",
            "code": "INVALID_INPUT",
            "errors": jsonable_encoder(exc.errors(), custom_encoder={Exception: str}),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"},
    )
