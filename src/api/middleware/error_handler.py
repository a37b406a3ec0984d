"""
Error handling middleware.
"""

import traceback
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config.logging import get_logger
from src.domain.exceptions.location_error import LocationUnresolvedError
from src.domain.exceptions.payment_error import PaymentInitiationError, PaymentWebhookError
from src.domain.exceptions.pricing_error import UnknownEnumError
from src.domain.exceptions.proposal_error import ProposalNotFoundError, ProposalStateError
from src.domain.exceptions.provider_error import ProviderConfigurationError, ProviderError
from src.domain.exceptions.token_error import (
    TokenAlreadyUsedError,
    TokenExpiredError,
    TokenInvalidError,
    TokenProposalMismatchError,
)
from src.domain.exceptions.validation_error import ValidationError

logger = get_logger(__name__)


def error_body(
    error: str,
    message: str,
    error_type: str,
    details: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Build the JSON error envelope shared by every handler."""
    body = {"error": error, "message": message, "type": error_type}
    if details is not None:
        body["details"] = details
    return body


def _field_path(location) -> str:
    parts = [str(part) for part in location]
    if parts and parts[0] in ("body", "query", "path", "header"):
        parts = parts[1:]
    return ".".join(parts)


def add_error_handlers(app: FastAPI) -> None:
    """Add custom error handlers to FastAPI app."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.warning("Validation error", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=400,
            content=error_body(
                "Validation Error",
                exc.message,
                "validation_error",
                [error.to_dict() for error in exc.errors],
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError
    ):
        details = [
            {"field": _field_path(error.get("loc", ())), "message": error.get("msg", "")}
            for error in exc.errors()
        ]
        logger.warning("Request validation error", path=request.url.path, details=details)
        return JSONResponse(
            status_code=400,
            content=error_body(
                "Validation Error", "Invalid request", "validation_error", details
            ),
        )

    @app.exception_handler(LocationUnresolvedError)
    async def location_error_handler(request: Request, exc: LocationUnresolvedError):
        logger.warning(
            "Location could not be resolved",
            reference=exc.reference,
            reason=exc.reason,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=503,
            content=error_body(
                "Location Unavailable", str(exc), "location_unresolved"
            ),
        )

    @app.exception_handler(UnknownEnumError)
    async def pricing_error_handler(request: Request, exc: UnknownEnumError):
        logger.error(
            "Pricing table lookup failed",
            table=exc.table,
            value=str(exc.value),
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content=error_body("Pricing Error", str(exc), "pricing_error"),
        )

    @app.exception_handler(TokenInvalidError)
    async def token_invalid_handler(request: Request, exc: TokenInvalidError):
        logger.warning("Invalid approval token", reason=exc.reason, path=request.url.path)
        return JSONResponse(
            status_code=401,
            content=error_body(
                "Invalid Token", "This approval link is not valid", "token_invalid"
            ),
        )

    @app.exception_handler(TokenProposalMismatchError)
    async def token_mismatch_handler(request: Request, exc: TokenProposalMismatchError):
        logger.warning(
            "Approval token presented for another proposal",
            token_proposal_id=exc.token_proposal_id,
            requested_proposal_id=str(exc.requested_proposal_id),
        )
        return JSONResponse(
            status_code=403,
            content=error_body(
                "Token Mismatch",
                "This approval link belongs to a different proposal",
                "token_mismatch",
            ),
        )

    @app.exception_handler(TokenExpiredError)
    async def token_expired_handler(request: Request, exc: TokenExpiredError):
        return JSONResponse(
            status_code=410,
            content=error_body("Token Expired", str(exc), "token_expired"),
        )

    @app.exception_handler(TokenAlreadyUsedError)
    async def token_used_handler(request: Request, exc: TokenAlreadyUsedError):
        return JSONResponse(
            status_code=409,
            content=error_body(
                "Already Approved", "This proposal has already been approved", "token_used"
            ),
        )

    @app.exception_handler(ProposalNotFoundError)
    async def proposal_not_found_handler(request: Request, exc: ProposalNotFoundError):
        return JSONResponse(
            status_code=404,
            content=error_body("Not Found", str(exc), "proposal_not_found"),
        )

    @app.exception_handler(ProposalStateError)
    async def proposal_state_handler(request: Request, exc: ProposalStateError):
        logger.info(
            "Illegal proposal transition",
            current_status=exc.current_status,
            required_status=exc.required_status,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=409,
            content=error_body("Invalid State", str(exc), "proposal_state"),
        )

    @app.exception_handler(PaymentInitiationError)
    async def payment_initiation_handler(request: Request, exc: PaymentInitiationError):
        logger.error(
            "Payment initiation failed",
            provider=exc.provider,
            error=exc.message,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=502,
            content=error_body(
                "Payment Error",
                "The deposit payment could not be started, please try again",
                "payment_initiation_error",
            ),
        )

    @app.exception_handler(PaymentWebhookError)
    async def payment_webhook_handler(request: Request, exc: PaymentWebhookError):
        logger.warning("Rejected payment notification", error=exc.message)
        return JSONResponse(
            status_code=400,
            content=error_body("Webhook Error", exc.message, "payment_webhook_error"),
        )

    @app.exception_handler(ProviderConfigurationError)
    async def provider_configuration_handler(
        request: Request, exc: ProviderConfigurationError
    ):
        logger.error("Provider misconfigured", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=500,
            content=error_body(
                "Configuration Error",
                "A required provider is not configured",
                "provider_configuration_error",
            ),
        )

    @app.exception_handler(ProviderError)
    async def provider_error_handler(request: Request, exc: ProviderError):
        logger.error("Provider error", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=502,
            content=error_body("Provider Error", str(exc), "provider_error"),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=500,
            content=error_body(
                "Database Error", "A database error occurred", "database_error"
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body("HTTP Error", str(exc.detail), "http_error"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            traceback=traceback.format_exc(),
        )
        return JSONResponse(
            status_code=500,
            content=error_body(
                "Internal Server Error",
                "An unexpected error occurred",
                "internal_error",
            ),
        )
