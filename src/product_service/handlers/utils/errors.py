"""
Error taxonomy and response helpers for the product Lambda handlers.

Every failure a handler can report is a ``BaseServiceError`` subclass. The
handler layer turns those into API Gateway responses with
``get_http_status_code`` and ``format_error_response``; operational causes are
logged through ``log_error_metrics`` and never copied into response bodies.
"""

import functools
import json
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from aws_lambda_powertools.metrics import MetricUnit
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from product_service.handlers.utils.observability import logger, metrics, tracer


class ErrorSeverity(str, Enum):
    """Error severity levels for classification."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "VALIDATION"
    BUSINESS_LOGIC = "BUSINESS_LOGIC"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
    INFRASTRUCTURE = "INFRASTRUCTURE"


class ErrorContext(BaseModel):
    """Context information for errors."""

    request_id: str = Field(description="Unique request identifier")
    operation: str = Field(description="Operation being performed")
    resource_id: Optional[str] = Field(default=None, description="Resource identifier")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    additional_data: Dict[str, Any] = Field(default_factory=dict)


class BaseServiceError(Exception):
    """Base exception class for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.BUSINESS_LOGIC,
        context: Optional[ErrorContext] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.context = context
        self.user_message = user_message or "An error occurred while processing your request."
        self.error_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "message": self.message,
            "user_message": self.user_message,
            "severity": self.severity.value,
            "category": self.category.value,
            "context": self.context.model_dump(mode="json") if self.context else None,
        }


class InvalidInputError(BaseServiceError):
    """Raised when client-supplied input is missing or malformed."""

    def __init__(
        self,
        message: str,
        field_errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[ErrorContext] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
            context=context,
            user_message=user_message or message,
        )
        self.field_errors = field_errors or []


class ResourceNotFoundError(BaseServiceError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        context: Optional[ErrorContext] = None,
    ):
        message = f"{resource_type} with ID '{resource_id}' not found"
        super().__init__(
            message=message,
            error_code="RESOURCE_NOT_FOUND",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.BUSINESS_LOGIC,
            context=context,
            user_message=f"{resource_type} not found",
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class OperationalError(BaseServiceError):
    """Raised when a backing service call fails."""

    def __init__(
        self,
        message: str,
        service_name: str,
        operation: str,
        error_code: str = "OPERATIONAL_ERROR",
        context: Optional[ErrorContext] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.EXTERNAL_SERVICE,
            context=context,
            user_message=user_message or "Internal server error",
        )
        self.service_name = service_name
        self.operation = operation


def create_error_context(
    request_id: str,
    operation: str,
    resource_id: Optional[str] = None,
    **additional_data: Any,
) -> ErrorContext:
    """Create an error context for consistent error handling."""
    return ErrorContext(
        request_id=request_id,
        operation=operation,
        resource_id=resource_id,
        additional_data=additional_data,
    )


@tracer.capture_method
def log_error_metrics(error: BaseServiceError) -> None:
    """Log error metrics for monitoring and alerting."""

    metrics.add_metric(name="ErrorCount", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name=f"Error{error.category.value}Count", unit=MetricUnit.Count, value=1)

    tracer.put_annotation("error_code", error.error_code)
    tracer.put_metadata("error_details", error.to_dict())

    log = logger.warning if error.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM) else logger.error
    log(
        "Service error occurred",
        extra={
            "error_id": error.error_id,
            "error_code": error.error_code,
            "error_severity": error.severity.value,
            "error_category": error.category.value,
            "error_message": error.message,
            "context": error.context.model_dump(mode="json") if error.context else None,
        },
    )


def public_error_code(error: BaseServiceError) -> str:
    """Error code safe to return to callers. Server-side codes stay in the logs."""
    if isinstance(error, OperationalError):
        return "OPERATIONAL_ERROR"
    if get_http_status_code(error) >= 500:
        return "INTERNAL_ERROR"
    return error.error_code


def format_error_response(error: BaseServiceError) -> Dict[str, Any]:
    """Format error for API response. Only the user-facing message is exposed."""

    response: Dict[str, Any] = {
        "message": error.user_message,
        "error": {
            "code": public_error_code(error),
            "error_id": error.error_id,
        },
    }

    if isinstance(error, InvalidInputError) and error.field_errors:
        response["error"]["field_errors"] = error.field_errors

    return response


def get_http_status_code(error: BaseServiceError) -> int:
    """Get appropriate HTTP status code for error."""

    status_mapping = {
        "VALIDATION_ERROR": 400,
        "RESOURCE_NOT_FOUND": 404,
    }

    return status_mapping.get(error.error_code, 500)


def create_api_response(
    status_code: int,
    body: Any,
    headers: Optional[Dict[str, str]] = None,
    allow_origin: str = "*",
) -> Dict[str, Any]:
    """Create standardized API Gateway response."""

    default_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
        "Access-Control-Allow-Methods": "OPTIONS,POST,GET,DELETE",
    }

    if headers:
        default_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": default_headers,
        "body": body if isinstance(body, str) else json.dumps(body, default=str),
    }


def create_error_response(error: BaseServiceError, allow_origin: str = "*") -> Dict[str, Any]:
    """Log a service error and convert it to an API Gateway response."""
    log_error_metrics(error)
    return create_api_response(
        status_code=get_http_status_code(error),
        body=format_error_response(error),
        allow_origin=allow_origin,
    )


class ConfigurationError(BaseServiceError):
    """Raised when the function's environment is missing required settings."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.INFRASTRUCTURE,
            user_message="Internal server error",
        )


def _allow_origin() -> str:
    # imported here, env_vars depends on this module
    from product_service.handlers.models.env_vars import get_cors_allow_origin
    return get_cors_allow_origin()


def handle_service_errors(func):
    """Decorator to handle service errors and convert them to HTTP responses."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)

        except BaseServiceError as e:
            return create_error_response(e, allow_origin=_allow_origin())

        except PydanticValidationError as e:
            logger.warning("Request validation failed", extra={
                "validation_errors": str(e),
                "error_count": e.error_count(),
            })
            field_errors = [
                {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
                for error in e.errors()
            ]
            return create_error_response(InvalidInputError(
                message="Request validation failed",
                field_errors=field_errors,
            ), allow_origin=_allow_origin())

        except Exception as e:
            logger.exception("Unexpected error in handler", extra={
                "error": str(e),
                "function_name": func.__name__,
            })
            metrics.add_metric(name="UnexpectedError", unit=MetricUnit.Count, value=1)
            return create_api_response(
                status_code=500,
                body={"message": "Internal server error"},
                allow_origin=_allow_origin(),
            )

    return wrapper
