"""
Error handling framework for the hacklearn site.

The renderer and the matcher are total functions and never raise. Errors
live at the edges: unknown slugs and paths, blank comment submissions,
downloads of projects that were not purchased, unreadable datasets and
configuration problems.

Error Categories:
- BaseAPIError: Base class carrying a machine-readable ``error_code``
- ValidationError: Input validation failures
- ContentNotFoundError: Unknown topic or project slug
- RouteNotFoundError: Path matched no page
- PurchaseRequiredError: Download requested before the project was bought
- StorageError: Value could not be written to the key-value store
- DatasetError: Content dataset could not be loaded or validated
- ConfigurationError: ``config.yaml`` could not be parsed or validated

Example usage:
    try:
        view = router.route("/material/unknown")
    except ContentNotFoundError as exc:
        payload = format_error_response(exc).to_dict()
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union


def generate_request_id(prefix: str = "req") -> str:
    """
    Generate a unique request ID used to correlate a view request with its logs.

    Example:
        >>> generate_request_id("view")
        'view-87654321-4321-8765-dcba-098765432109'
    """
    return f"{prefix}-{uuid.uuid4()}"


class ErrorCodes:
    """Standardized error codes for all components."""

    # Content
    TOPIC_NOT_FOUND = "TOPIC_NOT_FOUND"
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"
    DATASET_ERROR = "DATASET_ERROR"

    # Purchases and storage
    PURCHASE_REQUIRED = "PURCHASE_REQUIRED"
    STORAGE_ERROR = "STORAGE_ERROR"

    # Validation and configuration
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # System
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class BaseAPIError(Exception):
    """
    Base exception for hacklearn errors.

    Attributes:
        message: Technical error message for developers/logs
        error_code: Machine-readable error code
        request_id: Identifier for correlating the error with logs
        http_status: HTTP-style status used by views to pick a page
        details: Additional structured error context
        user_message: Message suitable for showing on the page (optional)
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        request_id: Optional[str] = None,
        http_status: int = 500,
        details: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.request_id = request_id or generate_request_id()
        self.http_status = http_status
        self.details = details or {}
        self.user_message = user_message
        self.timestamp = datetime.now(timezone.utc)

    def is_client_error(self) -> bool:
        return 400 <= self.http_status < 500


class ValidationError(BaseAPIError):
    """Request validation error carrying per-field messages."""

    def __init__(
        self,
        message: str,
        validation_errors: List[Dict[str, str]],
        request_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        merged = dict(details or {})
        merged.setdefault("validation_errors", validation_errors)
        super().__init__(
            message=message,
            error_code=ErrorCodes.VALIDATION_ERROR,
            request_id=request_id,
            http_status=400,
            details=merged,
        )
        self.validation_errors = validation_errors


class ContentNotFoundError(BaseAPIError):
    """A topic or project slug that does not exist in the dataset."""

    def __init__(
        self,
        message: str,
        error_code: str,
        slug: str,
        request_id: Optional[str] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            request_id=request_id,
            http_status=404,
            details={"slug": slug},
            user_message=user_message,
        )
        self.slug = slug

    @classmethod
    def topic(cls, slug: str) -> "ContentNotFoundError":
        return cls(
            message=f"Unknown topic slug: {slug}",
            error_code=ErrorCodes.TOPIC_NOT_FOUND,
            slug=slug,
            user_message="Topic not found.",
        )

    @classmethod
    def project(cls, topic_slug: str, project_slug: str) -> "ContentNotFoundError":
        return cls(
            message=f"Unknown project: {topic_slug}/{project_slug}",
            error_code=ErrorCodes.PROJECT_NOT_FOUND,
            slug=f"{topic_slug}/{project_slug}",
            user_message="Project not found.",
        )


class RouteNotFoundError(BaseAPIError):
    """No page is registered for the requested path."""

    def __init__(self, path: str, request_id: Optional[str] = None):
        super().__init__(
            message=f"No route matches path: {path}",
            error_code=ErrorCodes.ROUTE_NOT_FOUND,
            request_id=request_id,
            http_status=404,
            details={"path": path},
            user_message="Page not found.",
        )
        self.path = path


class PurchaseRequiredError(BaseAPIError):
    """A project download was requested before the project was purchased."""

    def __init__(self, project_slug: str, price: int, request_id: Optional[str] = None):
        super().__init__(
            message=f"Project {project_slug} has not been purchased",
            error_code=ErrorCodes.PURCHASE_REQUIRED,
            request_id=request_id,
            http_status=402,
            details={"project": project_slug, "price": price},
            user_message=f"Buy this project for ₹{price} to download it.",
        )
        self.project_slug = project_slug
        self.price = price


class StorageError(BaseAPIError):
    """A value could not be written to the key-value store."""

    def __init__(self, message: str, key: str, request_id: Optional[str] = None):
        super().__init__(
            message=message,
            error_code=ErrorCodes.STORAGE_ERROR,
            request_id=request_id,
            http_status=500,
            details={"key": key},
        )
        self.key = key


class DatasetError(BaseAPIError):
    """The content dataset could not be read or failed validation."""

    def __init__(self, message: str, source: str, request_id: Optional[str] = None):
        super().__init__(
            message=message,
            error_code=ErrorCodes.DATASET_ERROR,
            request_id=request_id,
            http_status=500,
            details={"source": source},
        )
        self.source = source


class ConfigurationError(BaseAPIError):
    """``config.yaml`` could not be parsed or failed validation."""

    def __init__(self, message: str, config_path: Optional[str] = None):
        super().__init__(
            message=message,
            error_code=ErrorCodes.CONFIGURATION_ERROR,
            http_status=500,
            details={"config_path": config_path} if config_path else None,
        )
        self.config_path = config_path


class ErrorResponse:
    """Structured error payload used by the request handler and the CLI."""

    def __init__(
        self,
        error_code: str,
        message: str,
        request_id: str,
        details: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None,
        http_status: int = 500,
        timestamp: Optional[datetime] = None
    ):
        self.error_code = error_code
        self.message = message
        self.request_id = request_id
        self.details = details
        self.user_message = user_message
        self.http_status = http_status
        self.timestamp = timestamp or datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
            "request_id": self.request_id,
            "http_status": self.http_status,
            "timestamp": self.timestamp.isoformat().replace('+00:00', 'Z'),
        }
        if self.user_message:
            result["user_message"] = self.user_message

        if self.details:
            try:
                json.dumps(self.details)
                result["details"] = self.details
            except (TypeError, ValueError, RecursionError):
                result["details"] = {"error": "Details contain non-serializable data"}

        return result


def format_error_response(
    error: Union[BaseAPIError, Exception],
    message_override: Optional[str] = None,
    request_id: Optional[str] = None
) -> ErrorResponse:
    """
    Format an exception into a structured error response.

    Unknown exceptions are reported as ``INTERNAL_SERVER_ERROR`` without
    details.
    """
    if isinstance(error, BaseAPIError):
        error_code = error.error_code
        message = message_override or error.message
        req_id = request_id or error.request_id
        details = error.details
        user_message = error.user_message
        http_status = error.http_status
    else:
        error_code = ErrorCodes.INTERNAL_SERVER_ERROR
        message = message_override or str(error)
        req_id = request_id or generate_request_id()
        details = None
        user_message = None
        http_status = 500

    if len(message) > 5000:
        message = message[:4997] + "..."

    return ErrorResponse(
        error_code=error_code,
        message=message,
        request_id=req_id,
        details=details,
        user_message=user_message,
        http_status=http_status,
    )
