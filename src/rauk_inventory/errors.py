"""
Typed errors raised by the Rauk Inventory SDK, and the classifier that maps
failed API responses onto them.

Error response bodies look like:

    {
        "success": false,
        "error": {
            "name": "ValidationError",
            "message": "...",
            "errors": [{"property": "sku", "constraints": ["..."], "children": []}]
        }
    }
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from .models import ValidationErrorDetail


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string with millisecond precision."""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class RaukError(Exception):
    """
    Base class for all Rauk SDK errors.

    Attributes:
        message: Human-readable description
        status_code: HTTP status code, or 0 when no HTTP response was received
        timestamp: ISO-8601 time the error was created
        request_id: Server request ID, if known
        context: Free-form diagnostic data
        original_error: Raw error body returned by the API, if any
    """

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        timestamp: str | None = None,
        request_id: str | None = None,
        context: dict[str, Any] | None = None,
        original_error: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.timestamp = timestamp or utc_timestamp()
        self.request_id = request_id
        self.context = context
        self.original_error = original_error

    @property
    def name(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a plain dict for logging or serialization."""
        return {
            "name": self.name,
            "message": self.message,
            "statusCode": self.status_code,
            "requestId": self.request_id,
            "timestamp": self.timestamp,
            "context": self.context,
            "originalError": self.original_error,
        }


class RaukValidationError(RaukError):
    """The API rejected the request because of constraint violations."""

    def __init__(
        self,
        message: str,
        validation_errors: list[ValidationErrorDetail],
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.validation_errors = validation_errors

    def get_all_messages(self) -> list[str]:
        """
        Flatten every constraint message in the violation tree.

        Messages are returned depth-first: a property's own constraints come
        before those of its children.
        """
        messages: list[str] = []

        def collect(errors: list[ValidationErrorDetail]) -> None:
            for error in errors:
                messages.extend(error.constraints)
                if error.children:
                    collect(error.children)

        collect(self.validation_errors)
        return messages

    def get_errors_for_property(self, property_path: str) -> list[ValidationErrorDetail]:
        """
        Find violations for a property at any nesting depth.

        Direct matches at a level are listed before matches found among
        that level's children.
        """

        def find(errors: list[ValidationErrorDetail]) -> list[ValidationErrorDetail]:
            found = [error for error in errors if error.property == property_path]
            for error in errors:
                if error.children:
                    found.extend(find(error.children))
            return found

        return find(self.validation_errors)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["validationErrors"] = [error.to_dict() for error in self.validation_errors]
        return data


class RaukAuthenticationError(RaukError):
    """Authentication or authorization failed (401/403)."""

    def __init__(self, message: str = "Authentication failed", **kwargs: Any):
        super().__init__(message, **kwargs)


class RaukNetworkError(RaukError):
    """The API could not be reached, or it failed with a server error."""

    def __init__(self, message: str = "Network request failed", **kwargs: Any):
        super().__init__(message, **kwargs)


class RaukApiError(RaukError):
    """Any other non-success API response."""


def parse_api_error(status_code: int, body: Any) -> RaukError:
    """
    Classify a non-success API response.

    Args:
        status_code: HTTP status code of the response
        body: Decoded JSON body of the response

    Returns:
        The RaukError subclass matching the response. The first matching rule
        wins: validation errors, then 401/403, then 5xx, then anything else.
    """
    error = body.get("error") if isinstance(body, Mapping) else None
    if not isinstance(error, Mapping):
        error = {}
    message = error.get("message")

    options: dict[str, Any] = {
        "status_code": status_code,
        "timestamp": utc_timestamp(),
        "original_error": body,
    }

    raw_errors = error.get("errors")
    if isinstance(raw_errors, list):
        validation_errors = [
            ValidationErrorDetail.from_dict(item)
            for item in raw_errors
            if isinstance(item, Mapping)
        ]
        all_messages = [c for detail in validation_errors for c in detail.constraints]
        return RaukValidationError(
            message or "; ".join(all_messages),
            validation_errors,
            **options,
        )

    if status_code in (401, 403):
        return RaukAuthenticationError(message or "Authentication failed", **options)

    if status_code >= 500:
        return RaukNetworkError(message or "Server error occurred", **options)

    return RaukApiError(
        message or f"API request failed with status {status_code}",
        **options,
    )


def is_rauk_error(error: object) -> bool:
    return isinstance(error, RaukError)


def is_validation_error(error: object) -> bool:
    return isinstance(error, RaukValidationError)


def is_authentication_error(error: object) -> bool:
    return isinstance(error, RaukAuthenticationError)


def is_network_error(error: object) -> bool:
    return isinstance(error, RaukNetworkError)


def is_api_error(error: object) -> bool:
    return isinstance(error, RaukApiError)
