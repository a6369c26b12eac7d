"""
Rauk Inventory SDK for Python

Signed CRUD, bulk-write and aggregation requests against the Rauk Inventory API.
"""

from .models import (
    DEFAULT_BASE_URL,
    Credentials,
    DeleteResult,
    InsertResult,
    OperationTag,
    RequestOptions,
    UpdateResult,
    ValidationErrorDetail,
)
from .errors import (
    RaukError,
    RaukValidationError,
    RaukAuthenticationError,
    RaukNetworkError,
    RaukApiError,
    parse_api_error,
    is_rauk_error,
    is_validation_error,
    is_authentication_error,
    is_network_error,
    is_api_error,
)
from .signing import SignedRequest, serialize_payload, sign_payload, sign_request
from .client import RaukInventoryClient
from .inventory import RaukInventory

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_BASE_URL",
    "Credentials",
    "DeleteResult",
    "InsertResult",
    "OperationTag",
    "RequestOptions",
    "UpdateResult",
    "ValidationErrorDetail",
    "RaukError",
    "RaukValidationError",
    "RaukAuthenticationError",
    "RaukNetworkError",
    "RaukApiError",
    "parse_api_error",
    "is_rauk_error",
    "is_validation_error",
    "is_authentication_error",
    "is_network_error",
    "is_api_error",
    "SignedRequest",
    "serialize_payload",
    "sign_payload",
    "sign_request",
    "RaukInventoryClient",
    "RaukInventory",
]
