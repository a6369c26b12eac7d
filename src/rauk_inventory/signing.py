"""
Request signing for the Rai-Signature header.

Signature format:
  {api_key_id}.{api_public_key}.{hmac_sha256_hex}.{base64(timestamp)}

The HMAC is computed over the serialized request body followed by the
timestamp (epoch milliseconds as a decimal string), keyed by the API secret.
The server checks freshness using the timestamp suffix.
"""

import base64
import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from .errors import RaukError
from .models import Credentials


@dataclass(frozen=True)
class SignedRequest:
    """
    A serialized payload together with its signature.

    Attributes:
        body: JSON body exactly as it was signed; send it unchanged
        signature: Value for the Rai-Signature header
        timestamp: Epoch milliseconds used in the signature
    """
    body: str
    signature: str
    timestamp: str


def _now_ms() -> str:
    return str(time.time_ns() // 1_000_000)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value.isoformat(timespec="milliseconds") + "Z"
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _normalize_numbers(value: Any) -> Any:
    # JavaScript has one number type: 10.0 is written as 10
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    if isinstance(value, dict):
        return {key: _normalize_numbers(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_numbers(item) for item in value]
    return value


def serialize_payload(payload: Any) -> str:
    """
    Serialize an operation payload to its canonical JSON form.

    Compact separators, key order as given, non-ASCII characters kept as-is.
    Integral floats are written without a fractional part (10.0 -> 10).
    NaN and infinities are rejected since they are not valid JSON.
    Datetimes are encoded as ISO-8601 UTC strings with a "Z" suffix.
    """
    return json.dumps(
        _normalize_numbers(payload),
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=_json_default,
    )


def compute_signature(credentials: Credentials, body: str, timestamp: str) -> str:
    """
    Compute the Rai-Signature token for an already-serialized body.

    Args:
        credentials: API credentials
        body: Serialized request body
        timestamp: Epoch milliseconds as a decimal string

    Raises:
        RaukError: If the HMAC cannot be computed
    """
    try:
        digest = hmac.new(
            credentials.api_secret.encode("utf-8"),
            (body + timestamp).encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()
    except Exception:
        # Cause suppressed, it may include key material
        raise RaukError("Failed to generate signature", status_code=0) from None

    encoded_time = base64.b64encode(timestamp.encode("ascii")).decode("ascii")
    return f"{credentials.api_key_id}.{credentials.api_public_key}.{digest}.{encoded_time}"


def sign_payload(credentials: Credentials, payload: Any) -> SignedRequest:
    """
    Serialize and sign an operation payload.

    The payload is serialized once and the timestamp captured once, so the
    returned body is byte-identical to what was signed.

    Args:
        credentials: API credentials
        payload: Operation payload, e.g. ["find", {"sku": "ITEM-001"}]

    Raises:
        RaukError: If the payload is not JSON serializable or signing fails
    """
    try:
        body = serialize_payload(payload)
    except (TypeError, ValueError) as e:
        raise RaukError(
            "Failed to serialize request payload",
            status_code=0,
            context={"originalError": str(e)},
        ) from e

    timestamp = _now_ms()
    signature = compute_signature(credentials, body, timestamp)
    return SignedRequest(body=body, signature=signature, timestamp=timestamp)


def sign_request(credentials: Credentials, payload: Any) -> str:
    """Return only the Rai-Signature token for a payload."""
    return sign_payload(credentials, payload).signature
