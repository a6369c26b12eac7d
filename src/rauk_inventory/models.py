"""
Data models for the Rauk Inventory SDK.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, TypedDict

# Default hosted inventory API
DEFAULT_BASE_URL = "https://inventory.rauk.app"

API_KEY_ID_LENGTH = 24
API_PUBLIC_KEY_LENGTH = 32
API_SECRET_LENGTH = 64

# Queries, updates and pipelines are passed through to the service untouched
Query = dict[str, Any]
Update = dict[str, Any]
Pipeline = list[dict[str, Any]]
BulkOperation = dict[str, Any]


class OperationTag:
    """Operation names accepted by the /query endpoint."""

    INSERT_ONE = "insertOne"
    FIND = "find"
    FIND_ONE_AND_UPDATE = "findOneAndUpdate"
    UPDATE_MANY = "updateMany"
    DELETE_ONE = "deleteOne"
    DELETE_MANY = "deleteMany"
    BULK_WRITE = "bulkWrite"
    AGGREGATE = "aggregate"


class RequestOptions(TypedDict, total=False):
    select: dict[str, int]
    limit: int
    sort: dict[str, int]
    includeDeleted: bool


class InsertResult(TypedDict):
    acknowledged: bool
    insertedId: str


class UpdateResult(TypedDict):
    matchedCount: int
    modifiedCount: int
    acknowledged: bool


class DeleteResult(TypedDict):
    deletedCount: int


@dataclass(frozen=True)
class Credentials:
    """
    API credentials and the endpoint they are used against.

    The value is immutable; rotating credentials means building a new
    instance and swapping it in whole.

    Attributes:
        api_key_id: API key ID (24 characters)
        api_secret: API secret used as the HMAC key (64 characters)
        api_public_key: API public key (32 characters)
        api_base_url: Base URL of the inventory API

    Raises:
        ValueError: If any key is missing or has the wrong length
    """
    api_key_id: str
    api_secret: str = field(repr=False)
    api_public_key: str
    api_base_url: str = DEFAULT_BASE_URL

    def __post_init__(self) -> None:
        if not self.api_key_id or not self.api_secret or not self.api_public_key:
            raise ValueError("api_key_id, api_secret and api_public_key are required")

        if len(self.api_key_id) != API_KEY_ID_LENGTH:
            raise ValueError(f"api_key_id must be {API_KEY_ID_LENGTH} characters long")
        if len(self.api_public_key) != API_PUBLIC_KEY_LENGTH:
            raise ValueError(f"api_public_key must be {API_PUBLIC_KEY_LENGTH} characters long")
        if len(self.api_secret) != API_SECRET_LENGTH:
            raise ValueError(f"api_secret must be {API_SECRET_LENGTH} characters long")

        base_url = (self.api_base_url or DEFAULT_BASE_URL).rstrip("/")
        object.__setattr__(self, "api_base_url", base_url)

    @property
    def query_url(self) -> str:
        """Full URL of the /query endpoint."""
        return f"{self.api_base_url}/query"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Credentials:
        """
        Build credentials from environment variables.

        Reads RAUK_API_KEY_ID, RAUK_API_SECRET, RAUK_API_PUBLIC_KEY and the
        optional RAUK_API_BASE_URL.

        Args:
            environ: Mapping to read from. Default: os.environ

        Raises:
            ValueError: If a required variable is missing or invalid
        """
        env = os.environ if environ is None else environ

        missing = [
            name
            for name in ("RAUK_API_KEY_ID", "RAUK_API_SECRET", "RAUK_API_PUBLIC_KEY")
            if not env.get(name)
        ]
        if missing:
            raise ValueError(f"Missing environment variables: {', '.join(missing)}")

        return cls(
            api_key_id=env["RAUK_API_KEY_ID"],
            api_secret=env["RAUK_API_SECRET"],
            api_public_key=env["RAUK_API_PUBLIC_KEY"],
            api_base_url=env.get("RAUK_API_BASE_URL") or DEFAULT_BASE_URL,
        )


@dataclass
class ValidationErrorDetail:
    """
    A single constraint violation reported by the API.

    Attributes:
        property: Name of the offending property
        constraints: Human-readable constraint messages
        children: Violations on nested properties
    """
    property: str
    constraints: list[str] = field(default_factory=list)
    children: list[ValidationErrorDetail] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ValidationErrorDetail:
        """
        Parse one violation record.

        Malformed entries are tolerated: a bare string constraint becomes a
        one-item list and non-object children are skipped.
        """
        constraints = data.get("constraints") or []
        # class-validator style payloads key constraints by rule name
        if isinstance(constraints, Mapping):
            constraints = list(constraints.values())
        elif isinstance(constraints, str):
            constraints = [constraints]

        children = data.get("children") or []
        if not isinstance(children, list):
            children = []

        return cls(
            property=str(data.get("property", "")),
            constraints=[str(c) for c in constraints],
            children=[cls.from_dict(child) for child in children if isinstance(child, Mapping)],
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert back to the wire shape.

        Only property, constraints and children are kept; any other keys of
        the original record (e.g. "value") are dropped. The raw response body
        is available on the raised error as original_error.
        """
        return {
            "property": self.property,
            "constraints": list(self.constraints),
            "children": [child.to_dict() for child in self.children],
        }
