"""
Client for the Rauk Inventory API.
"""

import logging
from typing import Any, Mapping, Sequence

import httpx

from .errors import RaukError, RaukNetworkError, parse_api_error
from .models import (
    DEFAULT_BASE_URL,
    BulkOperation,
    Credentials,
    DeleteResult,
    OperationTag,
    Pipeline,
    Query,
    RequestOptions,
    Update,
    UpdateResult,
)
from .signing import SignedRequest, sign_payload

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "Rai-Signature"

NETWORK_ERROR_MESSAGE = (
    "Network request failed - check your internet connection and API endpoint"
)

# Update body used for soft deletes
SOFT_DELETE_UPDATE: dict[str, Any] = {"deleted": {"status": True}}


def _build_payload(
    tag: str,
    *args: Any,
    options: RequestOptions | None = None,
) -> list[Any]:
    """Build [tag, *args], appending options only when the caller gave some."""
    payload = [tag, *args]
    if options is not None:
        payload.append(options)
    return payload


def _error_body(response: httpx.Response) -> Any:
    """Decode an error response body, or synthesize one if it is not JSON."""
    try:
        return response.json()
    except ValueError:
        return {
            "success": False,
            "error": {
                "name": "ParseError",
                "message": f"HTTP {response.status_code}: {response.reason_phrase}",
            },
        }


class RaukInventoryClient:
    """
    Client for the Rauk Inventory API.

    Every operation is sent as a signed POST to {api_base_url}/query.

    Args:
        api_key_id: API key ID (24 characters)
        api_secret: API secret (64 characters)
        api_public_key: API public key (32 characters)
        api_base_url: Base URL of the inventory API.
            Default: https://inventory.rauk.app
        timeout_s: Request timeout in seconds. Default: 30.0
        http_client: Optional httpx.AsyncClient to send requests with. The
            caller owns it and is responsible for closing it.

    Raises:
        ValueError: If the credentials are missing or malformed

    Example:
        >>> client = RaukInventoryClient(
        ...     api_key_id=KEY_ID, api_secret=SECRET, api_public_key=PUBLIC_KEY
        ... )
        >>> items = await client.find({"sku": "ITEM-001"}, {"limit": 10})
    """

    def __init__(
        self,
        api_key_id: str,
        api_secret: str,
        api_public_key: str,
        api_base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._config = Credentials(
            api_key_id=api_key_id,
            api_secret=api_secret,
            api_public_key=api_public_key,
            api_base_url=api_base_url,
        )
        self.timeout_s = timeout_s
        self._http_client = http_client

    @classmethod
    def from_credentials(
        cls,
        credentials: Credentials,
        **kwargs: Any,
    ) -> "RaukInventoryClient":
        """Create a client from an existing Credentials value."""
        return cls(
            api_key_id=credentials.api_key_id,
            api_secret=credentials.api_secret,
            api_public_key=credentials.api_public_key,
            api_base_url=credentials.api_base_url,
            **kwargs,
        )

    @property
    def config(self) -> Credentials:
        """Credentials and base URL currently in use."""
        return self._config

    def set_config(
        self,
        api_key_id: str,
        api_secret: str,
        api_public_key: str,
        api_base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        """
        Replace the credentials and base URL.

        The new values are validated first and then swapped in as a whole.
        Requests already in flight keep using the credentials they started
        with.

        Raises:
            ValueError: If the new credentials are missing or malformed
        """
        self._config = Credentials(
            api_key_id=api_key_id,
            api_secret=api_secret,
            api_public_key=api_public_key,
            api_base_url=api_base_url,
        )
        logger.debug(
            "Inventory client reconfigured",
            extra={"api_key_id": api_key_id, "base_url": self._config.api_base_url},
        )

    async def _post(self, url: str, signed: SignedRequest) -> httpx.Response:
        headers = {
            "Content-Type": "application/json",
            SIGNATURE_HEADER: signed.signature,
        }
        content = signed.body.encode("utf-8")

        if self._http_client is not None:
            return await self._http_client.post(url, content=content, headers=headers)

        async with httpx.AsyncClient(timeout=self.timeout_s) as client:
            return await client.post(url, content=content, headers=headers)

    async def _request(self, payload: list[Any]) -> Any:
        """
        Sign and send one operation, returning the unwrapped `data` field.

        Raises:
            RaukValidationError: If the API reports constraint violations
            RaukAuthenticationError: On 401/403 responses
            RaukNetworkError: On 5xx responses or connection failures
            RaukApiError: On any other non-success response
            RaukError: On any other unexpected failure
        """
        # Signature and URL both come from this snapshot
        config = self._config
        operation = payload[0]

        try:
            signed = sign_payload(config, payload)

            logger.debug(
                "Sending inventory request",
                extra={"operation": operation, "url": config.query_url},
            )
            response = await self._post(config.query_url, signed)
            logger.debug(
                "Received inventory response",
                extra={"operation": operation, "status_code": response.status_code},
            )

            if not response.is_success:
                error = parse_api_error(response.status_code, _error_body(response))
                logger.warning(
                    "Inventory request failed",
                    extra={
                        "operation": operation,
                        "status_code": response.status_code,
                        "error_type": error.name,
                    },
                )
                raise error

            envelope = response.json()
            if not isinstance(envelope, Mapping):
                raise TypeError(
                    f"Expected a JSON object response, got {type(envelope).__name__}"
                )
            return envelope.get("data")

        except RaukError:
            raise
        except httpx.TransportError as e:
            logger.warning(
                "Inventory request could not be sent",
                extra={"operation": operation, "error": str(e)},
            )
            raise RaukNetworkError(
                NETWORK_ERROR_MESSAGE,
                status_code=0,
                context={"originalError": str(e)},
            ) from e
        except Exception as e:
            logger.error(
                "Unexpected error during inventory request",
                extra={"operation": operation, "error_type": type(e).__name__},
            )
            raise RaukError(
                "Unexpected error occurred during API request",
                status_code=0,
                context={"originalError": str(e)},
            ) from e

    async def create(
        self,
        item: Mapping[str, Any],
        options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """
        Create a new inventory item.

        Example:
            >>> await client.create({
            ...     "entities": {"apiId": "123", "entityId": "456",
            ...                  "factoryId": "789", "brandId": "101"},
            ...     "sku": "ITEM-001",
            ...     "packageQuantity": 10,
            ...     "color": {"name": "Red"},
            ...     "currentLocation": {"id": "warehouse-1"},
            ... })
        """
        return await self._request(
            _build_payload(OperationTag.INSERT_ONE, item, options=options)
        )

    async def find(
        self,
        query: Query,
        options: RequestOptions | None = None,
    ) -> list[dict[str, Any]]:
        """
        Find inventory items matching a query.

        Example:
            >>> await client.find(
            ...     {"entities.factoryId": "factory-789", "packageQuantity": {"$gte": 10}},
            ...     {"limit": 20, "sort": {"createdAt": -1}},
            ... )
        """
        return await self._request(
            _build_payload(OperationTag.FIND, query, options=options)
        )

    async def find_one(
        self,
        query: Query,
        options: RequestOptions | None = None,
    ) -> dict[str, Any] | None:
        """
        Find a single inventory item.

        Sent as a `find` with limit 1. Returns None if nothing matches.

        Raises:
            RaukError: If the response data is not a list
        """
        merged: RequestOptions = {**(options or {}), "limit": 1}
        results = await self.find(query, merged)
        if results is None:
            return None
        if not isinstance(results, list):
            raise RaukError(
                "Unexpected error occurred during API request",
                status_code=0,
                context={"originalError": f"Expected a list of items, got {type(results).__name__}"},
            )
        return results[0] if results else None

    async def update(
        self,
        query: Query,
        update: Update,
        options: RequestOptions | None = None,
    ) -> UpdateResult:
        """
        Update the first inventory item matching a query.

        Example:
            >>> await client.update(
            ...     {"sku": "ITEM-001"},
            ...     {"$set": {"packageQuantity": 20}},
            ... )
        """
        return await self._request(
            _build_payload(OperationTag.FIND_ONE_AND_UPDATE, query, update, options=options)
        )

    async def update_many(
        self,
        query: Query,
        update: Update,
        options: RequestOptions | None = None,
    ) -> UpdateResult:
        """Update every inventory item matching a query."""
        return await self._request(
            _build_payload(OperationTag.UPDATE_MANY, query, update, options=options)
        )

    async def delete(
        self,
        query: Query,
        options: RequestOptions | None = None,
    ) -> DeleteResult:
        """
        Mark an inventory item as deleted.

        This is a soft delete: the item is updated with deleted.status = true
        and stays in the inventory. Use delete_one or delete_many to remove
        items.
        """
        return await self._request(
            _build_payload(
                OperationTag.FIND_ONE_AND_UPDATE,
                query,
                SOFT_DELETE_UPDATE,
                options=options,
            )
        )

    async def delete_one(
        self,
        query: Query,
        options: RequestOptions | None = None,
    ) -> DeleteResult:
        """Remove the first inventory item matching a query."""
        return await self._request(
            _build_payload(OperationTag.DELETE_ONE, query, options=options)
        )

    async def delete_many(
        self,
        query: Query,
        options: RequestOptions | None = None,
    ) -> DeleteResult:
        """Remove every inventory item matching a query."""
        return await self._request(
            _build_payload(OperationTag.DELETE_MANY, query, options=options)
        )

    async def aggregate(
        self,
        pipeline: Pipeline,
        options: RequestOptions | None = None,
    ) -> list[Any]:
        """
        Run an aggregation pipeline.

        Example:
            >>> await client.aggregate([
            ...     {"$match": {"entities.factoryId": "factory-123"}},
            ...     {"$group": {"_id": "$sku", "count": {"$sum": 1}}},
            ... ])
        """
        return await self._request(
            _build_payload(OperationTag.AGGREGATE, pipeline, options=options)
        )

    async def bulk_write(
        self,
        operations: Sequence[BulkOperation],
        options: RequestOptions | None = None,
    ) -> Any:
        """
        Send several write operations in one request.

        Example:
            >>> await client.bulk_write([
            ...     {"updateOne": {"filter": {"sku": "ITEM-001"},
            ...                    "update": {"packageQuantity": 20}}},
            ... ])
        """
        return await self._request(
            _build_payload(OperationTag.BULK_WRITE, list(operations), options=options)
        )

    async def update_batch(
        self,
        updates: Sequence[tuple[Query, Update]],
        options: RequestOptions | None = None,
    ) -> Any:
        """
        Apply a batch of (query, update) pairs with a single bulk_write.

        Example:
            >>> await client.update_batch([
            ...     ({"sku": "ITEM-001"}, {"packageQuantity": 20}),
            ...     ({"sku": "ITEM-002"}, {"currentLocation": {"id": "warehouse-2"}}),
            ... ])
        """
        operations = [
            {"updateOne": {"filter": query, "update": update}}
            for query, update in updates
        ]
        return await self.bulk_write(operations, options)
