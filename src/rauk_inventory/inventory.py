"""
Process-wide convenience handle over a single RaukInventoryClient.

Passing a RaukInventoryClient around explicitly is the recommended usage.
RaukInventory only forwards to one registered client so that scripts can
call operations without threading the client through:

    RaukInventory.initialize(api_key_id=..., api_secret=..., api_public_key=...)
    items = await RaukInventory.find({"sku": "ITEM-001"})
"""

from typing import Any, Sequence

from .client import RaukInventoryClient
from .models import (
    DEFAULT_BASE_URL,
    BulkOperation,
    DeleteResult,
    Pipeline,
    Query,
    RequestOptions,
    Update,
    UpdateResult,
)

NOT_INITIALIZED_MESSAGE = (
    'RaukInventory must be initialized with "RaukInventory.initialize(...)" '
    "before calling class methods."
)


class RaukInventory:
    """Class-level access to the registered RaukInventoryClient."""

    _instance: RaukInventoryClient | None = None

    def __init__(self) -> None:
        raise TypeError(
            "RaukInventory is not instantiable; use RaukInventory.initialize() "
            "or create a RaukInventoryClient"
        )

    @classmethod
    def initialize(
        cls,
        api_key_id: str,
        api_secret: str,
        api_public_key: str,
        api_base_url: str = DEFAULT_BASE_URL,
        **kwargs: Any,
    ) -> RaukInventoryClient:
        """
        Create and register the process-wide client.

        Raises:
            RuntimeError: If a client is already registered
            ValueError: If the credentials are missing or malformed
        """
        cls._ensure_unregistered()
        client = RaukInventoryClient(
            api_key_id=api_key_id,
            api_secret=api_secret,
            api_public_key=api_public_key,
            api_base_url=api_base_url,
            **kwargs,
        )
        cls._instance = client
        return client

    @classmethod
    def register(cls, client: RaukInventoryClient) -> RaukInventoryClient:
        """Register an existing client as the process-wide client."""
        cls._ensure_unregistered()
        cls._instance = client
        return client

    @classmethod
    def reset(cls) -> None:
        """Forget the registered client. Mainly useful in tests."""
        cls._instance = None

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._instance is not None

    @classmethod
    def instance(cls) -> RaukInventoryClient:
        if cls._instance is None:
            raise RuntimeError(NOT_INITIALIZED_MESSAGE)
        return cls._instance

    @classmethod
    def _ensure_unregistered(cls) -> None:
        if cls._instance is not None:
            raise RuntimeError(
                "RaukInventory is already initialized. Use the existing instance."
            )

    @classmethod
    def set_config(
        cls,
        api_key_id: str,
        api_secret: str,
        api_public_key: str,
        api_base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        cls.instance().set_config(
            api_key_id=api_key_id,
            api_secret=api_secret,
            api_public_key=api_public_key,
            api_base_url=api_base_url,
        )

    @classmethod
    async def create(
        cls, item: dict[str, Any], options: RequestOptions | None = None
    ) -> dict[str, Any]:
        return await cls.instance().create(item, options)

    @classmethod
    async def find(
        cls, query: Query, options: RequestOptions | None = None
    ) -> list[dict[str, Any]]:
        return await cls.instance().find(query, options)

    @classmethod
    async def find_one(
        cls, query: Query, options: RequestOptions | None = None
    ) -> dict[str, Any] | None:
        return await cls.instance().find_one(query, options)

    @classmethod
    async def update(
        cls, query: Query, update: Update, options: RequestOptions | None = None
    ) -> UpdateResult:
        return await cls.instance().update(query, update, options)

    @classmethod
    async def update_many(
        cls, query: Query, update: Update, options: RequestOptions | None = None
    ) -> UpdateResult:
        return await cls.instance().update_many(query, update, options)

    @classmethod
    async def delete(
        cls, query: Query, options: RequestOptions | None = None
    ) -> DeleteResult:
        return await cls.instance().delete(query, options)

    @classmethod
    async def delete_one(
        cls, query: Query, options: RequestOptions | None = None
    ) -> DeleteResult:
        return await cls.instance().delete_one(query, options)

    @classmethod
    async def delete_many(
        cls, query: Query, options: RequestOptions | None = None
    ) -> DeleteResult:
        return await cls.instance().delete_many(query, options)

    @classmethod
    async def aggregate(
        cls, pipeline: Pipeline, options: RequestOptions | None = None
    ) -> list[Any]:
        return await cls.instance().aggregate(pipeline, options)

    @classmethod
    async def bulk_write(
        cls, operations: Sequence[BulkOperation], options: RequestOptions | None = None
    ) -> Any:
        return await cls.instance().bulk_write(operations, options)

    @classmethod
    async def update_batch(
        cls,
        updates: Sequence[tuple[Query, Update]],
        options: RequestOptions | None = None,
    ) -> Any:
        return await cls.instance().update_batch(updates, options)
